"""
Rendering placement instructions to PDF.
"""

# Standard Library
import json
import pathlib

# PIP3 modules
import reportlab.pdfgen.canvas

# local repo modules
import grid_slide_generator as gsg
import grid_slide_generator.config
import grid_slide_generator.fonts
import grid_slide_generator.grid
import grid_slide_generator.placer


GridConfig = gsg.config.GridConfig
DrawConfig = gsg.config.DrawConfig
RenderResult = gsg.config.RenderResult
PlacementInstruction = gsg.placer.PlacementInstruction

GRID_LINE_WIDTH = gsg.config.GRID_LINE_WIDTH
GRID_LINE_GRAY = gsg.config.GRID_LINE_GRAY


#============================================
def draw_instruction(pdf: reportlab.pdfgen.canvas.Canvas, instruction: PlacementInstruction) -> None:
	"""
	Draw one placement instruction onto the PDF canvas.

	Args:
		pdf: ReportLab canvas.
		instruction: Instruction to draw.
	"""
	pdf.setFont(instruction.font_name, instruction.font_size)
	red, green, blue = instruction.color
	pdf.setFillColorRGB(red, green, blue)
	pdf.drawString(instruction.x, instruction.y, instruction.text)


#============================================
def draw_grid_lines(pdf: reportlab.pdfgen.canvas.Canvas, grid: GridConfig) -> None:
	"""
	Draw light grid cell guides on the current page.

	Args:
		pdf: ReportLab canvas.
		grid: Grid configuration.
	"""
	page_width, page_height = gsg.grid.compute_page_size(grid.columns, grid.rows, grid.base_size)
	pdf.saveState()
	pdf.setLineWidth(GRID_LINE_WIDTH)
	pdf.setStrokeColorRGB(GRID_LINE_GRAY, GRID_LINE_GRAY, GRID_LINE_GRAY)
	for col in range(grid.columns + 1):
		x = gsg.grid.grid_to_points(col, grid.base_size)
		pdf.line(x, 0.0, x, page_height)
	for row in range(grid.rows + 1):
		_x, y = gsg.grid.to_page_point(0, row, page_height, grid.base_size)
		pdf.line(0.0, y, page_width, y)
	pdf.restoreState()


#============================================
def collect_glyph_warnings(pages: list[list[PlacementInstruction]]) -> list[str]:
	"""
	Report text that the assigned fonts cannot draw.

	Args:
		pages: Instruction lists in page order.

	Returns:
		Warning messages.
	"""
	warnings: list[str] = []
	for page_index, instructions in enumerate(pages, start=1):
		for instruction in instructions:
			missing = gsg.fonts.find_missing_glyphs(instruction.text, instruction.font_name)
			if not missing:
				continue
			warnings.append(
				f"Page {page_index}: font {instruction.font_name} has no glyph for "
				f"{''.join(missing)!r} in {instruction.text!r}"
			)
	return warnings


#============================================
def render_slides_to_pdf(
	pages: list[list[PlacementInstruction]],
	output_path: pathlib.Path,
	page_width: float,
	page_height: float,
	grid: GridConfig | None = None,
	verbose: bool = False,
) -> RenderResult:
	"""
	Render instruction lists to a PDF, one page each.

	Args:
		pages: Instruction lists in page order.
		output_path: Output PDF path.
		page_width: Page width in points.
		page_height: Page height in points.
		grid: When given, grid guides are drawn under the text.
		verbose: Print per-page progress.

	Returns:
		RenderResult.
	"""
	output_path.parent.mkdir(parents=True, exist_ok=True)
	pdf = reportlab.pdfgen.canvas.Canvas(str(output_path), pagesize=(page_width, page_height))
	total_instructions = 0
	for page_index, instructions in enumerate(pages, start=1):
		if grid is not None:
			draw_grid_lines(pdf, grid)
		for instruction in instructions:
			draw_instruction(pdf, instruction)
		total_instructions += len(instructions)
		pdf.showPage()
		if verbose:
			print(f"Page {page_index}/{len(pages)}: {len(instructions)} text runs")
	pdf.save()

	return RenderResult(
		pages=len(pages),
		instructions=total_instructions,
		warnings=collect_glyph_warnings(pages),
	)


#============================================
def write_manifest(
	manifest_path: pathlib.Path,
	pages: list[list[PlacementInstruction]],
	grid: GridConfig,
	config: DrawConfig,
	result: RenderResult,
) -> None:
	"""
	Write a manifest JSON file.

	Args:
		manifest_path: Output path.
		pages: Instruction lists in page order.
		grid: Grid configuration.
		config: Draw configuration.
		result: Render result.
	"""
	page_width, page_height = gsg.grid.compute_page_size(grid.columns, grid.rows, grid.base_size)
	data = {
		"pages": result.pages,
		"instructions": result.instructions,
		"warnings": result.warnings,
		"layout": {
			"columns": grid.columns,
			"rows": grid.rows,
			"base_size": grid.base_size,
			"page_width": page_width,
			"page_height": page_height,
			"advance_mode": config.advance_mode,
		},
		"fonts": config.font_map,
		"slides": [
			[
				{
					"x": instruction.x,
					"y": instruction.y,
					"style": instruction.style,
					"font": instruction.font_name,
					"size": instruction.font_size,
					"color": list(instruction.color),
					"text": instruction.text,
				}
				for instruction in instructions
			]
			for instructions in pages
		],
	}
	with manifest_path.open("w", encoding="utf-8") as handle:
		json.dump(data, handle, indent=2, sort_keys=True, ensure_ascii=False)
