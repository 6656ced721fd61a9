"""
Line layout engine.

Content is laid out one line at a time. A measure pass collects the spans
of the line and its dominant size ratio, then a place pass positions each
span on the grid and advances the cursor to the right. Lines stack
downward by their dominant ratio times the line spacing.
"""

# Standard Library
import math
import unicodedata

# PIP3 modules
import reportlab.pdfbase.pdfmetrics

# local repo modules
import grid_slide_generator as gsg
import grid_slide_generator.config
import grid_slide_generator.content
import grid_slide_generator.errors
import grid_slide_generator.placer


DrawConfig = gsg.config.DrawConfig
Span = gsg.content.Span
Newline = gsg.content.Newline
ContentItem = gsg.content.ContentItem
Slide = gsg.content.Slide
PlacementInstruction = gsg.placer.PlacementInstruction
LayoutValidationError = gsg.errors.LayoutValidationError

ALIGN_TOP = gsg.config.ALIGN_TOP
ALIGN_MIDDLE = gsg.config.ALIGN_MIDDLE
ALIGN_BOTTOM = gsg.config.ALIGN_BOTTOM
ADVANCE_CHARS = gsg.config.ADVANCE_CHARS
ADVANCE_CELLS = gsg.config.ADVANCE_CELLS
ADVANCE_METRICS = gsg.config.ADVANCE_METRICS
ADVANCE_MODES = gsg.config.ADVANCE_MODES
MIN_LINE_RATIO = gsg.config.MIN_LINE_RATIO
NARROW_CELL_WIDTH = gsg.config.NARROW_CELL_WIDTH
WIDE_CELL_WIDTH = gsg.config.WIDE_CELL_WIDTH


#============================================
def _is_positive(value: float) -> bool:
	return isinstance(value, (int, float)) and math.isfinite(value) and value > 0.0


#============================================
def validate_color(color, where: str) -> None:
	"""
	Check that a color is a name, hex string, or RGB triple in 0.0-1.0.

	Names and hex strings are resolved later by the placer.

	Args:
		color: Color value, or None when unset.
		where: Location used in error messages.
	"""
	if color is None or isinstance(color, str):
		return
	if not isinstance(color, (tuple, list)):
		raise LayoutValidationError(f"{where} color must be a string or RGB triple, got {color!r}")
	if len(color) != 3:
		raise LayoutValidationError(f"{where} color must have 3 channels")
	for channel in color:
		if isinstance(channel, bool) or not isinstance(channel, (int, float)):
			raise LayoutValidationError(f"{where} color channel {channel!r} is not a number")
		if not 0.0 <= channel <= 1.0:
			raise LayoutValidationError(f"{where} color channel {channel!r} outside 0.0-1.0")


#============================================
def validate_config(config: DrawConfig) -> None:
	"""
	Check the draw configuration preconditions.

	Args:
		config: Draw configuration.
	"""
	if not _is_positive(config.base_size):
		raise LayoutValidationError(f"base size must be positive, got {config.base_size!r}")
	if not _is_positive(config.page_height):
		raise LayoutValidationError(f"page height must be positive, got {config.page_height!r}")
	if config.advance_mode not in ADVANCE_MODES:
		raise LayoutValidationError(f"unknown advance mode {config.advance_mode!r}")
	validate_color(config.default_color, "default")


#============================================
def validate_content(content: list[ContentItem]) -> None:
	"""
	Check that every item is a well-formed span or line break.

	Args:
		content: Content items.
	"""
	for index, item in enumerate(content):
		if isinstance(item, Newline):
			continue
		if not isinstance(item, Span):
			raise LayoutValidationError(f"item {index} is not a Span or Newline: {item!r}")
		if not isinstance(item.text, str):
			raise LayoutValidationError(f"item {index} text is not a string")
		if not _is_positive(item.size_ratio):
			raise LayoutValidationError(
				f"item {index} size ratio must be positive, got {item.size_ratio!r}"
			)
		validate_color(item.color, f"item {index}")


#============================================
def validate_block(
	content: list[ContentItem],
	config: DrawConfig,
	line_spacing: float,
	align: str,
) -> str:
	"""
	Check all layout preconditions for one block.

	Args:
		content: Content items.
		config: Draw configuration.
		line_spacing: Line spacing ratio.
		align: Vertical alignment name.

	Returns:
		Normalized alignment name.
	"""
	validate_config(config)
	if not _is_positive(line_spacing):
		raise LayoutValidationError(f"line spacing must be positive, got {line_spacing!r}")
	if not isinstance(align, str):
		raise LayoutValidationError(f"vertical alignment must be a string, got {align!r}")
	normalized = gsg.config.normalize_align(align)
	if normalized not in (ALIGN_TOP, ALIGN_MIDDLE, ALIGN_BOTTOM):
		raise LayoutValidationError(f"unknown vertical alignment {align!r}")
	validate_content(content)
	return normalized


#============================================
def measure_line(content: list[ContentItem], start_index: int) -> tuple[list[Span], float, int]:
	"""
	Collect the spans of the line starting at start_index.

	Args:
		content: Content items.
		start_index: Index of the first item of the line.

	Returns:
		Tuple of (spans, max_ratio, next_index). next_index is just past
		the Newline that closed the line, or len(content).
	"""
	spans: list[Span] = []
	max_ratio = MIN_LINE_RATIO
	index = start_index
	while index < len(content):
		item = content[index]
		index += 1
		if isinstance(item, Newline):
			break
		spans.append(item)
		max_ratio = max(max_ratio, item.size_ratio)
	return (spans, max_ratio, index)


#============================================
def compute_vertical_offset(max_ratio: float, size_ratio: float, align: str) -> float:
	"""
	Compute a span's offset below the line top, in grid rows.

	Args:
		max_ratio: Dominant size ratio of the line.
		size_ratio: Size ratio of the span.
		align: Normalized vertical alignment.

	Returns:
		Offset in grid rows.
	"""
	if align == ALIGN_MIDDLE:
		return (max_ratio - size_ratio) / 2.0
	if align == ALIGN_BOTTOM:
		return max_ratio - size_ratio
	return 0.0


#============================================
def count_cells(text: str) -> float:
	"""
	Count monospace grid cells, with wide characters taking a full cell.

	Args:
		text: Text content.

	Returns:
		Width in cells at size ratio 1.0.
	"""
	width = 0.0
	for char in text:
		if unicodedata.east_asian_width(char) in ("W", "F"):
			width += WIDE_CELL_WIDTH
		else:
			width += NARROW_CELL_WIDTH
	return width


#============================================
def compute_advance(span: Span, instruction: PlacementInstruction, config: DrawConfig) -> float:
	"""
	Compute how far the cursor moves right after a span.

	CHARS counts code points, an approximation that ignores glyph widths.

	Args:
		span: Placed span.
		instruction: The span's placement instruction.
		config: Draw configuration.

	Returns:
		Advance in grid columns.
	"""
	if config.advance_mode == ADVANCE_CELLS:
		return count_cells(span.text) * span.size_ratio
	if config.advance_mode == ADVANCE_METRICS:
		width = reportlab.pdfbase.pdfmetrics.stringWidth(
			span.text,
			instruction.font_name,
			instruction.font_size,
		)
		return width / config.base_size
	return len(span.text) * span.size_ratio


#============================================
def layout_block(
	content: list[ContentItem],
	start_col: float,
	start_row: float,
	config: DrawConfig,
	line_spacing: float = 1.0,
	align: str = ALIGN_TOP,
) -> list[PlacementInstruction]:
	"""
	Lay out a block of content starting at a grid position.

	Args:
		content: Content items.
		start_col: Grid column of the block's left edge.
		start_row: Grid row of the block's top edge.
		config: Draw configuration.
		line_spacing: Line spacing ratio applied to each line's height.
		align: Vertical alignment of smaller spans within a line.

	Returns:
		Placement instructions in emission order.
	"""
	align = validate_block(content, config, line_spacing, align)
	instructions: list[PlacementInstruction] = []
	current_row = start_row
	index = 0
	while index < len(content):
		spans, max_ratio, next_index = measure_line(content, index)

		current_col = start_col
		for span in spans:
			offset = compute_vertical_offset(max_ratio, span.size_ratio, align)
			instruction = gsg.placer.place_span(span, current_col, current_row + offset, config)
			instructions.append(instruction)
			current_col += compute_advance(span, instruction, config)

		current_row += max_ratio * line_spacing
		index = next_index
	return instructions


#============================================
def block_height(content: list[ContentItem], line_spacing: float = 1.0) -> float:
	"""
	Compute the number of grid rows a block advances.

	Args:
		content: Content items.
		line_spacing: Line spacing ratio.

	Returns:
		Height in grid rows.
	"""
	if not _is_positive(line_spacing):
		raise LayoutValidationError(f"line spacing must be positive, got {line_spacing!r}")
	validate_content(content)
	height = 0.0
	index = 0
	while index < len(content):
		_spans, max_ratio, index = measure_line(content, index)
		height += max_ratio * line_spacing
	return height


#============================================
def layout_slide(slide: Slide, config: DrawConfig) -> list[PlacementInstruction]:
	"""
	Lay out every block of a slide.

	Args:
		slide: Slide to lay out.
		config: Draw configuration.

	Returns:
		Placement instructions for the whole slide, block by block.
	"""
	instructions: list[PlacementInstruction] = []
	for block in slide.blocks:
		instructions.extend(
			layout_block(
				block.content,
				block.col,
				block.row,
				config,
				line_spacing=block.line_spacing,
				align=block.align,
			)
		)
	return instructions


#============================================
def layout_deck(slides: list[Slide], config: DrawConfig) -> list[list[PlacementInstruction]]:
	"""
	Lay out every slide before returning any of them.

	Args:
		slides: Slides in page order.
		config: Draw configuration.

	Returns:
		One instruction list per slide.
	"""
	return [layout_slide(slide, config) for slide in slides]
