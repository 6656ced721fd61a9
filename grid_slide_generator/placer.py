"""
Single-fragment placement.
"""

# Standard Library
import dataclasses

# local repo modules
import grid_slide_generator as gsg
import grid_slide_generator.config
import grid_slide_generator.content
import grid_slide_generator.errors
import grid_slide_generator.grid


DrawConfig = gsg.config.DrawConfig
Span = gsg.content.Span
StyleNotFound = gsg.errors.StyleNotFound


@dataclasses.dataclass(frozen=True)
class PlacementInstruction:
	x: float
	y: float
	style: str
	font_name: str
	font_size: float
	color: tuple[float, float, float]
	text: str


#============================================
def resolve_font_name(style: str, font_map: dict[str, str]) -> str:
	"""
	Look up the font registered for a style tag.

	Args:
		style: Style tag.
		font_map: Mapping of style tag to ReportLab font name.

	Returns:
		ReportLab font name.
	"""
	font_name = font_map.get(style)
	if font_name is None:
		raise StyleNotFound(style)
	return font_name


#============================================
def place_span(span: Span, col: float, row: float, config: DrawConfig) -> PlacementInstruction:
	"""
	Compute the drawing instruction for one span at a grid position.

	The grid position is the top-left corner of the span's text box, and
	the baseline sits one font size below that corner.

	Args:
		span: Span to place.
		col: Grid column of the text box's left edge.
		row: Grid row of the text box's top edge.
		config: Draw configuration.

	Returns:
		PlacementInstruction with the anchor in page points.
	"""
	style = span.style if span.style is not None else config.default_style
	font_name = resolve_font_name(style, config.font_map)
	font_size = config.base_size * span.size_ratio

	x_pt, top_y = gsg.grid.to_page_point(col, row, config.page_height, config.base_size)
	baseline_y = top_y - font_size

	color = span.color if span.color is not None else config.default_color
	rgb = gsg.content.resolve_color(color)

	return PlacementInstruction(
		x=x_pt,
		y=baseline_y,
		style=style,
		font_name=font_name,
		font_size=font_size,
		color=rgb,
		text=span.text,
	)
