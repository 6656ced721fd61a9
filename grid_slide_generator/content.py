"""
Content model: styled spans, line breaks, blocks, and colors.
"""

# Standard Library
import dataclasses

# local repo modules
import grid_slide_generator as gsg
import grid_slide_generator.config
import grid_slide_generator.errors


ALIGN_TOP = gsg.config.ALIGN_TOP
DEFAULT_LINE_SPACING = gsg.config.DEFAULT_LINE_SPACING
NAMED_COLORS = gsg.config.NAMED_COLORS
ColorNotFound = gsg.errors.ColorNotFound

Color = str | tuple[float, float, float]


@dataclasses.dataclass(frozen=True)
class Span:
	text: str
	style: str | None = None
	size_ratio: float = 1.0
	color: Color | None = None


@dataclasses.dataclass(frozen=True)
class Newline:
	pass


NEWLINE = Newline()

ContentItem = Span | Newline


@dataclasses.dataclass
class Block:
	content: list[ContentItem]
	col: float = 0.0
	row: float = 0.0
	line_spacing: float = DEFAULT_LINE_SPACING
	align: str = ALIGN_TOP


@dataclasses.dataclass
class Slide:
	blocks: list[Block] = dataclasses.field(default_factory=list)


#============================================
def parse_hex_color(value: str) -> tuple[float, float, float]:
	"""
	Parse a hex color string into RGB floats.

	Args:
		value: Color string like "#AABBCC".

	Returns:
		Tuple of (r, g, b) in 0.0-1.0 range.
	"""
	if len(value) != 7 or not value.startswith("#"):
		raise ColorNotFound(value)
	try:
		red = int(value[1:3], 16) / 255.0
		green = int(value[3:5], 16) / 255.0
		blue = int(value[5:7], 16) / 255.0
	except ValueError:
		raise ColorNotFound(value) from None
	return (red, green, blue)


#============================================
def resolve_color(color: Color) -> tuple[float, float, float]:
	"""
	Resolve a palette name, hex string, or RGB triple to RGB floats.

	Args:
		color: Named color, "#RRGGBB" string, or (r, g, b) tuple.

	Returns:
		Tuple of (r, g, b) in 0.0-1.0 range.
	"""
	if isinstance(color, str):
		if color.startswith("#"):
			return parse_hex_color(color)
		rgb = NAMED_COLORS.get(color.strip().lower())
		if rgb is None:
			raise ColorNotFound(color)
		return rgb
	red, green, blue = color
	return (float(red), float(green), float(blue))


#============================================
def text_to_content(
	text: str,
	style: str | None = None,
	size_ratio: float = 1.0,
	color: Color | None = None,
) -> list[ContentItem]:
	"""
	Split plain text on newlines into spans and line breaks.

	Args:
		text: Text that may contain "\\n" line breaks.
		style: Style tag for every span.
		size_ratio: Size ratio for every span.
		color: Color for every span.

	Returns:
		Content items with one Span per non-empty line and one Newline
		between consecutive lines.
	"""
	content: list[ContentItem] = []
	lines = text.split("\n")
	for index, line in enumerate(lines):
		if line:
			content.append(Span(line, style=style, size_ratio=size_ratio, color=color))
		if index < len(lines) - 1:
			content.append(NEWLINE)
	return content


#============================================
def count_spans(content: list[ContentItem]) -> int:
	"""
	Count the spans in a content sequence.

	Args:
		content: Content items.

	Returns:
		Number of Span items.
	"""
	return sum(1 for item in content if isinstance(item, Span))
