"""
Deck loading: JSON slide decks and the built-in demo deck.
"""

# Standard Library
import dataclasses
import json
import math
import pathlib

# local repo modules
import grid_slide_generator as gsg
import grid_slide_generator.config
import grid_slide_generator.content
import grid_slide_generator.errors


GridConfig = gsg.config.GridConfig
Span = gsg.content.Span
Block = gsg.content.Block
Slide = gsg.content.Slide
ContentItem = gsg.content.ContentItem
NEWLINE = gsg.content.NEWLINE
DeckFormatError = gsg.errors.DeckFormatError

DEFAULT_BASE_SIZE = gsg.config.DEFAULT_BASE_SIZE
DEFAULT_GRID_COLUMNS = gsg.config.DEFAULT_GRID_COLUMNS
DEFAULT_GRID_ROWS = gsg.config.DEFAULT_GRID_ROWS
DEFAULT_LINE_SPACING = gsg.config.DEFAULT_LINE_SPACING
DEFAULT_COLOR = gsg.config.DEFAULT_COLOR
STYLE_REGULAR = gsg.config.STYLE_REGULAR
STYLE_BOLD = gsg.config.STYLE_BOLD
ALIGN_TOP = gsg.config.ALIGN_TOP
ALIGN_BOTTOM = gsg.config.ALIGN_BOTTOM
ADVANCE_CHARS = gsg.config.ADVANCE_CHARS


@dataclasses.dataclass
class Deck:
	grid: GridConfig
	slides: list[Slide]
	font_paths: dict[str, pathlib.Path | None] = dataclasses.field(default_factory=dict)
	default_style: str = STYLE_REGULAR
	default_color: gsg.content.Color = DEFAULT_COLOR
	advance_mode: str = ADVANCE_CHARS


#============================================
def parse_color_value(value, where: str) -> gsg.content.Color | None:
	"""
	Parse a deck color value.

	Args:
		value: Color name, hex string, [r, g, b] list, or None.
		where: Location used in error messages.

	Returns:
		Color, or None when unset.
	"""
	if value is None or isinstance(value, str):
		return value
	if isinstance(value, list) and len(value) == 3:
		if all(isinstance(channel, (int, float)) for channel in value):
			return (float(value[0]), float(value[1]), float(value[2]))
	raise DeckFormatError(f"{where}: color must be a name, hex string, or [r, g, b]")


#============================================
def parse_number(entry: dict, key: str, default_value: float, where: str) -> float:
	"""
	Read an optional numeric field.

	Args:
		entry: JSON object.
		key: Field name.
		default_value: Value when the field is missing.
		where: Location used in error messages.

	Returns:
		Field value as float.
	"""
	value = entry.get(key, default_value)
	if isinstance(value, bool) or not isinstance(value, (int, float)):
		raise DeckFormatError(f"{where}: {key} must be a number")
	return float(value)


#============================================
def parse_grid(entry: dict) -> GridConfig:
	"""
	Parse the grid section: whole positive cell counts and a positive base size.

	Args:
		entry: JSON grid object.

	Returns:
		GridConfig.
	"""
	counts = {}
	for key, default_value in (("columns", DEFAULT_GRID_COLUMNS), ("rows", DEFAULT_GRID_ROWS)):
		value = parse_number(entry, key, default_value, "grid")
		if not value.is_integer() or value <= 0:
			raise DeckFormatError(f"grid: {key} must be a positive whole number, got {entry.get(key)!r}")
		counts[key] = int(value)
	base_size = parse_number(entry, "base_size", DEFAULT_BASE_SIZE, "grid")
	if not math.isfinite(base_size) or base_size <= 0:
		raise DeckFormatError(f"grid: base_size must be positive, got {base_size!r}")
	return GridConfig(columns=counts["columns"], rows=counts["rows"], base_size=base_size)


#============================================
def parse_content_item(entry: dict, where: str) -> ContentItem:
	"""
	Parse one content entry into a Span or Newline.

	Args:
		entry: JSON object like {"text": "..."} or {"newline": true}.
		where: Location used in error messages.

	Returns:
		Content item.
	"""
	if not isinstance(entry, dict):
		raise DeckFormatError(f"{where}: content entry must be an object")
	if entry.get("newline"):
		return NEWLINE
	text = entry.get("text")
	if not isinstance(text, str):
		raise DeckFormatError(f"{where}: content entry needs a text string or newline")
	return Span(
		text=text,
		style=entry.get("style"),
		size_ratio=parse_number(entry, "size", 1.0, where),
		color=parse_color_value(entry.get("color"), where),
	)


#============================================
def parse_block(entry: dict, where: str) -> Block:
	"""
	Parse one positioned block.

	Args:
		entry: JSON block object.
		where: Location used in error messages.

	Returns:
		Block.
	"""
	if not isinstance(entry, dict):
		raise DeckFormatError(f"{where}: block must be an object")
	if "content" in entry:
		items = entry["content"]
		if not isinstance(items, list):
			raise DeckFormatError(f"{where}: content must be a list")
		content = [
			parse_content_item(item, f"{where} item {index}")
			for index, item in enumerate(items)
		]
	elif isinstance(entry.get("text"), str):
		content = gsg.content.text_to_content(
			entry["text"],
			style=entry.get("style"),
			size_ratio=parse_number(entry, "size", 1.0, where),
			color=parse_color_value(entry.get("color"), where),
		)
	else:
		raise DeckFormatError(f"{where}: block needs content or text")
	align = entry.get("align", ALIGN_TOP)
	if not isinstance(align, str):
		raise DeckFormatError(f"{where}: align must be a string")
	return Block(
		content=content,
		col=parse_number(entry, "col", 0.0, where),
		row=parse_number(entry, "row", 0.0, where),
		line_spacing=parse_number(entry, "line_spacing", DEFAULT_LINE_SPACING, where),
		align=align,
	)


#============================================
def parse_deck(data: dict, base_dir: pathlib.Path) -> Deck:
	"""
	Parse a deck document.

	Args:
		data: Decoded JSON document.
		base_dir: Directory that relative font paths resolve against.

	Returns:
		Deck.
	"""
	if not isinstance(data, dict):
		raise DeckFormatError("deck must be a JSON object")
	grid_entry = data.get("grid", {})
	if not isinstance(grid_entry, dict):
		raise DeckFormatError("grid must be an object")
	grid = parse_grid(grid_entry)

	font_paths: dict[str, pathlib.Path | None] = {}
	fonts_entry = data.get("fonts", {})
	if not isinstance(fonts_entry, dict):
		raise DeckFormatError("fonts must be an object")
	for style, value in fonts_entry.items():
		if not isinstance(value, str):
			raise DeckFormatError(f"fonts: path for {style!r} must be a string")
		font_path = pathlib.Path(value)
		if not font_path.is_absolute():
			font_path = base_dir / font_path
		font_paths[style] = font_path

	slides_entry = data.get("slides")
	if not isinstance(slides_entry, list):
		raise DeckFormatError("slides must be a list")
	slides: list[Slide] = []
	for slide_index, slide_entry in enumerate(slides_entry, start=1):
		if not isinstance(slide_entry, dict) or not isinstance(slide_entry.get("blocks"), list):
			raise DeckFormatError(f"slide {slide_index}: blocks must be a list")
		blocks = [
			parse_block(block_entry, f"slide {slide_index} block {block_index}")
			for block_index, block_entry in enumerate(slide_entry["blocks"], start=1)
		]
		slides.append(Slide(blocks=blocks))

	return Deck(
		grid=grid,
		slides=slides,
		font_paths=font_paths,
		default_style=data.get("default_style", STYLE_REGULAR),
		default_color=parse_color_value(data.get("default_color", DEFAULT_COLOR), "default_color"),
		advance_mode=str(data.get("advance_mode", ADVANCE_CHARS)).upper(),
	)


#============================================
def load_deck(path: pathlib.Path) -> Deck:
	"""
	Load a deck JSON file.

	Args:
		path: Deck file path.

	Returns:
		Deck.
	"""
	try:
		text = path.read_text(encoding="utf-8")
	except (OSError, UnicodeDecodeError) as error:
		raise DeckFormatError(f"{path}: cannot read deck: {error}") from error
	try:
		data = json.loads(text)
	except json.JSONDecodeError as error:
		raise DeckFormatError(f"{path}: invalid JSON: {error}") from error
	return parse_deck(data, path.parent)


#============================================
def build_demo_deck() -> Deck:
	"""
	Build the demo deck: a title slide and a grid calibration slide.

	Returns:
		Deck.
	"""
	title_block = Block(
		content=[
			Span("Grid Slide", style=STYLE_BOLD, size_ratio=2.0, color="blue"),
			Span(" demo", size_ratio=1.0, color="gray"),
			NEWLINE,
			Span("Text laid out on a 32 x 18 grid"),
			NEWLINE,
			NEWLINE,
			Span("small", size_ratio=0.5),
			Span(" and ", size_ratio=1.0),
			Span("LARGE", style=STYLE_BOLD, size_ratio=1.5, color="red"),
		],
		col=1.0,
		row=1.0,
		line_spacing=DEFAULT_LINE_SPACING,
		align=ALIGN_BOTTOM,
	)
	title_slide = Slide(blocks=[title_block])

	numbered: list[ContentItem] = []
	for count in range(DEFAULT_GRID_ROWS - 2):
		if numbered:
			numbered.append(NEWLINE)
		numbered.append(Span(f"Line {count + 1} text"))
	calibration_slide = Slide(
		blocks=[
			Block(content=numbered, col=0.0, row=0.0, line_spacing=1.0),
			Block(content=[Span("あ" * 31 + "い")], col=0.0, row=16.0, line_spacing=1.0),
			Block(content=[Span("a" * 63 + "i")], col=0.0, row=17.0, line_spacing=1.0),
		]
	)

	grid = GridConfig(
		columns=DEFAULT_GRID_COLUMNS,
		rows=DEFAULT_GRID_ROWS,
		base_size=DEFAULT_BASE_SIZE,
	)
	return Deck(grid=grid, slides=[title_slide, calibration_slide])
