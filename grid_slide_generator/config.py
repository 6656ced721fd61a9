"""
Shared configuration and constants.
"""

import dataclasses


DEFAULT_BASE_SIZE = 24.0
DEFAULT_GRID_COLUMNS = 32
DEFAULT_GRID_ROWS = 18
DEFAULT_LINE_SPACING = 1.2
MIN_LINE_RATIO = 1.0

STYLE_REGULAR = "regular"
STYLE_BOLD = "bold"
STYLE_ITALIC = "italic"
STYLE_BOLD_ITALIC = "bold_italic"
BUILTIN_STYLES = (STYLE_REGULAR, STYLE_BOLD, STYLE_ITALIC, STYLE_BOLD_ITALIC)

DEFAULT_FONT_REGULAR = "Helvetica"
DEFAULT_FONT_BOLD = "Helvetica-Bold"
DEFAULT_FONT_ITALIC = "Helvetica-Oblique"
DEFAULT_FONT_BOLD_ITALIC = "Helvetica-BoldOblique"
DEFAULT_FONT_MAP = {
	STYLE_REGULAR: DEFAULT_FONT_REGULAR,
	STYLE_BOLD: DEFAULT_FONT_BOLD,
	STYLE_ITALIC: DEFAULT_FONT_ITALIC,
	STYLE_BOLD_ITALIC: DEFAULT_FONT_BOLD_ITALIC,
}

ALIGN_TOP = "TOP"
ALIGN_MIDDLE = "MIDDLE"
ALIGN_BOTTOM = "BOTTOM"
ALIGN_ALIASES = {
	"TOP": ALIGN_TOP,
	"MIDDLE": ALIGN_MIDDLE,
	"CENTER": ALIGN_MIDDLE,
	"BOTTOM": ALIGN_BOTTOM,
}

ADVANCE_CHARS = "CHARS"
ADVANCE_CELLS = "CELLS"
ADVANCE_METRICS = "METRICS"
ADVANCE_MODES = (ADVANCE_CHARS, ADVANCE_CELLS, ADVANCE_METRICS)
NARROW_CELL_WIDTH = 0.5
WIDE_CELL_WIDTH = 1.0

DEFAULT_COLOR = "black"
NAMED_COLORS = {
	"black": (0.0, 0.0, 0.0),
	"white": (1.0, 1.0, 1.0),
	"red": (0.8, 0.1, 0.1),
	"green": (0.1, 0.55, 0.2),
	"blue": (0.1, 0.3, 0.8),
	"gray": (0.5, 0.5, 0.5),
	"yellow": (0.95, 0.8, 0.1),
	"orange": (0.95, 0.5, 0.1),
}

GRID_LINE_WIDTH = 0.3
GRID_LINE_GRAY = 0.85


@dataclasses.dataclass
class GridConfig:
	columns: int
	rows: int
	base_size: float


@dataclasses.dataclass
class DrawConfig:
	page_height: float
	base_size: float
	font_map: dict[str, str]
	default_style: str = STYLE_REGULAR
	default_color: str | tuple[float, float, float] = DEFAULT_COLOR
	advance_mode: str = ADVANCE_CHARS


@dataclasses.dataclass
class RenderResult:
	pages: int
	instructions: int
	warnings: list[str]


#============================================
def normalize_align(value: str) -> str:
	"""
	Normalize an alignment name.

	Args:
		value: Alignment string like "top" or "Center".

	Returns:
		One of ALIGN_TOP, ALIGN_MIDDLE, ALIGN_BOTTOM, or the stripped
		uppercase input when it is not a known alignment.
	"""
	normalized = value.strip().upper()
	return ALIGN_ALIASES.get(normalized, normalized)
