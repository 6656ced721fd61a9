"""
Error types raised by layout, font loading, and deck parsing.
"""


class GridSlideError(Exception):
	"""
	Base class for grid slide generator errors.
	"""


class ConfigError(GridSlideError):
	"""
	A style, color, or font is not configured correctly.
	"""


class StyleNotFound(ConfigError, KeyError):
	"""
	A span references a style tag with no registered font.
	"""

	def __init__(self, style: str):
		super().__init__(style)
		self.style = style

	def __str__(self) -> str:
		return f"no font registered for style {self.style!r}"


class ColorNotFound(ConfigError, KeyError):
	"""
	A color name is not in the palette or is not a valid hex string.
	"""

	def __init__(self, color: str):
		super().__init__(color)
		self.color = color

	def __str__(self) -> str:
		return f"unknown color {self.color!r}"


class FontLoadError(ConfigError):
	"""
	A TrueType font file could not be read or registered.
	"""


class LayoutValidationError(GridSlideError, ValueError):
	"""
	Layout inputs violate a precondition.
	"""


class DeckFormatError(GridSlideError, ValueError):
	"""
	A deck document does not have the expected structure.
	"""
