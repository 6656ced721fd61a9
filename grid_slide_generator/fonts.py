"""
Font provider: map style tags to ReportLab fonts.
"""

# Standard Library
import pathlib

# PIP3 modules
import reportlab.pdfbase.pdfmetrics
import reportlab.pdfbase.ttfonts

# local repo modules
import grid_slide_generator as gsg
import grid_slide_generator.config
import grid_slide_generator.errors


DEFAULT_FONT_MAP = gsg.config.DEFAULT_FONT_MAP
FontLoadError = gsg.errors.FontLoadError

# Base-14 fonts use WinAnsiEncoding.
STANDARD_FONT_CODEC = "cp1252"


#============================================
def register_ttf_font(font_name: str, path: pathlib.Path) -> str:
	"""
	Register a TrueType font file with ReportLab.

	Args:
		font_name: Name to register the font under.
		path: TTF file path.

	Returns:
		Registered font name.
	"""
	if not path.is_file():
		raise FontLoadError(f"font file not found: {path}")
	try:
		font = reportlab.pdfbase.ttfonts.TTFont(font_name, str(path))
	except (OSError, reportlab.pdfbase.ttfonts.TTFError) as error:
		raise FontLoadError(f"font parse failed for {path}: {error}") from error
	reportlab.pdfbase.pdfmetrics.registerFont(font)
	return font_name


#============================================
def build_font_map(font_paths: dict[str, pathlib.Path | None] | None = None) -> dict[str, str]:
	"""
	Build the style to font name mapping.

	Styles without a font path use the Helvetica family. Each TTF is
	registered as "<style>-<file stem>" so files with the same stem, or a
	stem matching a base-14 font, stay distinct.

	Args:
		font_paths: Optional TTF path per style tag.

	Returns:
		Mapping of style tag to ReportLab font name.
	"""
	font_map = dict(DEFAULT_FONT_MAP)
	if not font_paths:
		return font_map
	for style, path in font_paths.items():
		if path is None:
			continue
		path = pathlib.Path(path)
		font_map[style] = register_ttf_font(f"{style}-{path.stem}", path)
	return font_map


#============================================
def find_missing_glyphs(text: str, font_name: str) -> list[str]:
	"""
	Find characters a font cannot draw.

	Args:
		text: Text content.
		font_name: Registered ReportLab font name.

	Returns:
		Sorted unique characters with no glyph.
	"""
	font = reportlab.pdfbase.pdfmetrics.getFont(font_name)
	missing: set[str] = set()
	char_to_glyph = None
	if isinstance(font, reportlab.pdfbase.ttfonts.TTFont):
		char_to_glyph = font.face.charToGlyph
	for char in text:
		if char.isspace():
			continue
		if char_to_glyph is not None:
			if ord(char) not in char_to_glyph:
				missing.add(char)
			continue
		try:
			char.encode(STANDARD_FONT_CODEC)
		except UnicodeEncodeError:
			missing.add(char)
	return sorted(missing)
