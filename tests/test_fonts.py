import pathlib

import pytest
import reportlab
import reportlab.pdfbase.pdfmetrics
import reportlab.pdfbase.ttfonts

import grid_slide_generator.config
import grid_slide_generator.errors
import grid_slide_generator.fonts


VERA_PATH = pathlib.Path(reportlab.__file__).parent / "fonts" / "Vera.ttf"


#============================================
def test_default_font_map_uses_helvetica_family() -> None:
	"""
	Ensure styles without a TTF fall back to the base-14 Helvetica family.
	"""
	font_map = grid_slide_generator.fonts.build_font_map()
	assert font_map == grid_slide_generator.config.DEFAULT_FONT_MAP
	assert font_map is not grid_slide_generator.config.DEFAULT_FONT_MAP
	partial = grid_slide_generator.fonts.build_font_map({"bold": None})
	assert partial["bold"] == grid_slide_generator.config.DEFAULT_FONT_BOLD


#============================================
def test_missing_font_file_raises(tmp_path: pathlib.Path) -> None:
	"""
	Ensure a missing TTF raises FontLoadError.
	"""
	with pytest.raises(grid_slide_generator.errors.FontLoadError):
		grid_slide_generator.fonts.build_font_map({"regular": tmp_path / "missing.ttf"})


#============================================
def test_corrupt_font_file_raises(tmp_path: pathlib.Path) -> None:
	"""
	Ensure a file that is not a TTF raises FontLoadError.
	"""
	bogus = tmp_path / "bogus.ttf"
	bogus.write_bytes(b"not a font at all")
	with pytest.raises(grid_slide_generator.errors.FontLoadError):
		grid_slide_generator.fonts.build_font_map({"regular": bogus})


#============================================
def test_ttf_font_registration() -> None:
	"""
	Ensure a TTF registers under a style-qualified name and reports glyph coverage.
	"""
	if not VERA_PATH.exists():
		pytest.skip("ReportLab Vera.ttf not bundled.")
	font_map = grid_slide_generator.fonts.build_font_map({"regular": VERA_PATH})
	assert font_map["regular"] == "regular-Vera"
	assert font_map["bold"] == grid_slide_generator.config.DEFAULT_FONT_BOLD
	assert grid_slide_generator.fonts.find_missing_glyphs("Hello", "regular-Vera") == []
	assert grid_slide_generator.fonts.find_missing_glyphs("Aあ", "regular-Vera") == ["あ"]


#============================================
def test_same_stem_fonts_stay_distinct(tmp_path: pathlib.Path) -> None:
	"""
	Ensure fonts sharing a file stem do not replace each other or a base-14 font.
	"""
	if not VERA_PATH.exists():
		pytest.skip("ReportLab Vera.ttf not bundled.")
	regular_dir = tmp_path / "regular"
	bold_dir = tmp_path / "bold"
	regular_dir.mkdir()
	bold_dir.mkdir()
	regular_path = regular_dir / "Helvetica.ttf"
	bold_path = bold_dir / "Helvetica.ttf"
	regular_path.write_bytes(VERA_PATH.read_bytes())
	bold_path.write_bytes(VERA_PATH.read_bytes())
	font_map = grid_slide_generator.fonts.build_font_map({"regular": regular_path, "bold": bold_path})
	assert font_map["regular"] == "regular-Helvetica"
	assert font_map["bold"] == "bold-Helvetica"
	# The base-14 Helvetica is still the standard font.
	font_name = grid_slide_generator.config.DEFAULT_FONT_REGULAR
	assert grid_slide_generator.fonts.find_missing_glyphs("Grüße", font_name) == []
	assert not isinstance(reportlab.pdfbase.pdfmetrics.getFont(font_name), reportlab.pdfbase.ttfonts.TTFont)


#============================================
def test_standard_font_glyph_coverage() -> None:
	"""
	Ensure base-14 fonts cover WinAnsi text only.
	"""
	font_name = grid_slide_generator.config.DEFAULT_FONT_REGULAR
	assert grid_slide_generator.fonts.find_missing_glyphs("Grüße €5", font_name) == []
	assert grid_slide_generator.fonts.find_missing_glyphs("あ a い", font_name) == ["あ", "い"]
