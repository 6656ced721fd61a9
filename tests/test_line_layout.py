import pytest
import reportlab.pdfbase.pdfmetrics

import grid_slide_generator.config
import grid_slide_generator.content
import grid_slide_generator.errors
import grid_slide_generator.layout


Span = grid_slide_generator.content.Span
Block = grid_slide_generator.content.Block
Slide = grid_slide_generator.content.Slide
NEWLINE = grid_slide_generator.content.NEWLINE
layout_block = grid_slide_generator.layout.layout_block

PAGE_HEIGHT = 432.0
BASE_SIZE = 24.0


#============================================
def build_config(**overrides) -> grid_slide_generator.config.DrawConfig:
	"""
	Build a DrawConfig for the default 32 x 18 slide.
	"""
	values = {
		"page_height": PAGE_HEIGHT,
		"base_size": BASE_SIZE,
		"font_map": dict(grid_slide_generator.config.DEFAULT_FONT_MAP),
	}
	values.update(overrides)
	return grid_slide_generator.config.DrawConfig(**values)


#============================================
def grid_position(instruction, config) -> tuple[float, float]:
	"""
	Recover the grid (col, row) of an instruction's text box corner.

	Args:
		instruction: PlacementInstruction.
		config: DrawConfig used for layout.

	Returns:
		Tuple of (col, row).
	"""
	col = instruction.x / config.base_size
	row = (config.page_height - instruction.y - instruction.font_size) / config.base_size
	return (col, row)


#============================================
def test_unit_lines_advance_one_row_without_drift() -> None:
	"""
	Ensure unit ratio lines land on whole rows, however many there are.
	"""
	config = build_config(page_height=1000.0, base_size=1.0)
	content = []
	for index in range(200):
		if content:
			content.append(NEWLINE)
		content.append(Span(f"line {index}"))
	instructions = layout_block(content, 0.0, 0.0, config, line_spacing=1.0)
	assert len(instructions) == 200
	for index, instruction in enumerate(instructions):
		col, row = grid_position(instruction, config)
		assert col == 0.0
		assert row == pytest.approx(float(index), abs=1e-9)
	assert grid_slide_generator.layout.block_height(content, 1.0) == pytest.approx(200.0)


#============================================
def test_top_alignment_offset_is_zero() -> None:
	"""
	Ensure TOP alignment puts every span on the line top.
	"""
	config = build_config()
	content = [Span("a", size_ratio=0.5), Span("B", size_ratio=3.0), Span("c", size_ratio=1.25)]
	instructions = layout_block(content, 0.0, 4.0, config, align="TOP")
	for instruction in instructions:
		_col, row = grid_position(instruction, config)
		assert row == pytest.approx(4.0)


#============================================
def test_middle_and_bottom_offsets() -> None:
	"""
	Ensure smaller spans are offset by half or all of the ratio gap.
	"""
	config = build_config()
	content = [Span("s", size_ratio=1.0), Span("L", size_ratio=3.0)]
	cases = [
		("MIDDLE", 1.0),
		("center", 1.0),
		("BOTTOM", 2.0),
		("bottom", 2.0),
	]
	for align, expected in cases:
		small, large = layout_block(content, 0.0, 0.0, config, align=align)
		assert grid_position(small, config)[1] == pytest.approx(expected)
		assert grid_position(large, config)[1] == pytest.approx(0.0)


#============================================
def test_bottom_alignment_shares_baseline() -> None:
	"""
	Ensure BOTTOM alignment gives every span in a line the same baseline.
	"""
	config = build_config()
	content = [Span("a", size_ratio=0.5), Span("b", size_ratio=2.0), Span("c")]
	instructions = layout_block(content, 1.0, 1.0, config, align="BOTTOM")
	baselines = {round(instruction.y, 9) for instruction in instructions}
	assert len(baselines) == 1


#============================================
def test_offsets_depend_only_on_own_line() -> None:
	"""
	Ensure a tall span on one line does not shift spans on another line.
	"""
	config = build_config()
	content = [Span("BIG", size_ratio=4.0), NEWLINE, Span("a", size_ratio=0.5), Span("b")]
	instructions = layout_block(content, 0.0, 0.0, config, line_spacing=1.0, align="BOTTOM")
	_col, row_a = grid_position(instructions[1], config)
	_col, row_b = grid_position(instructions[2], config)
	assert row_a == pytest.approx(4.0 + 0.5)
	assert row_b == pytest.approx(4.0)


#============================================
def test_column_advance_is_additive() -> None:
	"""
	Ensure each span starts where the previous span's advance ended.
	"""
	config = build_config()
	content = [Span("abc", size_ratio=2.0), Span("de", size_ratio=0.5), Span("f")]
	instructions = layout_block(content, 3.0, 0.0, config)
	cols = [grid_position(instruction, config)[0] for instruction in instructions]
	assert cols[0] == pytest.approx(3.0)
	assert cols[1] == pytest.approx(3.0 + 3 * 2.0)
	assert cols[2] == pytest.approx(3.0 + 3 * 2.0 + 2 * 0.5)


#============================================
def test_multibyte_characters_count_once() -> None:
	"""
	Ensure CHARS advance counts code points rather than bytes.
	"""
	config = build_config()
	content = [Span("日本語"), Span("x")]
	instructions = layout_block(content, 0.0, 0.0, config)
	assert grid_position(instructions[1], config)[0] == pytest.approx(3.0)


#============================================
def test_new_line_resets_column() -> None:
	"""
	Ensure each line starts again at the block's start column.
	"""
	config = build_config()
	content = [Span("abcdef"), NEWLINE, Span("g")]
	instructions = layout_block(content, 2.0, 0.0, config)
	assert grid_position(instructions[1], config) == pytest.approx((2.0, 1.0))


#============================================
def test_lone_newline_is_one_blank_line() -> None:
	"""
	Ensure a single Newline advances one floor-height line and draws nothing.
	"""
	config = build_config()
	assert layout_block([NEWLINE], 0.0, 0.0, config, line_spacing=1.5) == []
	assert grid_slide_generator.layout.block_height([NEWLINE], 1.5) == pytest.approx(1.5)


#============================================
def test_consecutive_newlines_make_blank_lines() -> None:
	"""
	Ensure each extra Newline adds one blank line.
	"""
	config = build_config()
	content = [Span("a"), NEWLINE, NEWLINE, NEWLINE, Span("b")]
	instructions = layout_block(content, 0.0, 0.0, config, line_spacing=1.0)
	assert grid_position(instructions[1], config)[1] == pytest.approx(3.0)
	assert grid_slide_generator.layout.block_height(content, 1.0) == pytest.approx(4.0)


#============================================
def test_small_spans_use_unit_line_floor() -> None:
	"""
	Ensure lines of small spans still take one full row and align against it.
	"""
	config = build_config()
	content = [Span("a", size_ratio=0.5), Span("b", size_ratio=0.8), NEWLINE, Span("c", size_ratio=0.5)]
	cases = [
		("TOP", 0.0, 0.0),
		("MIDDLE", 0.25, 0.1),
		("BOTTOM", 0.5, 0.2),
	]
	for align, small_offset, medium_offset in cases:
		first, second, third = layout_block(content, 0.0, 0.0, config, line_spacing=1.2, align=align)
		assert grid_position(first, config)[1] == pytest.approx(small_offset)
		assert grid_position(second, config)[1] == pytest.approx(medium_offset)
		assert grid_position(third, config)[1] == pytest.approx(1.0 * 1.2 + small_offset)
	height = grid_slide_generator.layout.block_height(content, 1.2)
	assert height == pytest.approx(2.4)


#============================================
def test_trailing_newline_closes_last_line() -> None:
	"""
	Ensure a single trailing Newline does not add a blank line.
	"""
	assert grid_slide_generator.layout.block_height([Span("a"), NEWLINE], 1.0) == pytest.approx(1.0)
	assert grid_slide_generator.layout.block_height([Span("a"), NEWLINE, NEWLINE], 1.0) == pytest.approx(2.0)


#============================================
def test_empty_content() -> None:
	"""
	Ensure empty content lays out to nothing.
	"""
	config = build_config()
	assert layout_block([], 0.0, 0.0, config) == []
	assert grid_slide_generator.layout.block_height([]) == 0.0


#============================================
def test_title_and_body_rows() -> None:
	"""
	Ensure a tall title line pushes the body down by its ratio times spacing.
	"""
	config = build_config()
	content = [
		Span("Title", style=grid_slide_generator.config.STYLE_BOLD, size_ratio=2.0),
		NEWLINE,
		Span("Body", style=grid_slide_generator.config.STYLE_REGULAR, size_ratio=1.0),
	]
	title, body = layout_block(content, 0.0, 2.0, config, line_spacing=1.2)
	assert grid_position(title, config)[1] == pytest.approx(2.0)
	assert grid_position(body, config)[1] == pytest.approx(4.4)
	assert title.font_name == grid_slide_generator.config.DEFAULT_FONT_BOLD
	assert body.font_name == grid_slide_generator.config.DEFAULT_FONT_REGULAR


#============================================
def test_layout_is_deterministic() -> None:
	"""
	Ensure the same inputs give equal instruction lists.
	"""
	config = build_config()
	content = [
		Span("one", size_ratio=1.5, color="blue"),
		Span("two", size_ratio=0.75),
		NEWLINE,
		Span("three", color=(0.1, 0.2, 0.3)),
	]
	first = layout_block(content, 1.0, 1.0, config, line_spacing=1.3, align="MIDDLE")
	second = layout_block(content, 1.0, 1.0, config, line_spacing=1.3, align="MIDDLE")
	assert first == second
	assert first is not second


#============================================
def test_missing_style_fails_whole_block() -> None:
	"""
	Ensure an unregistered style aborts the block.
	"""
	config = build_config()
	content = [Span("ok"), NEWLINE, Span("bad", style="missing")]
	with pytest.raises(grid_slide_generator.errors.StyleNotFound):
		layout_block(content, 0.0, 0.0, config)


#============================================
def test_precondition_violations_raise() -> None:
	"""
	Ensure each precondition violation raises LayoutValidationError.
	"""
	config = build_config()
	cases = [
		([Span("a", size_ratio=0.0)], config, 1.0, "TOP"),
		([Span("a", size_ratio=-1.0)], config, 1.0, "TOP"),
		([Span("a")], config, 0.0, "TOP"),
		([Span("a")], config, -1.0, "TOP"),
		([Span("a")], config, 1.0, "SIDEWAYS"),
		([Span("a"), "b"], config, 1.0, "TOP"),
		([Span("a", color=(0.0, 1.5, 0.0))], config, 1.0, "TOP"),
		([Span("a", color=(0.0, 1.0))], config, 1.0, "TOP"),
		([Span("a", color=("r", "g", "b"))], config, 1.0, "TOP"),
		([Span("a", color=(True, 0.0, 0.0))], config, 1.0, "TOP"),
		([Span("a", color=5)], config, 1.0, "TOP"),
		([Span("a")], config, 1.0, None),
		([Span("a")], config, 1.0, 3),
		([Span("a")], build_config(default_color=(2.0, -1.0, 0.0)), 1.0, "TOP"),
		([Span("a")], build_config(default_color=("x", 0.0, 0.0)), 1.0, "TOP"),
		([Span("a")], build_config(base_size=0.0), 1.0, "TOP"),
		([Span("a")], build_config(page_height=-10.0), 1.0, "TOP"),
		([Span("a")], build_config(advance_mode="GUESS"), 1.0, "TOP"),
	]
	for content, case_config, line_spacing, align in cases:
		with pytest.raises(grid_slide_generator.errors.LayoutValidationError):
			layout_block(content, 0.0, 0.0, case_config, line_spacing=line_spacing, align=align)
	with pytest.raises(grid_slide_generator.errors.LayoutValidationError):
		grid_slide_generator.layout.block_height([Span("a")], 0.0)


#============================================
def test_cells_advance_mode() -> None:
	"""
	Ensure CELLS gives wide characters a full cell and others half a cell.
	"""
	config = build_config(advance_mode=grid_slide_generator.config.ADVANCE_CELLS)
	content = [Span("あい"), Span("ab"), Span("c", size_ratio=2.0), Span("d")]
	instructions = layout_block(content, 0.0, 0.0, config)
	cols = [grid_position(instruction, config)[0] for instruction in instructions]
	assert cols == pytest.approx([0.0, 2.0, 3.0, 4.0])
	assert grid_slide_generator.layout.count_cells("あ" * 31 + "い") == 32.0
	assert grid_slide_generator.layout.count_cells("a" * 63 + "i") == 32.0


#============================================
def test_metrics_advance_mode() -> None:
	"""
	Ensure METRICS advances by the font's string width in grid units.
	"""
	config = build_config(advance_mode=grid_slide_generator.config.ADVANCE_METRICS)
	content = [Span("WWii", size_ratio=1.5), Span("x")]
	first, second = layout_block(content, 1.0, 0.0, config)
	width = reportlab.pdfbase.pdfmetrics.stringWidth("WWii", first.font_name, first.font_size)
	assert grid_position(second, config)[0] == pytest.approx(1.0 + width / BASE_SIZE)


#============================================
def test_layout_slide_keeps_block_order() -> None:
	"""
	Ensure slide layout emits blocks in order at their own positions.
	"""
	config = build_config()
	slide = Slide(
		blocks=[
			Block(content=[Span("first")], col=1.0, row=1.0),
			Block(content=[Span("second")], col=5.0, row=10.0, align="BOTTOM"),
		]
	)
	instructions = grid_slide_generator.layout.layout_slide(slide, config)
	assert [instruction.text for instruction in instructions] == ["first", "second"]
	assert grid_position(instructions[1], config) == pytest.approx((5.0, 10.0))


#============================================
def test_layout_deck_fails_on_any_slide() -> None:
	"""
	Ensure one bad slide fails the whole deck.
	"""
	config = build_config()
	good = Slide(blocks=[Block(content=[Span("fine")])])
	bad = Slide(blocks=[Block(content=[Span("broken", style="nope")])])
	pages = grid_slide_generator.layout.layout_deck([good, good], config)
	assert len(pages) == 2
	with pytest.raises(grid_slide_generator.errors.StyleNotFound):
		grid_slide_generator.layout.layout_deck([good, bad], config)
