"""
CLI entry points for grid slide generation.
"""

# Standard Library
import argparse
import pathlib
import time

# local repo modules
import grid_slide_generator as gsg
import grid_slide_generator.config
import grid_slide_generator.deck
import grid_slide_generator.errors
import grid_slide_generator.fonts
import grid_slide_generator.grid
import grid_slide_generator.layout
import grid_slide_generator.render


GridConfig = gsg.config.GridConfig
DrawConfig = gsg.config.DrawConfig
Deck = gsg.deck.Deck

ADVANCE_MODES = gsg.config.ADVANCE_MODES
STYLE_REGULAR = gsg.config.STYLE_REGULAR
STYLE_BOLD = gsg.config.STYLE_BOLD
STYLE_ITALIC = gsg.config.STYLE_ITALIC
STYLE_BOLD_ITALIC = gsg.config.STYLE_BOLD_ITALIC


#============================================
def build_font_paths(args: argparse.Namespace, deck: Deck) -> dict[str, pathlib.Path | None]:
	"""
	Merge deck font paths with CLI overrides.

	Args:
		args: Parsed argparse namespace.
		deck: Loaded deck.

	Returns:
		TTF path per style tag.
	"""
	font_paths = dict(deck.font_paths)
	overrides = {
		STYLE_REGULAR: args.font_regular,
		STYLE_BOLD: args.font_bold,
		STYLE_ITALIC: args.font_italic,
		STYLE_BOLD_ITALIC: args.font_bold_italic,
	}
	for style, value in overrides.items():
		if value is not None:
			font_paths[style] = pathlib.Path(value)
	return font_paths


#============================================
def build_draw_config(args: argparse.Namespace, deck: Deck, font_map: dict[str, str]) -> DrawConfig:
	"""
	Build the draw config from CLI args and the deck.

	Args:
		args: Parsed argparse namespace.
		deck: Loaded deck.
		font_map: Style to font name mapping.

	Returns:
		DrawConfig.
	"""
	_page_width, page_height = gsg.grid.compute_page_size(
		deck.grid.columns,
		deck.grid.rows,
		deck.grid.base_size,
	)
	advance_mode = deck.advance_mode
	if args.advance_mode is not None:
		advance_mode = args.advance_mode.upper()
	return DrawConfig(
		page_height=page_height,
		base_size=deck.grid.base_size,
		font_map=font_map,
		default_style=deck.default_style,
		default_color=deck.default_color,
		advance_mode=advance_mode,
	)


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Args:
		argv: Argument list, defaults to sys.argv.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Lay out text on a page grid and write PDF slides.")
	parser.add_argument("deck", nargs="?", default=None, help="Deck JSON file. Renders the demo deck when omitted.")

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-o", "--output", dest="output_path", required=True, help="Output PDF path.")
	output_group.add_argument("-m", "--manifest", dest="manifest_path", default=None, help="Output manifest JSON path.")

	font_group = parser.add_argument_group("Fonts")
	font_group.add_argument("--font-regular", dest="font_regular", default=None, help="TTF for the regular style.")
	font_group.add_argument("--font-bold", dest="font_bold", default=None, help="TTF for the bold style.")
	font_group.add_argument("--font-italic", dest="font_italic", default=None, help="TTF for the italic style.")
	font_group.add_argument("--font-bold-italic", dest="font_bold_italic", default=None, help="TTF for the bold italic style.")

	behavior_group = parser.add_argument_group("Behavior")
	behavior_group.add_argument("-g", "--draw-grid", dest="draw_grid", action="store_true", help="Draw grid cell guides.")
	behavior_group.add_argument("-G", "--no-draw-grid", dest="draw_grid", action="store_false", help="Disable grid cell guides.")
	behavior_group.add_argument(
		"-a",
		"--advance-mode",
		dest="advance_mode",
		type=str.upper,
		choices=ADVANCE_MODES,
		default=None,
		help="Horizontal advance model, overrides the deck setting.",
	)

	parser.set_defaults(draw_grid=False)

	args = parser.parse_args(argv)
	return args


#============================================
def run_pipeline(args: argparse.Namespace) -> None:
	"""
	Run the full pipeline from deck to PDF.

	Every slide is laid out before the PDF is opened, so a layout error
	leaves no output file behind.

	Args:
		args: Parsed argparse namespace.
	"""
	print("Grid slide pipeline")
	print(f"Output PDF: {args.output_path}")
	if args.manifest_path:
		print(f"Manifest: {args.manifest_path}")
	print(f"Draw grid: {args.draw_grid}")

	start_time = time.perf_counter()
	if args.deck is None:
		print("Deck: built-in demo")
		deck = gsg.deck.build_demo_deck()
	else:
		print(f"Deck: {args.deck}")
		deck = gsg.deck.load_deck(pathlib.Path(args.deck))
	print(f"Slides: {len(deck.slides)}")
	print(f"Grid: {deck.grid.columns} x {deck.grid.rows} cells at {deck.grid.base_size:g} pt")

	font_map = gsg.fonts.build_font_map(build_font_paths(args, deck))
	for style in sorted(font_map):
		print(f"Font {style}: {font_map[style]}")
	config = build_draw_config(args, deck, font_map)
	print(f"Advance mode: {config.advance_mode}")

	layout_start = time.perf_counter()
	pages = gsg.layout.layout_deck(deck.slides, config)
	layout_end = time.perf_counter()

	output_path = pathlib.Path(args.output_path)
	page_width, page_height = gsg.grid.compute_page_size(
		deck.grid.columns,
		deck.grid.rows,
		deck.grid.base_size,
	)
	grid = deck.grid if args.draw_grid else None
	render_start = time.perf_counter()
	result = gsg.render.render_slides_to_pdf(
		pages,
		output_path,
		page_width,
		page_height,
		grid=grid,
		verbose=True,
	)
	render_end = time.perf_counter()
	print(f"Pages written: {result.pages}")
	print(f"Text runs placed: {result.instructions}")
	if result.warnings:
		print(f"Warnings: {len(result.warnings)}")
		for message in result.warnings:
			print(message)

	manifest_path = args.manifest_path
	if manifest_path is None:
		manifest_path = f"{output_path}.json"
	gsg.render.write_manifest(pathlib.Path(manifest_path), pages, deck.grid, config, result)

	total_time = time.perf_counter() - start_time
	print(
		"Timing: layout={:.2f}s render={:.2f}s total={:.2f}s".format(
			layout_end - layout_start,
			render_end - render_start,
			total_time,
		)
	)
	print(f"Manifest written: {manifest_path}")


#============================================
def main(argv: list[str] | None = None) -> None:
	"""
	Main entry point.
	"""
	args = parse_args(argv)
	try:
		run_pipeline(args)
	except gsg.errors.GridSlideError as error:
		raise SystemExit(f"Slide generation failed: {error}") from error
