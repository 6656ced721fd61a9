"""
Grid coordinate model.

The grid origin is the top-left corner of the page and one grid cell is
base_size points on a side. PDF coordinates have a bottom-left origin.
"""


#============================================
def grid_to_points(value: float, base_size: float) -> float:
	"""
	Convert a grid distance to points.

	Args:
		value: Distance in grid cells.
		base_size: Size of one grid cell in points.

	Returns:
		Distance in points.
	"""
	return value * base_size


#============================================
def points_to_grid(value: float, base_size: float) -> float:
	"""
	Convert a point distance to grid cells.

	Args:
		value: Distance in points.
		base_size: Size of one grid cell in points.

	Returns:
		Distance in grid cells.
	"""
	return value / base_size


#============================================
def compute_page_size(columns: float, rows: float, base_size: float) -> tuple[float, float]:
	"""
	Compute the physical page size for a grid.

	Args:
		columns: Grid columns.
		rows: Grid rows.
		base_size: Size of one grid cell in points.

	Returns:
		Tuple of (page_width, page_height) in points.
	"""
	return (grid_to_points(columns, base_size), grid_to_points(rows, base_size))


#============================================
def to_page_point(
	grid_col: float,
	grid_row: float,
	page_height: float,
	base_size: float,
) -> tuple[float, float]:
	"""
	Convert a top-left grid position to a bottom-left page point.

	Args:
		grid_col: Column in grid cells, from the left edge.
		grid_row: Row in grid cells, from the top edge.
		page_height: Page height in points.
		base_size: Size of one grid cell in points.

	Returns:
		Tuple of (x, y) in points with a bottom-left origin.
	"""
	x_pt = grid_to_points(grid_col, base_size)
	y_from_top_pt = grid_to_points(grid_row, base_size)
	y_from_bottom_pt = page_height - y_from_top_pt
	return (x_pt, y_from_bottom_pt)
