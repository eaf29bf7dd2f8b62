import pytest
from well_surface.errors import EmptyInputError, InvalidResolutionError
from well_surface.grid import (
    Extent, GridSpec, build_geotransform, cell_centers, compute_extent, size_grid, to_affine,
)
from well_surface.io import Sample


def test_extent_bounds_every_sample(scattered):
    ext = compute_extent(scattered)
    assert ext == Extent(-3.5, 7.0, -4.0, 9.0)
    for s in scattered:
        assert ext.xmin <= s.x <= ext.xmax
        assert ext.ymin <= s.y <= ext.ymax


def test_extent_ignores_z_and_accepts_generators(triangle):
    assert compute_extent(s for s in triangle) == Extent(0.0, 10.0, 0.0, 10.0)


def test_extent_of_empty_input_fails():
    with pytest.raises(EmptyInputError):
        compute_extent([])


def test_worked_example(triangle):
    ext = compute_extent(triangle)
    grid = size_grid(ext, 1.0)
    assert grid == GridSpec(10, 10, 1.0, 1.0)
    assert build_geotransform(ext, grid) == (0.0, 1.0, 0.0, 10.0, 0.0, -1.0)


@pytest.mark.parametrize('span, resolution, expected', [
    (10.0, 3.0, 3),    # 3.33 rounds down
    (10.0, 4.0, 3),    # 2.5 rounds half up
    (10.0, 6.0, 2),    # 1.67 rounds up
    (10.0, 100.0, 1),  # 0.1 clamps to one pixel
])
def test_size_rounds_half_up(span, resolution, expected):
    grid = size_grid(Extent(0.0, span, 0.0, span), resolution)
    assert grid.x_size == grid.y_size == expected
    assert grid.pixel_size_x == pytest.approx(span / expected)


def test_pixels_are_square_from_x_axis():
    grid = size_grid(Extent(0.0, 10.0, 0.0, 4.0), 3.0)
    assert (grid.x_size, grid.y_size) == (3, 1)
    assert grid.pixel_size_x == grid.pixel_size_y == pytest.approx(10.0 / 3)


@pytest.mark.parametrize('extent', [
    Extent(5.0, 5.0, 5.0, 5.0),   # single point
    Extent(0.0, 10.0, 2.0, 2.0),  # east-west line
    Extent(1.0, 1.0, 0.0, 10.0),  # north-south line
])
def test_degenerate_extent_still_gives_a_grid(extent):
    grid = size_grid(extent, 0.5)
    assert grid.x_size >= 1 and grid.y_size >= 1
    assert grid.pixel_size_x > 0 and grid.pixel_size_y > 0


def test_zero_width_extent_keeps_resolution():
    grid = size_grid(Extent(1.0, 1.0, 0.0, 10.0), 0.5)
    assert grid == GridSpec(1, 20, 0.5, 0.5)


@pytest.mark.parametrize('resolution', [0.0, -1.0, -1e-9, float('nan'), float('inf')])
def test_non_positive_resolution_fails(resolution):
    with pytest.raises(InvalidResolutionError):
        size_grid(Extent(0.0, 1.0, 0.0, 1.0), resolution)


def test_geotransform_is_north_up():
    ext = Extent(100.0, 110.0, -5.0, 3.0)
    gt = build_geotransform(ext, GridSpec(4, 3, 2.5, 2.5))
    assert gt == (100.0, 2.5, 0.0, 3.0, 0.0, -2.5)
    aff = to_affine(gt)
    assert aff * (0, 0) == (100.0, 3.0)
    assert aff * (4, 3) == (110.0, -4.5)


def test_cell_centers_run_top_to_bottom():
    xs, ys = cell_centers(Extent(0.0, 4.0, 0.0, 2.0), GridSpec(4, 2, 1.0, 1.0))
    assert list(xs) == [0.5, 1.5, 2.5, 3.5]
    assert list(ys) == [1.5, 0.5]


def test_extent_single_sample():
    ext = compute_extent([Sample(2.0, -1.0, 7.0)])
    assert ext == Extent(2.0, 2.0, -1.0, -1.0)
