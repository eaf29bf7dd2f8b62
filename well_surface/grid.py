import logging
import math
from typing import NamedTuple, Sequence, Tuple

import numpy as np
import rasterio

from .errors import EmptyInputError, InvalidResolutionError
from .io import Sample

logger = logging.getLogger(__name__)

# (origin_x, pixel_w, rot_x, origin_y, rot_y, pixel_h), GDAL ordering
Geotransform = Tuple[float, float, float, float, float, float]


class Extent(NamedTuple):
    xmin: float
    xmax: float
    ymin: float
    ymax: float

    @property
    def width(self) -> float:
        return abs(self.xmax - self.xmin)

    @property
    def height(self) -> float:
        return abs(self.ymax - self.ymin)


class GridSpec(NamedTuple):
    x_size: int
    y_size: int
    pixel_size_x: float
    pixel_size_y: float


def compute_extent(samples: Sequence[Sample]) -> Extent:
    """Bounding rectangle of the sample positions (z is ignored)."""
    it = iter(samples)
    try:
        first = next(it)
    except StopIteration:
        raise EmptyInputError('no samples to compute an extent from') from None

    xmin = xmax = first.x
    ymin = ymax = first.y
    for s in it:
        if s.x < xmin:
            xmin = s.x
        elif s.x > xmax:
            xmax = s.x
        if s.y < ymin:
            ymin = s.y
        elif s.y > ymax:
            ymax = s.y
    extent = Extent(xmin, xmax, ymin, ymax)
    logger.info('Extent: %s', extent)
    return extent


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def size_grid(extent: Extent, resolution: float) -> GridSpec:
    """Grid dimensions for ``resolution`` world units per pixel.

    Sizes are rounded half-up and never drop below one pixel. The pixel size
    is recomputed from the X axis and shared by Y so cells stay square; a
    zero-width extent keeps ``resolution`` as the pixel size.
    """
    if not (math.isfinite(resolution) and resolution > 0):
        raise InvalidResolutionError(f'resolution must be > 0, got {resolution}')

    x_size = max(1, _round_half_up(extent.width / resolution))
    y_size = max(1, _round_half_up(extent.height / resolution))

    pixel = extent.width / x_size if extent.width > 0 else float(resolution)
    spec = GridSpec(x_size, y_size, pixel, pixel)
    logger.info('Grid: %d x %d pixels of %.12g', x_size, y_size, pixel)
    return spec


def build_geotransform(extent: Extent, grid: GridSpec) -> Geotransform:
    # North-up: row 0 sits on ymax, so the Y pixel size is negative
    return (extent.xmin, grid.pixel_size_x, 0.0, extent.ymax, 0.0, -grid.pixel_size_y)


def to_affine(geotransform: Geotransform) -> rasterio.Affine:
    return rasterio.Affine.from_gdal(*geotransform)


def cell_centers(extent: Extent, grid: GridSpec) -> Tuple[np.ndarray, np.ndarray]:
    """World X of each column centre and Y of each row centre (top to bottom)."""
    xs = extent.xmin + (np.arange(grid.x_size) + 0.5) * grid.pixel_size_x
    ys = extent.ymax - (np.arange(grid.y_size) + 0.5) * grid.pixel_size_y
    return xs, ys
