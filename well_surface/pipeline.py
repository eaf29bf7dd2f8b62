import logging
from typing import NamedTuple, Optional, Sequence

import numpy as np

from .config import SurfaceConfig
from .crs import read_projection, spatial_reference_wkt
from .errors import ProjectionError
from .grid import Geotransform, build_geotransform, compute_extent, size_grid
from .idw import DEFAULT_POWER, interpolate_grid
from .io import Sample, read_points
from .raster import write_geotiff

logger = logging.getLogger(__name__)


class Raster(NamedTuple):
    data: np.ndarray          # (y_size, x_size), row 0 is north
    geotransform: Geotransform
    projection: str


def build_surface(samples: Sequence[Sample], resolution: float, projection: str,
                  power: float = DEFAULT_POWER, max_points: Optional[int] = None,
                  workers: Optional[int] = None) -> Raster:
    """Extent -> grid size -> IDW -> geotransform, all in memory."""
    extent = compute_extent(samples)
    grid = size_grid(extent, resolution)
    data = interpolate_grid(samples, extent, grid, power=power,
                            max_points=max_points, workers=workers)
    return Raster(data, build_geotransform(extent, grid), projection)


def load_projection(config: SurfaceConfig) -> str:
    if config.crs:
        text = config.crs
    else:
        source = config.projection_source()
        if source is None:
            raise ProjectionError(f'no .prj found for {config.input}; provide a projection file or CRS')
        text = read_projection(source)
    return spatial_reference_wkt(text)


def run(config: SurfaceConfig) -> Raster:
    """Load, interpolate and write. Nothing is written unless every step succeeds."""
    samples = read_points(config.input, x=config.x_field, y=config.y_field, z=config.z_field)
    projection = load_projection(config)
    logger.info('Spatial reference: %.80s', projection)
    raster = build_surface(samples, config.resolution, projection, power=config.power,
                           max_points=config.max_points, workers=config.workers)
    write_geotiff(config.output, raster, nodata=config.nodata)
    return raster
