"""Interpolate scattered well elevations onto a georeferenced raster."""
from .errors import (
    SurfaceError,
    EmptyInputError,
    InvalidResolutionError,
    InvalidPowerError,
    InvalidMaxPointsError,
    MalformedFieldError,
    MissingFieldError,
    ProjectionError,
    SinkWriteError,
)
from .io import Sample, read_points
from .grid import Extent, GridSpec, compute_extent, size_grid, build_geotransform
from .idw import interpolate_at, interpolate_grid
from .pipeline import Raster, build_surface, run

__version__ = '0.1.0'
