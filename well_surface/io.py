import logging
import math
from pathlib import Path
from typing import Iterable, NamedTuple, Optional, Sequence, Tuple

import pandas as pd
import geopandas as gpd

from .errors import MalformedFieldError, MissingFieldError, SurfaceError

logger = logging.getLogger(__name__)

DEFAULT_Z_FIELD = 'SurfaceEle'

TABULAR_SUFFIXES = {'.csv', '.txt'}

# Coordinate column pairs tried, in order, when none are named
_XY_CANDIDATES = [
    ('x', 'y'),
    ('easting', 'northing'),
    ('lon', 'lat'),
    ('longitude', 'latitude'),
]

_GEOM_X = '__geometry_x__'
_GEOM_Y = '__geometry_y__'


class Sample(NamedTuple):
    x: float
    y: float
    z: float


class FieldSchema(NamedTuple):
    """Slot indices of the coordinate fields within a record."""
    x: int
    y: int
    z: int
    names: Tuple[str, str, str]


def _detect_xy(columns: Sequence[str]) -> Optional[Tuple[str, str]]:
    lower = {str(c).lower(): c for c in columns}
    for cx, cy in _XY_CANDIDATES:
        if cx in lower and cy in lower:
            return lower[cx], lower[cy]
    return None


def resolve_schema(columns: Sequence[str], x: Optional[str] = None, y: Optional[str] = None,
                   z: str = DEFAULT_Z_FIELD) -> FieldSchema:
    """Map field names to positional slots once, before any record is read.

    When ``x`` or ``y`` is missing the usual coordinate column pairs are
    tried case-insensitively.
    """
    columns = list(columns)
    if x is None or y is None:
        detected = _detect_xy(columns)
        if detected is None:
            raise MissingFieldError(
                f'Provide x/y field names (fields found: {columns})'
            )
        x, y = detected

    slots = []
    for name in (x, y, z):
        try:
            slots.append(columns.index(name))
        except ValueError:
            raise MissingFieldError(f'Missing field: {name} (fields found: {columns})') from None
    return FieldSchema(slots[0], slots[1], slots[2], (x, y, z))


def _parse(value, position: int, field: str) -> float:
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        raise MalformedFieldError(position, field, value) from None
    if not math.isfinite(parsed):
        raise MalformedFieldError(position, field, value)
    return parsed


def samples_from_records(records: Iterable[Sequence], schema: FieldSchema) -> Tuple[Sample, ...]:
    """Build one Sample per record, reading the resolved slots positionally.

    The first unparsable value aborts the whole load.
    """
    nx, ny, nz = schema.names
    samples = []
    for position, rec in enumerate(records):
        samples.append(Sample(
            _parse(rec[schema.x], position, nx),
            _parse(rec[schema.y], position, ny),
            _parse(rec[schema.z], position, nz),
        ))
    return tuple(samples)


def _frame_samples(df: pd.DataFrame, x, y, z) -> Tuple[Sample, ...]:
    schema = resolve_schema(df.columns, x=x, y=y, z=z)
    logger.debug('Resolved fields %s to slots %s', schema.names, tuple(schema[:3]))
    return samples_from_records(df.itertuples(index=False, name=None), schema)


def read_points_csv(path, x=None, y=None, z=DEFAULT_Z_FIELD) -> Tuple[Sample, ...]:
    # Every cell arrives as text and is parsed explicitly
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    return _frame_samples(df, x, y, z)


def read_points_vector(path, x=None, y=None, z=DEFAULT_Z_FIELD, layer=None) -> Tuple[Sample, ...]:
    """Read samples from any OGR-readable vector file (shapefile, GeoPackage, ...).

    Without x/y field names, and with no recognisable coordinate fields in the
    attribute table, the point geometry coordinates are used instead.
    """
    gdf = gpd.read_file(path, layer=layer)
    attrs = pd.DataFrame(gdf.drop(columns=gdf.geometry.name))

    if (x is None or y is None) and _detect_xy(attrs.columns) is None:
        if not (gdf.geom_type == 'Point').all():
            raise SurfaceError(f'{path}: geometries are not all points', stage='load')
        attrs[_GEOM_X] = gdf.geometry.x.values
        attrs[_GEOM_Y] = gdf.geometry.y.values
        x, y = _GEOM_X, _GEOM_Y
        logger.info('No coordinate fields in %s; using point geometries', path)

    return _frame_samples(attrs, x, y, z)


def read_points(path, x=None, y=None, z=DEFAULT_Z_FIELD) -> Tuple[Sample, ...]:
    path = Path(path)
    if path.suffix.lower() in TABULAR_SUFFIXES:
        samples = read_points_csv(path, x=x, y=y, z=z)
    else:
        samples = read_points_vector(path, x=x, y=y, z=z)
    logger.info('Loaded %d samples from %s', len(samples), path)
    return samples
