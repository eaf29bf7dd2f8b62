from pathlib import Path
from pyproj import CRS
from pyproj.exceptions import CRSError
from .errors import ProjectionError

def read_projection(prj_path) -> str:
    """First line of a .prj sidecar (ESRI WKT is written on a single line)."""
    path = Path(prj_path)
    try:
        with path.open('r', encoding='utf-8-sig') as f:
            line = f.readline().strip()
    except OSError as e:
        raise ProjectionError(f'cannot read projection file {path}: {e}') from e
    if not line:
        raise ProjectionError(f'projection file {path} is empty')
    return line

def spatial_reference_wkt(text: str) -> str:
    """Build a spatial reference from WKT, EPSG:xxxx or a PROJ string and return it as WKT."""
    try:
        return CRS.from_user_input(text).to_wkt()
    except CRSError as e:
        raise ProjectionError(f'invalid spatial reference: {e}') from e
