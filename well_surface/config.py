from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .idw import DEFAULT_POWER
from .io import DEFAULT_Z_FIELD

# ~2.9 m at the equator, the resolution used for the original well rasters
DEFAULT_RESOLUTION = 2.6516228627319196e-05

@dataclass(frozen=True)
class SurfaceConfig:
    input: Path
    output: Path
    prj: Optional[Path] = None
    crs: Optional[str] = None          # overrides prj when both are given
    x_field: Optional[str] = None      # auto-detected when omitted
    y_field: Optional[str] = None
    z_field: str = DEFAULT_Z_FIELD
    resolution: float = DEFAULT_RESOLUTION
    power: float = DEFAULT_POWER
    max_points: Optional[int] = None
    workers: Optional[int] = None
    nodata: Optional[float] = None

    def projection_source(self) -> Optional[Path]:
        """Sidecar .prj to read when no explicit CRS is set."""
        if self.crs:
            return None
        if self.prj:
            return Path(self.prj)
        sidecar = Path(self.input).with_suffix('.prj')
        return sidecar if sidecar.exists() else None
