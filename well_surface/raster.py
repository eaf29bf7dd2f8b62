import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

import rasterio
from rasterio.errors import RasterioError

from .errors import SinkWriteError
from .grid import to_affine

logger = logging.getLogger(__name__)

def write_geotiff(path, raster, nodata: Optional[float] = None, compress: Optional[str] = 'lzw'):
    """Persist a single-band float64 GeoTIFF.

    The file is written next to ``path`` and renamed into place once complete,
    so a failed write never leaves a partial raster behind.
    """
    path = Path(path)
    arr = raster.data
    profile = {
        'driver': 'GTiff',
        'height': arr.shape[0],
        'width': arr.shape[1],
        'count': 1,
        'dtype': 'float64',
        'crs': raster.projection,
        'transform': to_affine(raster.geotransform),
    }
    if compress:
        profile['compress'] = compress
    if nodata is not None:
        profile['nodata'] = nodata

    tmp = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(suffix='.tif', prefix=f'.{path.stem}-', dir=path.parent)
        os.close(fd)
        with rasterio.open(tmp, 'w', **profile) as dst:
            dst.write(arr.astype('float64', copy=False), 1)
        os.replace(tmp, path)
        tmp = None
    except (RasterioError, OSError, ValueError) as e:
        raise SinkWriteError(f'failed to write {path}: {e}') from e
    finally:
        if tmp is not None and os.path.exists(tmp):
            os.remove(tmp)
    logger.info('Wrote %d x %d raster to %s', arr.shape[1], arr.shape[0], path)
    return path
