import logging
from pathlib import Path
import typer
from rich import print
from rich.markup import escape
from rich.logging import RichHandler
from .config import DEFAULT_RESOLUTION, SurfaceConfig
from .errors import SurfaceError
from .idw import DEFAULT_POWER
from .io import DEFAULT_Z_FIELD
from .pipeline import run

app = typer.Typer(add_completion=False, no_args_is_help=True)

def _setup_logging(verbose: int):
    level = logging.WARNING if verbose == 0 else logging.INFO if verbose == 1 else logging.DEBUG
    logging.basicConfig(level=level, format='%(message)s', datefmt='[%X]',
                        handlers=[RichHandler(rich_tracebacks=True)])

@app.command()
def build_grid(
    input: Path = typer.Argument(..., exists=True, dir_okay=False, help='Point file (shapefile, GeoPackage, CSV, ...)'),
    out: Path = typer.Option(..., help='Output GeoTIFF path'),
    prj: Path = typer.Option(None, exists=True, dir_okay=False, help='Projection file; defaults to the input .prj sidecar'),
    crs: str = typer.Option(None, help='Spatial reference (WKT, EPSG:xxxx, PROJ); overrides --prj'),
    x: str = typer.Option(None, help='X/Longitude field (auto-detected if omitted)'),
    y: str = typer.Option(None, help='Y/Latitude field (auto-detected if omitted)'),
    z: str = typer.Option(DEFAULT_Z_FIELD, help='Elevation field name'),
    resolution: float = typer.Option(DEFAULT_RESOLUTION, help='Pixel size in input units'),
    power: float = typer.Option(DEFAULT_POWER, help='IDW distance power'),
    max_points: int = typer.Option(None, min=1, help='Use only the nearest N samples per cell'),
    workers: int = typer.Option(None, min=1, help='Interpolation threads (default: CPU count)'),
    nodata: float = typer.Option(None, help='Nodata value recorded in the GeoTIFF'),
    verbose: int = typer.Option(0, '--verbose', '-v', count=True, help='-v for progress, -vv for debug'),
):
    """Interpolate well elevations to a GeoTIFF via inverse-distance weighting."""
    _setup_logging(verbose)
    config = SurfaceConfig(
        input=input, output=out, prj=prj, crs=crs,
        x_field=x, y_field=y, z_field=z,
        resolution=resolution, power=power,
        max_points=max_points, workers=workers, nodata=nodata,
    )
    try:
        raster = run(config)
    except SurfaceError as e:
        print(f'[red]Failed[/red]: {escape(str(e))}')
        raise typer.Exit(code=1)
    rows, cols = raster.data.shape
    print(f'[green]Wrote surface[/green]: {out} ({cols} x {rows}, pixel {raster.geotransform[1]:.6g})')

def main():
    app()

if __name__ == '__main__':
    main()
