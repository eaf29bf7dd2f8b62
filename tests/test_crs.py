import pytest
from pyproj import CRS

from well_surface.crs import read_projection, spatial_reference_wkt
from well_surface.errors import ProjectionError

WGS84_ESRI = ('GEOGCS["GCS_WGS_1984",DATUM["D_WGS_1984",SPHEROID["WGS_1984",6378137.0,298.257223563]],'
              'PRIMEM["Greenwich",0.0],UNIT["Degree",0.0174532925199433]]')


def test_read_projection_returns_first_line(tmp_path):
    prj = tmp_path / 'gwWells.prj'
    prj.write_text(WGS84_ESRI + '\nsecond line\n', encoding='utf-8')
    assert read_projection(prj) == WGS84_ESRI


def test_read_projection_missing_or_empty(tmp_path):
    with pytest.raises(ProjectionError):
        read_projection(tmp_path / 'nope.prj')
    empty = tmp_path / 'empty.prj'
    empty.write_text('', encoding='utf-8')
    with pytest.raises(ProjectionError):
        read_projection(empty)


def test_spatial_reference_round_trips_wkt():
    wkt = spatial_reference_wkt(WGS84_ESRI)
    assert CRS.from_wkt(wkt).is_geographic


def test_spatial_reference_accepts_epsg():
    assert CRS.from_wkt(spatial_reference_wkt('EPSG:32614')).to_epsg() == 32614


def test_spatial_reference_rejects_garbage():
    with pytest.raises(ProjectionError) as info:
        spatial_reference_wkt('not a projection')
    assert info.value.stage == 'projection'
