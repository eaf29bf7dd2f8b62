import pytest
from well_surface.io import Sample

@pytest.fixture
def triangle():
    return (Sample(0.0, 0.0, 10.0), Sample(10.0, 0.0, 20.0), Sample(0.0, 10.0, 30.0))

@pytest.fixture
def scattered():
    # deterministic, irregular, includes negative coordinates
    return tuple(
        Sample(float(x), float(y), float(z))
        for x, y, z in [
            (-3.5, 2.0, 101.0), (4.25, -1.5, 98.5), (7.0, 6.5, 110.2),
            (0.5, 9.0, 104.7), (-2.0, -4.0, 95.0), (5.5, 3.3, 103.3),
        ]
    )
