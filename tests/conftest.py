# tests/conftest.py

import pytest
import numpy as np
import rasterio
from rasterio.transform import Affine
from rasterio.crs import CRS

from rasterkit import Driver, IOConfig, set_default_config
from helpers import TINYMARBLE_SIZE, TINYMARBLE_COUNT, TINYMARBLE_BLOCK

@pytest.fixture(autouse=True)
def reset_default_config():
    """Keeps environment-driven defaults from leaking between tests."""
    set_default_config(None)
    yield
    set_default_config(None)

@pytest.fixture(scope="session")
def tinymarble_path(tmp_path_factory):
    """
    Fixture: Creates a 100x50, 3-band georeferenced PNG.

    Band 1 holds a known 2x3 block at (20, 30) = [[7, 7], [7, 10], [8, 12]].
    The WGS 84 georeferencing is stored by GDAL in the .aux.xml sidecar.
    """
    p = tmp_path_factory.mktemp("fixtures") / "tinymarble.png"

    width, height = TINYMARBLE_SIZE
    rows, cols = np.mgrid[0:height, 0:width]

    data = np.zeros((TINYMARBLE_COUNT, height, width), dtype='uint8')
    data[0] = (rows * 3 + cols) % 97
    data[1] = (rows + cols * 5) % 251
    data[2].fill(128)

    (x, y), block = TINYMARBLE_BLOCK
    block = np.asarray(block, dtype='uint8')
    data[0, y:y + block.shape[0], x:x + block.shape[1]] = block

    profile = {
        'driver': 'PNG',
        'height': height,
        'width': width,
        'count': TINYMARBLE_COUNT,
        'dtype': 'uint8',
        'crs': CRS.from_epsg(4326),
        'transform': Affine.translation(-180, 90) * Affine.scale(3.6, -3.6)
    }

    with rasterio.open(p, 'w', **profile) as dst:
        dst.write(data)

    return p

@pytest.fixture
def mem_driver():
    driver = Driver.get("MEM")
    assert driver is not None
    return driver

@pytest.fixture
def mem_dataset(mem_driver):
    """A blank 20x10 single-band in-memory dataset."""
    ds = mem_driver.create("", 20, 10, 1)
    yield ds
    ds.close()

@pytest.fixture
def text_file(tmp_path):
    p = tmp_path / "not_a_raster.png"
    p.write_text("definitely not pixels")
    return p

@pytest.fixture
def lenient_config():
    """Config that skips window validation and memory checks."""
    return IOConfig(strict_windows=False, check_memory=False)
