# tests/unit/test_resample.py

import numpy as np
import pytest

from rasterkit import Point, RasterValidationError
from rasterkit.raster.resample import nearest_indices, resample_nearest

def test_nearest_indices_stretch_splits_halves():
    idx = nearest_indices(2, 20)
    assert idx[:10].tolist() == [0] * 10
    assert idx[10:].tolist() == [1] * 10

def test_nearest_indices_shrink_uses_floor():
    # floor(d * 10 / 3) for d = 0, 1, 2
    assert nearest_indices(10, 3).tolist() == [0, 3, 6]

def test_nearest_indices_identity():
    assert nearest_indices(5, 5).tolist() == [0, 1, 2, 3, 4]

def test_nearest_indices_uneven_stretch():
    # floor(d * 3 / 7)
    assert nearest_indices(3, 7).tolist() == [0, 0, 0, 1, 1, 2, 2]

@pytest.mark.parametrize("src, dst", [(0, 4), (4, 0), (-1, 3)])
def test_nearest_indices_rejects_empty_axes(src, dst):
    with pytest.raises(RasterValidationError):
        nearest_indices(src, dst)

def test_resample_nearest_stretch():
    src = np.array([[50, 20]], dtype=np.uint8)
    out = resample_nearest(src, Point(20, 10))
    assert out.shape == (10, 20)
    assert (out[:, :10] == 50).all()
    assert (out[:, 10:] == 20).all()

def test_resample_nearest_shrink():
    src = np.arange(16, dtype=np.uint8).reshape(4, 4)
    out = resample_nearest(src, Point(2, 2))
    assert out.tolist() == [[0, 2], [8, 10]]

def test_resample_nearest_identity_returns_copy():
    src = np.ones((2, 3), dtype=np.uint8)
    out = resample_nearest(src, Point(3, 2))
    assert np.array_equal(out, src)
    out[0, 0] = 5
    assert src[0, 0] == 1

def test_resample_nearest_requires_2d():
    with pytest.raises(RasterValidationError):
        resample_nearest(np.zeros(4, dtype=np.uint8), Point(2, 2))
