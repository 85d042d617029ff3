# tests/helpers.py

from rasterkit import ByteBuffer, Point

TINYMARBLE_SIZE = (100, 50)
TINYMARBLE_COUNT = 3
TINYMARBLE_PROJECTION_PREFIX = 'GEOGCS["WGS 84",'
TINYMARBLE_BLOCK = ((20, 30), [[7, 7], [7, 10], [8, 12]])

def assert_buffer_shape(buf: ByteBuffer, size: Point):
    """Check the declared size and the sample count of a buffer."""
    assert buf.size == size, f"Size mismatch: {buf.size} != {size}"
    assert len(buf.data) == size.x * size.y, \
        f"Data length {len(buf.data)} does not match {size.x}x{size.y}"

def expected_stretch(source: ByteBuffer, window: Point):
    """
    Reference nearest-neighbour stretch written with plain loops.

    Window pixel (x, y) takes source pixel
    (floor(x * src_w / win_w), floor(y * src_h / win_h)).
    """
    src_w, src_h = source.size
    out = []
    for y in range(window.y):
        for x in range(window.x):
            sx = (x * src_w) // window.x
            sy = (y * src_h) // window.y
            out.append(source.pixel(sx, sy))
    return out
