import io
import itertools

import numpy as np
import pytest
from PIL import Image

from atlas_packer.utils.images import InputImage


def make_pixels(width, height, seed=0, channels=4):
    """Random uint8 pixels shaped (height, width, channels)."""
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=(height, width, channels), dtype=np.uint8)


def solid_pixels(width, height, value, channels=4):
    return np.full((height, width, channels), value, dtype=np.uint8)


def encode_png(pixels):
    sink = io.BytesIO()
    Image.fromarray(pixels).save(sink, format="PNG")
    return sink.getvalue()


def make_images(sizes):
    """InputImage records with blank single channel pixels, ids in list order."""
    return [
        InputImage(image_id, np.zeros((height, width, 1), dtype=np.uint8), "digest-{}".format(image_id))
        for image_id, (width, height) in enumerate(sizes)
    ]


def rects_overlap(a, b):
    return a.intersects(b)


def assert_no_overlap(canvas):
    # Inflate by padding so the reserved spacing counts as occupied
    padding = canvas.padding
    rects = [p.rectangle for p in canvas.placements]
    for rect in rects:
        assert rect.left >= 0 and rect.top >= 0
        assert rect.right <= canvas.width and rect.bottom <= canvas.height
    for a, b in itertools.combinations(rects, 2):
        a_padded = type(a)(a.left, a.top, a.width + padding, a.height + padding)
        b_padded = type(b)(b.left, b.top, b.width + padding, b.height + padding)
        assert not rects_overlap(a_padded, b_padded), "{} overlaps {}".format(a, b)


@pytest.fixture
def png_bytes():
    return encode_png(make_pixels(24, 16, seed=7))
