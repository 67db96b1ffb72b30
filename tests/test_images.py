import threading

import numpy as np
import pytest

from atlas_packer.errors import InvalidImageError
from atlas_packer.utils.images import UNPLACED, DuplicateOf, ImageRegistry, fingerprint

from conftest import make_pixels, solid_pixels


def test_ids_follow_insertion_order():
    registry = ImageRegistry(4)
    ids = [registry.add(make_pixels(8, 8, seed=seed), 8, 8).id for seed in range(3)]
    assert ids == [0, 1, 2]
    assert len(registry) == 3
    assert registry.get(1).id == 1


def test_new_image_starts_unplaced():
    image = ImageRegistry(4).add(make_pixels(5, 3), 5, 3)
    assert image.placement == UNPLACED
    assert not image.is_duplicate
    assert image.original_id is None
    assert image.size == (5, 3)


def test_identical_pixels_are_detected_as_duplicate():
    registry = ImageRegistry(4)
    first = registry.add(make_pixels(16, 16, seed=1), 16, 16)
    registry.add(make_pixels(16, 16, seed=2), 16, 16)
    third = registry.add(make_pixels(16, 16, seed=1), 16, 16)

    assert third.placement == DuplicateOf(first.id)
    assert third.original_id == first.id
    assert third.fingerprint == first.fingerprint


def test_duplicate_of_a_duplicate_points_at_the_original():
    registry = ImageRegistry(1)
    registry.add(solid_pixels(4, 4, 9, channels=1), 4, 4)
    registry.add(solid_pixels(4, 4, 9, channels=1), 4, 4)
    third = registry.add(solid_pixels(4, 4, 9, channels=1), 4, 4)
    assert third.placement == DuplicateOf(0)


def test_same_bytes_with_other_dimensions_are_not_duplicates():
    registry = ImageRegistry(1)
    data = bytes(range(24))
    wide = registry.add(data, 6, 4)
    tall = registry.add(data, 4, 6)
    assert wide.fingerprint == tall.fingerprint
    assert not tall.is_duplicate


def test_flat_bytes_and_arrays_give_the_same_fingerprint():
    pixels = make_pixels(7, 5, seed=3)
    registry = ImageRegistry(4)
    from_array = registry.add(pixels, 7, 5)
    from_bytes = registry.add(pixels.tobytes(), 7, 5)
    assert from_bytes.placement == DuplicateOf(from_array.id)
    assert from_array.fingerprint == fingerprint(pixels)


@pytest.mark.parametrize("width, height", [(0, 4), (4, 0), (-1, 4)])
def test_non_positive_dimensions_are_rejected(width, height):
    with pytest.raises(InvalidImageError):
        ImageRegistry(4).add(b"\x00" * 64, width, height)


def test_length_mismatch_is_rejected():
    registry = ImageRegistry(4)
    with pytest.raises(InvalidImageError):
        registry.add(b"\x00" * 63, 4, 4)
    with pytest.raises(InvalidImageError):
        registry.add(make_pixels(4, 4, channels=3), 4, 4)
    assert len(registry) == 0


def test_registry_keeps_its_own_read_only_copy():
    pixels = make_pixels(4, 4, seed=5)
    image = ImageRegistry(4).add(pixels, 4, 4)
    expected = pixels.copy()
    pixels[:] = 0

    np.testing.assert_array_equal(image.pixels, expected)
    with pytest.raises(ValueError):
        image.pixels[0, 0, 0] = 1


def test_pending_sorts_by_height_then_width_then_id():
    registry = ImageRegistry(1)
    sizes = [(10, 20), (30, 20), (50, 5), (10, 20), (5, 40)]
    for seed, (width, height) in enumerate(sizes):
        registry.add(make_pixels(width, height, seed=seed, channels=1), width, height)
    registry.add(make_pixels(50, 5, seed=2, channels=1), 50, 5)

    assert [image.id for image in registry.pending()] == [4, 1, 0, 3, 2]


def test_concurrent_identical_adds_give_one_original():
    registry = ImageRegistry(4)
    pixels = make_pixels(32, 32, seed=11)
    barrier = threading.Barrier(8)

    def add():
        barrier.wait()
        registry.add(pixels, 32, 32)

    threads = [threading.Thread(target=add) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    images = registry.snapshot()
    assert sorted(image.id for image in images) == list(range(8))
    originals = [image for image in images if not image.is_duplicate]
    assert len(originals) == 1
    assert all(image.original_id == originals[0].id for image in images if image.is_duplicate)
