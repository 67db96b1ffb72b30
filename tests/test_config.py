import pytest

from atlas_packer import Config, Heuristic, InvalidConfigError, default_config


def test_defaults():
    config = default_config()
    assert (config.texture_width, config.texture_height) == (1024, 1024)
    assert config.auto_grow is False
    assert config.square is True
    assert config.heuristic is Heuristic.BEST_SHORT_SIDE_FIT
    assert config.padding == 0
    assert config.max_dimension == 16384
    assert config.max_bin_count is None
    assert config.channels == 4


def test_heuristic_names_are_coerced():
    assert Config(heuristic="baf").heuristic is Heuristic.BEST_AREA_FIT
    assert Config(heuristic="BOTTOM_LEFT").heuristic is Heuristic.BOTTOM_LEFT


@pytest.mark.parametrize("changes", [
    {"texture_width": 0},
    {"texture_height": -5},
    {"texture_width": 1.5},
    {"texture_width": True},
    {"padding": -1},
    {"max_dimension": 0},
    {"max_dimension": 512},
    {"max_bin_count": 0},
    {"max_bin_count": "3"},
    {"channels": 0},
    {"channels": 5},
    {"heuristic": "guess"},
])
def test_invalid_values(changes):
    with pytest.raises(InvalidConfigError):
        Config(**changes)


def test_copy_validates_changes():
    config = Config(texture_width=256, texture_height=256)
    assert config.copy(padding=2).padding == 2
    assert config.padding == 0
    with pytest.raises(InvalidConfigError):
        config.copy(padding=-2)


@pytest.mark.parametrize("square, expected", [(True, (256, 256)), (False, (128, 256))])
def test_base_size(square, expected):
    assert Config(texture_width=128, texture_height=256, square=square).base_size == expected
