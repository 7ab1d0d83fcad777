import pytest

from varresistor.config import PRESETS, NoiseMode, ProfileKind, get_preset


def test_get_preset_returns_independent_copy():
    config = get_preset("taper")
    config.length = 5.0
    config.taper.r0 = 1.0
    assert PRESETS["taper"].length == 0.01
    assert PRESETS["taper"].taper.r0 == 0.0004


def test_unknown_preset_raises():
    with pytest.raises(ValueError, match="Unknown preset"):
        get_preset("graphene")


def test_bar_preset_defaults():
    config = get_preset("bar")
    assert config.kind == ProfileKind.RANDOM_LOBES
    assert (config.length, config.samples, config.min_area, config.max_area) == (1.0, 512, 0.6, 3.2)
    assert config.rho == 1.7e-8
    assert config.noise_mode == NoiseMode.SIMPLE
    assert config.scan_count == 24


def test_taper_preset_defaults():
    config = get_preset("taper")
    assert config.kind == ProfileKind.EXPONENTIAL_TAPER
    assert config.rho == 1e-4
    assert (config.taper.r0, config.taper.ell) == (0.0004, 0.008)
    assert config.noise_mode == NoiseMode.JOHNSON
