import math

import pytest

from varresistor.analysis.noise import (
    GaussianNoise, JohnsonNoise, ideal_voltage, measure_voltage, numpy_normal_source,
)
from varresistor.config import BOLTZMANN_CONSTANT


def test_zero_sigma_zero_draw_returns_ideal_voltage(bar_profile, zero_normal):
    for x in (0.0, 0.35, 0.8, 1.0):
        v = measure_voltage(0.25, bar_profile.resistance_up_to, x, GaussianNoise(0.0), zero_normal)
        assert v == 0.25 * bar_profile.resistance_up_to(x)


def test_draw_is_scaled_by_sigma(bar_profile, counting_normal):
    normal = counting_normal(2.0)
    v = measure_voltage(0.25, bar_profile.resistance_up_to, 0.5, GaussianNoise(0.003), normal)
    assert v == pytest.approx(0.25 * bar_profile.resistance_up_to(0.5) + 0.006)
    assert normal.calls == 1


def test_reading_can_be_negative_near_start(bar_profile, counting_normal):
    v = measure_voltage(0.25, bar_profile.resistance_up_to, 0.0, GaussianNoise(0.003), counting_normal(-1.0))
    assert v == pytest.approx(-0.003)


def test_fixed_draw_is_reproducible(bar_profile, counting_normal):
    noise = JohnsonNoise()
    a = measure_voltage(0.25, bar_profile.resistance_up_to, 0.42, noise, counting_normal(0.7))
    b = measure_voltage(0.25, bar_profile.resistance_up_to, 0.42, noise, counting_normal(0.7))
    assert a == b


def test_johnson_std_formula():
    noise = JohnsonNoise(temperature=300.0, bandwidth=9e9, instrument_std=0.003)
    resistance = 8.5
    johnson = math.sqrt(4 * BOLTZMANN_CONSTANT * 300.0 * resistance * 9e9)
    assert noise.johnson_std(resistance) == pytest.approx(johnson)
    assert noise.std(resistance) == pytest.approx(math.sqrt(johnson ** 2 + 0.003 ** 2))


def test_johnson_reduces_to_instrument_noise_at_zero_resistance():
    assert JohnsonNoise(instrument_std=0.003).std(0.0) == pytest.approx(0.003)


def test_johnson_reading_uses_resistance_up_to_probe(taper_profile, counting_normal):
    noise = JohnsonNoise()
    x = 0.006
    r = taper_profile.resistance_up_to(x)
    v = measure_voltage(0.25, taper_profile.resistance_up_to, x, noise, counting_normal(1.0))
    assert v == pytest.approx(ideal_voltage(0.25, r) + noise.std(r))


def test_gaussian_std_ignores_resistance():
    assert GaussianNoise(0.01).std(1e6) == 0.01


def test_negative_parameters_raise():
    with pytest.raises(ValueError):
        GaussianNoise(-0.1)
    with pytest.raises(ValueError):
        JohnsonNoise(temperature=-1.0)
    with pytest.raises(ValueError):
        JohnsonNoise(bandwidth=-1.0)


def test_numpy_normal_source_is_seedable():
    a = numpy_normal_source(5)
    b = numpy_normal_source(5)
    draws = [a() for _ in range(20)]
    assert draws == [b() for _ in range(20)]
    assert all(isinstance(d, float) for d in draws)
