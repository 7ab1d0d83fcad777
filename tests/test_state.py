import dataclasses

import numpy as np
import pytest

from varresistor.analysis.noise import GaussianNoise, JohnsonNoise
from varresistor.config import ProfileKind, get_preset
from varresistor.model.prng import Mulberry32
from varresistor.model.state import ExperimentSession


@pytest.fixture
def session(zero_normal) -> ExperimentSession:
    config = dataclasses.replace(get_preset("bar"), seed=42)
    return ExperimentSession(config, normal=zero_normal)


def test_session_builds_precomputed_profile(session):
    profile = session.profile
    assert profile.seed == 42
    assert profile.rho == 1.7e-8
    assert profile.total_r > 0.0
    assert profile.resistance_up_to(profile.length) == profile.total_r


def test_noise_free_reading_at_probe(session, zero_normal):
    session.set_noise_std(0.0)
    v = session.measure_voltage()
    assert v == session.current * session.profile.resistance_up_to(session.probe_x)
    assert zero_normal.calls == 1


def test_add_reading_logs_probe_position(session):
    session.set_probe(0.6)
    sample = session.add_reading()
    assert session.log.data == [sample]
    assert sample.x == 0.6
    assert sample.v == pytest.approx(session.current * session.profile.resistance_up_to(0.6))


def test_auto_scan_uses_configured_count(session):
    session.add_reading()
    session.auto_scan()
    xs = session.log.positions()
    assert len(session.log) == 24
    assert xs[0] == 0.0 and xs[-1] == session.profile.length
    assert np.all(np.diff(xs) > 0.0)


def test_auto_scan_with_explicit_count(session):
    session.auto_scan(5)
    assert len(session.log) == 5
    with pytest.raises(ValueError):
        session.auto_scan(0)


def test_regenerate_replaces_profile_and_clears_log(session):
    old = session.profile
    session.add_reading()
    new = session.regenerate(seed=7)
    assert session.profile is new
    assert new is not old
    assert new.seed == 7
    assert len(session.log) == 0
    assert new.total_r > 0.0


def test_regenerate_with_same_seed_is_deterministic(session):
    first = session.regenerate(seed=5).area.copy()
    second = session.regenerate(seed=5).area
    np.testing.assert_array_equal(first, second)


def test_clear_readings_keeps_profile(session):
    profile = session.profile
    session.auto_scan()
    session.clear_readings()
    assert len(session.log) == 0
    assert session.profile is profile


def test_controls_are_clamped(session):
    session.set_probe(-3.0)
    assert session.probe_x == 0.0
    session.set_probe(5.0)
    assert session.probe_x == session.profile.length
    session.set_current(10.0)
    assert session.current == session.config.current_range[1]
    session.set_current(0.0)
    assert session.current == session.config.current_range[0]
    session.set_noise_std(1.0)
    assert session.noise_std == session.config.noise_range[1]


def test_noise_model_follows_config(session):
    session.set_noise_std(0.01)
    assert session.noise_model() == GaussianNoise(0.01)

    session.reset(get_preset("taper"))
    model = session.noise_model()
    assert isinstance(model, JohnsonNoise)
    assert model.temperature == 300.0
    assert model.bandwidth == 9e9
    assert model.instrument_std == 0.003


def test_reset_switches_preset(session):
    session.show_truth = True
    session.auto_scan()
    session.reset(get_preset("taper"))
    assert session.profile.kind == ProfileKind.EXPONENTIAL_TAPER
    assert session.profile.length == 0.01
    assert 0.0 <= session.probe_x <= 0.01
    assert session.show_truth is False
    assert len(session.log) == 0


def test_sessions_with_same_streams_are_identical():
    config = dataclasses.replace(get_preset("bar"), seed=123)
    a = ExperimentSession(config, normal=Mulberry32(9).normal)
    b = ExperimentSession(config, normal=Mulberry32(9).normal)
    a.auto_scan()
    b.auto_scan()
    np.testing.assert_array_equal(a.profile.area, b.profile.area)
    assert a.log.data == b.log.data


def test_default_session_uses_bar_preset():
    session = ExperimentSession()
    assert session.config.kind == ProfileKind.RANDOM_LOBES
    assert session.profile.length == 1.0
    assert session.probe_x == 0.35
