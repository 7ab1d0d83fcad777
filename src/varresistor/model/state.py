"""
Experiment Session (Data Model)
===============================
This module defines the central data structure for a running experiment.

Why is this file needed?
------------------------
1. State Management: It holds the hidden profile, the readings log and the
   slider-bound parameters in one explicit object instead of module globals.
2. Decoupling: Views read from this object; controls (sliders, buttons) call
   its methods. Nothing here knows about Qt.
3. Testability: The random streams are injected, so a session can be
   replayed exactly in unit tests.

Classes:
    ExperimentSession: The main container class.
"""
from __future__ import annotations

import logging
from typing import Optional

from varresistor.analysis.noise import (
    GaussianNoise, JohnsonNoise, NoiseModel, NormalSource, measure_voltage, numpy_normal_source,
)
from varresistor.config import ExperimentConfig, NoiseMode, get_preset
from varresistor.model.measurement import MeasurementLog, MeasurementSample
from varresistor.model.profiles import AreaProfile, build_profile
from varresistor.utils import clamp

logger = logging.getLogger(__name__)


class ExperimentSession:
    """
    Owns the current AreaProfile and MeasurementLog.
    Pass this instance to the renderer and the UI.
    """

    def __init__(
        self,
        config: Optional[ExperimentConfig] = None,
        normal: Optional[NormalSource] = None,
    ) -> None:
        self.config: ExperimentConfig = config or get_preset("bar")
        self.normal: NormalSource = normal or numpy_normal_source(self.config.seed)
        self.log = MeasurementLog()

        self.current: float = self.config.current
        self.probe_x: float = self.config.probe_x
        self.noise_std: float = self.config.noise_std
        self.show_truth: bool = False
        self.show_ideal: bool = False

        self.profile: AreaProfile = self._build_profile(self.config.seed)
        self.probe_x = clamp(self.probe_x, 0.0, self.profile.length)

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------
    def _build_profile(self, seed: Optional[int]) -> AreaProfile:
        profile = build_profile(self.config, seed)
        logger.info(
            f"New {profile.kind} profile (seed {profile.seed}): total R = {profile.total_r:.6g} Ω."
        )
        return profile

    def regenerate(self, seed: Optional[int] = None) -> AreaProfile:
        """Replace the hidden profile wholesale and drop all readings."""
        self.profile = self._build_profile(seed)
        self.log.clear()
        return self.profile

    def reset(self, config: Optional[ExperimentConfig] = None) -> None:
        """Start over, optionally with a different configuration."""
        if config is not None:
            self.config = config
        self.current = self.config.current
        self.noise_std = self.config.noise_std
        self.show_truth = False
        self.show_ideal = False
        self.regenerate(self.config.seed)
        self.probe_x = clamp(self.config.probe_x, 0.0, self.profile.length)
        logger.info("Experiment session has been reset.")

    # ------------------------------------------------------------------
    # Controls
    # ------------------------------------------------------------------
    def set_current(self, value: float) -> None:
        self.current = clamp(value, *self.config.current_range)

    def set_probe(self, x: float) -> None:
        self.probe_x = clamp(x, 0.0, self.profile.length)

    def set_noise_std(self, value: float) -> None:
        self.noise_std = clamp(value, *self.config.noise_range)

    def noise_model(self) -> NoiseModel:
        cfg = self.config
        if cfg.noise_mode == NoiseMode.JOHNSON:
            return JohnsonNoise(
                temperature=cfg.temperature,
                bandwidth=cfg.bandwidth,
                instrument_std=cfg.instrument_std,
            )
        return GaussianNoise(self.noise_std)

    # ------------------------------------------------------------------
    # Measurements
    # ------------------------------------------------------------------
    def measure_voltage(self, x: Optional[float] = None) -> float:
        """One noisy voltmeter reading; defaults to the current probe position."""
        if x is None:
            x = self.probe_x
        return measure_voltage(
            self.current, self.profile.resistance_up_to, x, self.noise_model(), self.normal
        )

    def add_reading(self) -> MeasurementSample:
        sample = self.log.add(self.probe_x, self.measure_voltage())
        logger.debug(f"Reading #{len(self.log)}: x = {sample.x:.6g} m, V = {sample.v:.6g} V.")
        return sample

    def auto_scan(self, count: Optional[int] = None) -> None:
        self.log.auto_scan(self.profile.length, self.measure_voltage,
                           self.config.scan_count if count is None else count)

    def clear_readings(self) -> None:
        self.log.clear()
