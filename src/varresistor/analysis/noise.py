"""
Measurement Synthesizer
=======================
Turns the ideal bar voltage into a realistic voltmeter reading.

Why is this file needed?
------------------------
1. Physics: V = I * R(x), with Johnson noise sqrt(4 k_B T R BW) derived from
   the resistance between the terminal and the probe.
2. Testability: the standard-normal draw is injected, so a fixed draw gives
   a reproducible reading.

Classes:
    NoiseModel: Abstract source of the reading's standard deviation.
    GaussianNoise: Fixed instrument sigma.
    JohnsonNoise: Thermal noise combined in quadrature with instrument noise.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
import math
from typing import Callable, Optional

import numpy as np

from varresistor.config import BOLTZMANN_CONSTANT

NormalSource = Callable[[], float]


class NoiseModel(ABC):
    """
    Abstract base class for voltmeter noise.
    """
    NAME: str = "Noise"

    @abstractmethod
    def std(self, resistance: float) -> float:
        """
        Standard deviation of the reading.

        Args:
            resistance: Resistance between the x = 0 terminal and the probe (Ω).

        Returns:
            Total standard deviation in volts.
        """
        pass


@dataclass(frozen=True)
class GaussianNoise(NoiseModel):
    """Simple instrument noise with a fixed sigma (V)."""
    NAME = "Gaussian"

    sigma: float = 0.003

    def __post_init__(self) -> None:
        if self.sigma < 0.0:
            raise ValueError(f"Noise sigma must be non-negative, got {self.sigma}.")

    def std(self, resistance: float) -> float:
        return self.sigma


@dataclass(frozen=True)
class JohnsonNoise(NoiseModel):
    """
    Thermal (Johnson-Nyquist) noise of the probed segment plus amplifier noise.

    totalStd = sqrt(4 k_B T R BW + instrument_std²)
    """
    NAME = "Johnson"

    temperature: float = 300.0  # K
    bandwidth: float = 9e9  # Hz, wide so the thermal part is visible
    instrument_std: float = 0.003  # V rms
    boltzmann: float = BOLTZMANN_CONSTANT

    def __post_init__(self) -> None:
        for name in ("temperature", "bandwidth", "instrument_std"):
            value = getattr(self, name)
            if value < 0.0:
                raise ValueError(f"'{name}' must be non-negative, got {value}.")

    def johnson_std(self, resistance: float) -> float:
        return math.sqrt(4.0 * self.boltzmann * self.temperature * max(resistance, 0.0) * self.bandwidth)

    def std(self, resistance: float) -> float:
        return math.hypot(self.johnson_std(resistance), self.instrument_std)


def ideal_voltage(current: float, resistance: float) -> float:
    return current * resistance


def measure_voltage(
    current: float,
    resistance_up_to: Callable[[float], float],
    x: float,
    noise: NoiseModel,
    normal: NormalSource,
) -> float:
    """
    Synthesize one voltmeter reading at probe position `x`.

    Args:
        current: Drive current in amperes.
        resistance_up_to: R(x) lookup of the current profile.
        x: Probe position in meters.
        noise: Noise model giving the reading's standard deviation.
        normal: Zero-argument callable returning one standard-normal draw.
            It is called exactly once.

    Returns:
        Measured voltage; may be negative for readings near x = 0.
    """
    resistance = resistance_up_to(x)
    ideal = ideal_voltage(current, resistance)
    return ideal + noise.std(resistance) * normal()


def numpy_normal_source(seed: Optional[int] = None) -> NormalSource:
    """Standard-normal draw source backed by `numpy.random.default_rng`."""
    rng = np.random.default_rng(seed)
    return lambda: float(rng.standard_normal())
