"""
Configuration & Presets
=======================
This module serves as the central registry for physical constants and the
default parameters of the experiment.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (resistivity, slider ranges, noise
   bandwidth) from being scattered through the model and the UI.
2. Variants: The experiment exists in two flavours, a copper bar with a random
   lobed profile and a tapering conductor with Johnson noise. Both are kept
   here as named presets instead of being hardcoded in the session.

Exports:
    BOLTZMANN_CONSTANT (float): k_B in J/K.
    ExperimentConfig: Dataclass with every session parameter.
    PRESETS (dict): Named configurations.
    get_preset: Fresh copy of a named configuration.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Dict, Optional, Tuple


# Global Constants
BOLTZMANN_CONSTANT: float = 1.380649e-23  # J/K
COPPER_RESISTIVITY: float = 1.7e-8  # Ω·m
DEFAULT_SCAN_COUNT: int = 24
MIN_SAMPLES: int = 2
MIN_AREA_FLOOR: float = 1e-6  # mm², keeps every profile strictly positive


class ProfileKind(StrEnum):
    RANDOM_LOBES = "random-lobes"
    EXPONENTIAL_TAPER = "exponential-taper"


class NoiseMode(StrEnum):
    SIMPLE = "simple"
    JOHNSON = "johnson"


@dataclass
class TaperParams:
    r0: float = 0.0004  # m, radius at x = 0
    ell: float = 0.008  # m, decay length


@dataclass
class ExperimentConfig:
    """
    Every parameter an ExperimentSession needs.
    Units: meters, mm² (areas), Ω·m, amperes, volts, kelvin, hertz.
    """
    # Bar
    length: float = 1.0
    samples: int = 512
    min_area: float = 0.6
    max_area: float = 3.2
    rho: float = COPPER_RESISTIVITY
    kind: ProfileKind = ProfileKind.RANDOM_LOBES
    taper: TaperParams = field(default_factory=TaperParams)
    seed: Optional[int] = None

    # Drive and probe
    current: float = 0.25
    probe_x: float = 0.35
    current_range: Tuple[float, float] = (0.05, 0.8)

    # Voltmeter
    noise_mode: NoiseMode = NoiseMode.SIMPLE
    noise_std: float = 0.003
    noise_range: Tuple[float, float] = (0.0, 0.02)
    temperature: float = 300.0
    bandwidth: float = 9e9
    instrument_std: float = 0.003

    scan_count: int = DEFAULT_SCAN_COUNT


PRESETS: Dict[str, ExperimentConfig] = {
    "bar": ExperimentConfig(),
    "taper": ExperimentConfig(
        length=0.01,
        samples=512,
        rho=1e-4,
        kind=ProfileKind.EXPONENTIAL_TAPER,
        taper=TaperParams(r0=0.0004, ell=0.008),
        current=0.25,
        probe_x=0.0035,
        current_range=(0.01, 0.75),
        noise_mode=NoiseMode.JOHNSON,
        temperature=300.0,
        bandwidth=9e9,
        instrument_std=0.003,
    ),
}


def get_preset(name: str) -> ExperimentConfig:
    """Return an independent copy of the named preset."""
    if name not in PRESETS:
        raise ValueError(f"Unknown preset '{name}'. Available: {', '.join(PRESETS)}.")
    preset = PRESETS[name]
    return replace(preset, taper=replace(preset.taper))
