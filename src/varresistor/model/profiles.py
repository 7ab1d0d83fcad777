"""
Area Profiles
=============
Defines the hidden cross-section A(x) of the bar and the lookups built on it.

Why is this file needed?
------------------------
1. Physics: The profile is the quantity the student tries to infer. It must
   stay strictly positive and bounded, otherwise rho / A(x) blows up.
2. Strategies: The experiment ships two physical models (random lobes on a
   rectangular bar, exponential taper of a round conductor). Each is a
   generator class, selected by ProfileKind.
3. Lookups: After `precompute(rho)` the profile answers A(x) and R(x) by
   interpolation, which is what the voltmeter and the plots query.

Classes:
    AreaProfileGenerator: Abstract profile strategy.
    RandomLobesGenerator: Sum of 2-4 random sinusoidal lobes plus jitter.
    ExponentialTaperGenerator: A(x) = pi * (r0 * exp(-x / ell))².
    AreaProfile: Discretized A(x) with its cumulative resistance table.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
import logging
import math
from typing import TYPE_CHECKING, Optional

import numpy as np
import matplotlib.pyplot as plt

from varresistor.analysis.resistance import cumulative_resistance, interpolate_samples
from varresistor.config import (
    COPPER_RESISTIVITY, MIN_AREA_FLOOR, MIN_SAMPLES, ExperimentConfig, ProfileKind, TaperParams,
)
from varresistor.model.prng import Mulberry32
from varresistor.utils import m2_to_mm2, mm2_to_m2

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

TINY_AREA = float(np.finfo(np.float64).tiny)


# ==========================================
# ABSTRACT CLASS FOR PROFILE GENERATORS
# ==========================================
class AreaProfileGenerator(ABC):
    """
    Abstract base class for area profile strategies.
    """
    KIND: ProfileKind

    @abstractmethod
    def generate(
        self,
        positions: npt.NDArray[np.float64],
        rng: Mulberry32,
        min_area: float,
        max_area: float,
    ) -> npt.NDArray[np.float64]:
        """
        Fill the area samples.

        Args:
            positions: Sample positions in meters, evenly spaced from 0 to L.
            rng: Random stream; consumed only by randomized strategies.
            min_area: Lower area bound in mm².
            max_area: Upper area bound in mm².

        Returns:
            Area in mm² at each position, strictly positive.
        """
        pass

    def bounds(
        self,
        area: npt.NDArray[np.float64],
        min_area: float,
        max_area: float,
    ) -> tuple[float, float]:
        """Area bounds (mm²) the generated samples are guaranteed to respect."""
        return min_area, max_area


class RandomLobesGenerator(AreaProfileGenerator):
    """
    Smooth random profile: a base value plus 2-4 sinusoidal lobes, each with
    its own phase in [0, 2pi) and frequency in [0.7, 2.0], a small uniform
    jitter per sample, clamped into [min_area, max_area].
    """
    KIND = ProfileKind.RANDOM_LOBES

    BASE_AREA = 1.4  # mm²
    LOBE_AMPLITUDE = 0.6  # mm²
    JITTER_AMPLITUDE = 0.3  # mm², peak to peak
    LOBE_COUNT = (2, 4)
    FREQUENCY_RANGE = (0.7, 2.0)

    def generate(
        self,
        positions: npt.NDArray[np.float64],
        rng: Mulberry32,
        min_area: float,
        max_area: float,
    ) -> npt.NDArray[np.float64]:
        n = positions.size
        x_norm = np.linspace(0.0, 1.0, n)

        lobes = rng.randint(*self.LOBE_COUNT)
        # Phase and frequency are drawn once per lobe so the profile stays smooth
        values = np.full(n, self.BASE_AREA)
        for _ in range(lobes):
            phase = rng.uniform(0.0, 2.0 * math.pi)
            freq = rng.uniform(*self.FREQUENCY_RANGE)
            values += self.LOBE_AMPLITUDE * np.sin(freq * math.pi * x_norm + phase)

        jitter = np.array([rng.next() - 0.5 for _ in range(n)])
        values += self.JITTER_AMPLITUDE * jitter

        logger.debug(f"Random lobes profile: {lobes} lobes over {n} samples.")
        return np.clip(values, min_area, max_area)


class ExponentialTaperGenerator(AreaProfileGenerator):
    """
    Axisymmetric conductor whose radius decays exponentially:
    r(x) = r0 * exp(-x / ell), A(x) = pi * r(x)².
    Strictly decreasing; the random stream is not consumed.
    """
    KIND = ProfileKind.EXPONENTIAL_TAPER

    def __init__(self, r0: float = 0.0004, ell: float = 0.008) -> None:
        if r0 <= 0.0 or ell <= 0.0:
            raise ValueError(f"Taper needs r0 > 0 and ell > 0, got r0={r0}, ell={ell}.")
        self.r0 = r0
        self.ell = ell

    def radius(self, x: float | npt.NDArray[np.float64]) -> float | npt.NDArray[np.float64]:
        """Radius in meters."""
        return self.r0 * np.exp(-np.asarray(x) / self.ell)

    def area(self, x: float | npt.NDArray[np.float64]) -> float | npt.NDArray[np.float64]:
        """Area in mm²; only values that underflow to zero are lifted to the smallest normal float."""
        return np.maximum(m2_to_mm2(np.pi * self.radius(x) ** 2), TINY_AREA)

    def generate(
        self,
        positions: npt.NDArray[np.float64],
        rng: Mulberry32,
        min_area: float,
        max_area: float,
    ) -> npt.NDArray[np.float64]:
        return self.area(positions)

    def bounds(
        self,
        area: npt.NDArray[np.float64],
        min_area: float,
        max_area: float,
    ) -> tuple[float, float]:
        # The taper's own range, area(L)..area(0), replaces the configured one
        return float(area.min()), float(area.max())


def create_generator(kind: ProfileKind | str, taper: Optional[TaperParams] = None) -> AreaProfileGenerator:
    """
    Factory for profile strategies.

    Raises:
        ValueError: If `kind` is not a known ProfileKind.
    """
    kind = ProfileKind(kind)
    if kind == ProfileKind.RANDOM_LOBES:
        return RandomLobesGenerator()
    taper = taper or TaperParams()
    return ExponentialTaperGenerator(r0=taper.r0, ell=taper.ell)


# ==========================================
# AREA PROFILE
# ==========================================
class AreaProfile:
    """
    Discretized cross-section A(x) over [0, L] and its resistance table.

    Invalid configuration is coerced instead of raised: fewer than two
    samples become two, a non-positive length yields a degenerate profile with
    zero resistance everywhere, non-positive or swapped area bounds are fixed.

    Attributes:
        length: Bar length L (m).
        samples: Sample count N.
        min_area, max_area: Area bounds (mm²).
        area: N area values (mm²).
        cumulative: N cumulative resistances (Ω); zeros until `precompute`.
        total_r: cumulative[-1] (Ω).
    """

    def __init__(
        self,
        length: float = 1.0,
        samples: int = 512,
        min_area: float = 0.6,
        max_area: float = 3.2,
        seed: Optional[int] = None,
        kind: ProfileKind | str = ProfileKind.RANDOM_LOBES,
        taper: Optional[TaperParams] = None,
        generator: Optional[AreaProfileGenerator] = None,
    ) -> None:
        self.degenerate = False
        if samples < MIN_SAMPLES:
            logger.warning(f"Sample count {samples} too small, using {MIN_SAMPLES}.")
            samples = MIN_SAMPLES
        if not math.isfinite(length) or length <= 0.0:
            logger.warning(f"Non-positive bar length {length}, profile is degenerate.")
            length = 0.0
            self.degenerate = True
        if min_area > max_area:
            logger.warning(f"Area bounds swapped ({min_area} > {max_area}).")
            min_area, max_area = max_area, min_area
        if min_area < MIN_AREA_FLOOR:
            logger.warning(f"Minimum area {min_area} mm² is not positive, using {MIN_AREA_FLOOR}.")
            min_area = MIN_AREA_FLOOR
            max_area = max(max_area, min_area)

        self.length: float = float(length)
        self.samples: int = int(samples)
        self.generator = generator or create_generator(kind, taper)
        self.kind: ProfileKind = self.generator.KIND
        self.rng = Mulberry32(seed)
        self.seed: int = self.rng.seed_value

        self.positions: npt.NDArray[np.float64] = np.linspace(0.0, self.length, self.samples)
        self.dx: float = self.length / (self.samples - 1)
        self.area: npt.NDArray[np.float64] = self.generator.generate(
            self.positions, self.rng, min_area, max_area
        )
        self.min_area, self.max_area = self.generator.bounds(self.area, min_area, max_area)

        self.cumulative: npt.NDArray[np.float64] = np.zeros(self.samples)
        self.total_r: float = 0.0
        self.rho: Optional[float] = None

    def precompute(self, rho: float = COPPER_RESISTIVITY) -> None:
        """
        Integrate rho / A(x) along the bar and store the cumulative table.
        Must be called once after construction before querying R(x).
        """
        self.rho = rho
        self.cumulative = cumulative_resistance(self.area, self.dx, rho)
        self.total_r = float(self.cumulative[-1])
        logger.debug(f"Integrated {self.kind} profile: total R = {self.total_r:.6g} Ω.")

    def area_at(self, x: float | npt.NDArray[np.float64]) -> float | npt.NDArray[np.float64]:
        """Interpolated area (mm²); x is clamped into [0, L]."""
        return interpolate_samples(x, self.area, self.length)

    def resistance_up_to(self, x: float | npt.NDArray[np.float64]) -> float | npt.NDArray[np.float64]:
        """Interpolated resistance between x = 0 and x (Ω); x is clamped into [0, L]."""
        return interpolate_samples(x, self.cumulative, self.length)

    def radius_at(self, x: float | npt.NDArray[np.float64]) -> float | npt.NDArray[np.float64]:
        """Radius (m) of a round conductor with the same area."""
        return np.sqrt(mm2_to_m2(np.asarray(self.area_at(x))) / np.pi)

    def ideal_voltage_curve(
        self,
        current: float,
        n_points: int = 220,
    ) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
        """Noise-free V(x) = I * R(x) on `n_points` evenly spaced positions."""
        xs = np.linspace(0.0, self.length, n_points)
        return xs, current * self.resistance_up_to(xs)

    def plot(self) -> None:
        """
        Plot A(x) and R(x) in a quick-look matplotlib window.
        """
        plt.rcParams["figure.constrained_layout.use"] = True
        fig, (ax_area, ax_res) = plt.subplots(2, 1, sharex=True, figsize=(7, 6))

        ax_area.plot(self.positions, self.area, 'b', lw=2)
        ax_area.set_ylabel("Area A(x) (mm²)")
        ax_area.set_title(f"{self.kind} profile (seed {self.seed})")

        ax_res.plot(self.positions, self.cumulative, 'r', lw=2)
        ax_res.set_ylabel("Resistance R(x) (Ω)")
        ax_res.set_xlabel("Position x (m)")

        for ax in (ax_area, ax_res):
            ax.grid(visible=True, which='major', axis='both', linestyle='-', color='gray', lw=0.5)
            ax.minorticks_on()
            ax.grid(visible=True, which='minor', axis='both', linestyle=':', color='gray', lw=0.5)

        plt.show()


def build_profile(
    config: ExperimentConfig,
    seed: Optional[int] = None,
    precompute: bool = True,
) -> AreaProfile:
    """
    Construct and generate the profile described by `config`.

    Args:
        config: Bar geometry, area bounds, profile kind, taper and rho.
        seed: PRNG seed; None seeds from the wall clock.
        precompute: Integrate the resistance table with `config.rho` as well.

    Returns:
        The new AreaProfile.
    """
    profile = AreaProfile(
        length=config.length,
        samples=config.samples,
        min_area=config.min_area,
        max_area=config.max_area,
        seed=seed,
        kind=config.kind,
        taper=config.taper,
    )
    if precompute:
        profile.precompute(config.rho)
    return profile
