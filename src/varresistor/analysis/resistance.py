from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from varresistor.utils import mm2_to_m2

if TYPE_CHECKING:
    import numpy.typing as npt


def cumulative_resistance(
    area_mm2: npt.NDArray[np.float64],
    dx: float,
    rho: float,
) -> npt.NDArray[np.float64]:
    """
    Integrate dR = rho * dx / A(x) along the bar.

    Forward rectangle rule over the N-1 intervals: interval i contributes
    rho * dx / A(sample_i) for i = 1..N-1, so that cumulative[0] = 0 and
    cumulative[i] = cumulative[i-1] + rho * dx / A_i.

    Args:
        area_mm2: Positive cross-section samples in mm².
        dx: Sample spacing in meters.
        rho: Resistivity in Ω·m.

    Returns:
        Non-decreasing cumulative resistance in Ω, same length as `area_mm2`.
    """
    area_mm2 = np.asarray(area_mm2, dtype=np.float64)
    cumulative = np.zeros_like(area_mm2)
    if area_mm2.size < 2:
        return cumulative

    increments = rho * dx / mm2_to_m2(area_mm2[1:])
    cumulative[1:] = np.cumsum(increments)
    return cumulative


def interpolate_samples(
    x: float | npt.NDArray[np.float64],
    values: npt.NDArray[np.float64],
    length: float,
) -> float | npt.NDArray[np.float64]:
    """
    Linear interpolation between the two nearest of N evenly spaced samples.

    Positions are clamped into [0, length] first. The result is additionally
    clipped into [values[i0], values[i1]] so that rounding in the lerp can
    never overshoot a sample; for non-decreasing `values` this keeps the
    interpolant non-decreasing in x.

    Args:
        x: Position(s) in meters.
        values: N samples taken at linspace(0, length, N).
        length: Bar length in meters.

    Returns:
        A float for scalar input, an array otherwise.
    """
    n = values.size
    scalar = np.ndim(x) == 0
    if n == 1 or length <= 0.0:
        out = np.full(np.shape(x), values[0], dtype=np.float64)
        return float(out) if scalar else out

    t = np.asarray(x, dtype=np.float64) / length
    t = np.clip(np.nan_to_num(t, nan=0.0), 0.0, 1.0)
    idx = t * (n - 1)
    i0 = np.minimum(np.floor(idx).astype(np.intp), n - 1)
    i1 = np.minimum(i0 + 1, n - 1)
    f = idx - i0

    v0 = values[i0]
    v1 = values[i1]
    out = np.clip(v0 + (v1 - v0) * f, np.minimum(v0, v1), np.maximum(v0, v1))
    return float(out) if scalar else out
