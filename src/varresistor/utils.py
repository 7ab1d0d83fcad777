from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import numpy as np
    import numpy.typing as npt

MM2_TO_M2 = 1e-6


def mm2_to_m2(area_mm2: float | npt.NDArray[np.float64]) -> float | npt.NDArray[np.float64]:
    """Convert square millimetres to square metres."""
    return area_mm2 * MM2_TO_M2


def m2_to_mm2(area_m2: float | npt.NDArray[np.float64]) -> float | npt.NDArray[np.float64]:
    """Convert square metres to square millimetres."""
    return area_m2 / MM2_TO_M2


def clamp(value: float, low: float, high: float) -> float:
    """Constrain `value` into [low, high]."""
    return max(low, min(high, value))


def fmt_num(value: float, digits: int = 2) -> str:
    """Fixed-point formatting used by the legend, meter and readings table."""
    return f"{value:.{digits}f}"
