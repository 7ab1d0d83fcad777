"""
Frame Rendering
===============
Pure conversion of an ExperimentSession into drawable data.

Why is this file needed?
------------------------
1. Separation: The per-frame redraw is driven by an external scheduler (a Qt
   timer in the GUI). Everything that scheduler needs is computed here, so
   the simulation core carries no rendering loop.
2. Testability: `render` has no side effects and consumes no random draws;
   the caller passes in the voltmeter reading.

Classes:
    Frame: Everything one redraw needs.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

import numpy as np

from varresistor.config import ProfileKind
from varresistor.utils import fmt_num

if TYPE_CHECKING:
    import numpy.typing as npt
    from varresistor.model.state import ExperimentSession

MIN_VMAX = 0.05  # V
VMAX_HEADROOM = 1.05
BAR_HEIGHT_RANGE = (0.05, 1.0)


@dataclass
class Frame:
    """Drawable snapshot of a session."""
    length: float
    probe_x: float

    # Bar: positions (m) and heights normalised into BAR_HEIGHT_RANGE
    bar_x: npt.NDArray[np.float64]
    bar_height: npt.NDArray[np.float64]
    # Radius (m) of a round conductor with the same area; drawn mirrored for axisymmetric bars
    bar_radius: npt.NDArray[np.float64]
    axisymmetric: bool
    truth_visible: bool

    # Voltage graph
    vmax: float
    scatter_x: npt.NDArray[np.float64]
    scatter_v: npt.NDArray[np.float64]
    ideal_x: Optional[npt.NDArray[np.float64]] = None
    ideal_v: Optional[npt.NDArray[np.float64]] = None

    meter_voltage: Optional[float] = None
    legend: list[str] = field(default_factory=list)
    table_rows: list[tuple[str, str, str]] = field(default_factory=list)


def normalise_heights(
    area: npt.NDArray[np.float64],
    min_area: float,
    max_area: float,
) -> npt.NDArray[np.float64]:
    """Map areas linearly from [min_area, max_area] onto BAR_HEIGHT_RANGE."""
    low, high = BAR_HEIGHT_RANGE
    span = max_area - min_area
    if span <= 0.0:
        return np.full_like(area, high)
    return low + (high - low) * (area - min_area) / span


def voltage_axis_max(current: float, total_r: float) -> float:
    return max(current * total_r * VMAX_HEADROOM, MIN_VMAX)


def legend_lines(session: ExperimentSession) -> list[str]:
    profile = session.profile
    return [
        f"Current source I = {fmt_num(session.current, 2)} A",
        f"Resistivity rho = {(profile.rho or 0.0):.3g} ohm*m",
        f"Total R = {fmt_num(profile.total_r, 4)} ohm",
        f"Data points = {len(session.log)}",
    ]


def render(
    session: ExperimentSession,
    reading: Optional[float] = None,
    bar_steps: int = 256,
    curve_steps: int = 220,
) -> Frame:
    """
    Build the frame for the current session state.

    Args:
        session: Session to draw.
        reading: Voltmeter value to display, taken by the caller.
        bar_steps: Resolution of the bar outline.
        curve_steps: Resolution of the ideal V(x) curve.

    Returns:
        A Frame. The ideal curve is included only when the session shows the
        ideal curve or reveals the hidden profile.
    """
    profile = session.profile

    bar_x = np.linspace(0.0, profile.length, bar_steps)
    bar_height = normalise_heights(profile.area_at(bar_x), profile.min_area, profile.max_area)

    ideal_x = ideal_v = None
    if session.show_ideal or session.show_truth:
        ideal_x, ideal_v = profile.ideal_voltage_curve(session.current, curve_steps)

    return Frame(
        length=profile.length,
        probe_x=session.probe_x,
        bar_x=bar_x,
        bar_height=bar_height,
        bar_radius=np.asarray(profile.radius_at(bar_x)),
        axisymmetric=profile.kind == ProfileKind.EXPONENTIAL_TAPER,
        truth_visible=session.show_truth,
        vmax=voltage_axis_max(session.current, profile.total_r),
        scatter_x=session.log.positions(),
        scatter_v=session.log.voltages(),
        ideal_x=ideal_x,
        ideal_v=ideal_v,
        meter_voltage=reading,
        legend=legend_lines(session),
        table_rows=session.log.table_rows(),
    )
