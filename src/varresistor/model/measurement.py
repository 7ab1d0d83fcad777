"""
Measurement Log
===============
Ordered, append-only record of the probe readings taken in a session.

Classes:
    MeasurementSample: One immutable (x, v) reading.
    MeasurementLog: Insertion-ordered list of samples with auto-scan support.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import TYPE_CHECKING, Callable, Iterator, List

import numpy as np

from varresistor.config import DEFAULT_SCAN_COUNT
from varresistor.utils import fmt_num

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MeasurementSample:
    x: float  # m
    v: float  # V, may be negative because of noise


@dataclass
class MeasurementLog:
    """
    Readings in insertion order. For `auto_scan` that is increasing x.
    """
    data: List[MeasurementSample] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.data)

    def __iter__(self) -> Iterator[MeasurementSample]:
        return iter(self.data)

    def add(self, x: float, v: float) -> MeasurementSample:
        sample = MeasurementSample(float(x), float(v))
        self.data.append(sample)
        return sample

    def clear(self) -> None:
        self.data.clear()

    def auto_scan(
        self,
        length: float,
        measure: Callable[[float], float],
        count: int = DEFAULT_SCAN_COUNT,
    ) -> None:
        """
        Replace the log with `count` readings at evenly spaced positions.

        Positions run from 0 to `length` inclusive; `measure` is called once
        per position, in increasing x.

        Raises:
            ValueError: If `count` is smaller than 1.
        """
        if count < 1:
            raise ValueError(f"Auto-scan needs at least one position, got count={count}.")

        self.clear()
        for x in np.linspace(0.0, length, count):
            self.add(x, measure(float(x)))
        logger.info(f"Auto-scan logged {count} readings over {length:g} m.")

    def positions(self) -> npt.NDArray[np.float64]:
        return np.array([s.x for s in self.data], dtype=np.float64)

    def voltages(self) -> npt.NDArray[np.float64]:
        return np.array([s.v for s in self.data], dtype=np.float64)

    def table_rows(self, digits: int = 3) -> list[tuple[str, str, str]]:
        """Rows for the readings table: (#, x, V), numbered from 1."""
        return [
            (f"{i}", fmt_num(s.x, digits), fmt_num(s.v, digits))
            for i, s in enumerate(self.data, start=1)
        ]
