import matplotlib
import pytest

matplotlib.use("Agg")

from varresistor.config import COPPER_RESISTIVITY  # noqa: E402
from varresistor.model.profiles import AreaProfile  # noqa: E402


@pytest.fixture
def bar_profile() -> AreaProfile:
    profile = AreaProfile(length=1.0, samples=512, min_area=0.6, max_area=3.2, seed=42)
    profile.precompute(COPPER_RESISTIVITY)
    return profile


@pytest.fixture
def taper_profile() -> AreaProfile:
    profile = AreaProfile(length=0.01, samples=512, kind="exponential-taper")
    profile.precompute(1e-4)
    return profile


class CountingNormal:
    """Normal source returning a fixed draw and counting calls."""

    def __init__(self, value: float = 0.0) -> None:
        self.value = value
        self.calls = 0

    def __call__(self) -> float:
        self.calls += 1
        return self.value


@pytest.fixture
def zero_normal() -> CountingNormal:
    return CountingNormal(0.0)


@pytest.fixture
def counting_normal() -> type[CountingNormal]:
    return CountingNormal
