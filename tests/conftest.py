from datetime import datetime

import pytest

from fractal_clock.clock import FractalClock
from fractal_clock.settings import ClockSettings
from fractal_clock.surface import RecordingSurface

MIDNIGHT = datetime(2024, 1, 1, 0, 0, 0)
QUARTER_PAST_THREE = datetime(2024, 1, 1, 3, 15, 30, 500_000)


@pytest.fixture
def recording_surface() -> RecordingSurface:
    return RecordingSurface(200, 100)


@pytest.fixture
def seeded_settings() -> ClockSettings:
    settings = ClockSettings()
    settings.rng.seed(1234)
    return settings


@pytest.fixture
def small_clock(seeded_settings) -> FractalClock:
    seeded_settings.depth = 3
    return FractalClock(64, 48, seeded_settings, time_source=lambda: QUARTER_PAST_THREE)
