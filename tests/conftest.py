from pathlib import Path

import pytest

from ridedispatch.dispatcher import TripDispatcher
from tests.sample_data import DRIVERS, PASSENGERS, TRIPS, fixed_clock


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding the CSV copies of the sample data."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def dispatcher() -> TripDispatcher:
    """Registry built from the sample passengers, drivers and trips."""
    return TripDispatcher(PASSENGERS, DRIVERS, TRIPS, clock=fixed_clock)


@pytest.fixture
def make_dispatcher():
    """Factory for registries built from custom record lists."""

    def _make(passengers=None, drivers=None, trips=None) -> TripDispatcher:
        return TripDispatcher(
            PASSENGERS if passengers is None else passengers,
            DRIVERS if drivers is None else drivers,
            TRIPS if trips is None else trips,
            clock=fixed_clock,
        )

    return _make
