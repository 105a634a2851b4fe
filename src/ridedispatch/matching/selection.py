"""Deterministic driver selection policy."""

from collections.abc import Sequence
from datetime import datetime

from ridedispatch.models import Driver


def last_trip_ended_at(driver: Driver) -> datetime:
    """End time of the driver's most recent trip.

    Only meaningful for eligible drivers, whose trips have all ended.
    """
    return max(trip.end_time for trip in driver.trips if trip.end_time is not None)


def select_driver(candidates: Sequence[Driver]) -> Driver | None:
    """Pick a driver from already-eligible candidates.

    1. The first candidate that has never driven.
    2. Otherwise the longest idle candidate: earliest last end time.
    Ties go to the candidate that comes first in ``candidates``.
    Returns None when there are no candidates.
    """
    if not candidates:
        return None

    for driver in candidates:
        if not driver.trips:
            return driver

    # min() keeps the first of equal keys, which preserves store order on ties
    return min(candidates, key=last_trip_ended_at)
