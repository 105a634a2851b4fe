"""Driver eligibility for new assignments.

Eligibility is computed from scratch on every call. The stored status is a
cache that can say AVAILABLE while a trip is still open, so an open trip
always wins over the status field.
"""

from collections.abc import Iterable

from ridedispatch.models import Driver, DriverStatus


def has_open_trip(driver: Driver) -> bool:
    return any(trip.end_time is None for trip in driver.trips)


def is_eligible(driver: Driver) -> bool:
    return driver.status == DriverStatus.AVAILABLE and not has_open_trip(driver)


def eligible_drivers(drivers: Iterable[Driver]) -> list[Driver]:
    """Eligible drivers, in store order."""
    return [driver for driver in drivers if is_eligible(driver)]
