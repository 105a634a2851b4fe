"""Linked domain entities: passengers, drivers and the trips between them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class DriverStatus(str, Enum):
    """Stored driver status. A cache, not the source of truth for eligibility."""

    AVAILABLE = "AVAILABLE"
    UNAVAILABLE = "UNAVAILABLE"


@dataclass(eq=False)
class Passenger:
    id: int
    name: str
    phone_number: str | None = None
    trips: list[Trip] = field(default_factory=list, repr=False)

    def add_trip(self, trip: Trip) -> None:
        self.trips.append(trip)


@dataclass(eq=False)
class Driver:
    id: int
    name: str
    vehicle_id: str
    status: DriverStatus = DriverStatus.AVAILABLE
    trips: list[Trip] = field(default_factory=list, repr=False)

    def add_trip(self, trip: Trip) -> None:
        self.trips.append(trip)

    def change_status(self, status: DriverStatus) -> None:
        self.status = status


@dataclass(eq=False)
class Trip:
    """A ride between a passenger and a driver.

    ``end_time`` of None means the trip is still in progress. The
    ``passenger`` and ``driver`` references are filled in by linking (for
    loaded trips) or at creation (for dispatched trips).
    """

    id: int
    passenger_id: int
    driver_id: int
    start_time: datetime
    end_time: datetime | None = None
    rating: int | None = None
    cost: float | None = None
    passenger: Passenger | None = field(default=None, repr=False)
    driver: Driver | None = field(default=None, repr=False)

    @property
    def in_progress(self) -> bool:
        return self.end_time is None

    def connect(self, passenger: Passenger, driver: Driver) -> None:
        """Bind resolved parties and register this trip on both of them."""
        self.passenger = passenger
        self.driver = driver
        passenger.add_trip(self)
        driver.add_trip(self)
