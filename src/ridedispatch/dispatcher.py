"""Trip dispatch: driver assignment and the registry facade callers use."""

import logging
from collections.abc import Callable, Iterable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ridedispatch.core.exceptions import NoDriverAvailableError, StateError, ValidationError
from ridedispatch.dispatch_logging import log_context, log_trip_context
from ridedispatch.linker import link_trips
from ridedispatch.loader import load_directory
from ridedispatch.lookup import LookupService
from ridedispatch.matching import eligible_drivers, has_open_trip, select_driver
from ridedispatch.models import Driver, DriverStatus, Passenger, Trip
from ridedispatch.store import EntityStore

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to a naive timestamp; aware timestamps pass through."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _utc_clock(clock: Clock) -> Clock:
    def now() -> datetime:
        return as_utc(clock())

    return now


class DispatchEngine:
    """Assigns drivers to trip requests and records the resulting trips.

    Thread-safe: selection and every mutation of a request happen inside a
    single store transaction, so concurrent requests can neither pick the
    same driver nor mint the same trip id.
    """

    def __init__(
        self,
        store: EntityStore,
        lookup: LookupService,
        clock: Clock | None = None,
    ) -> None:
        self._store = store
        self._lookup = lookup
        self._clock = _utc_clock(clock) if clock is not None else utc_now

    def request_trip(self, passenger_id: Any) -> Trip:
        """Create a trip for ``passenger_id`` with the driver chosen by policy.

        Raises:
            InvalidIdError: ``passenger_id`` is not a positive int.
            NotFoundError: no such passenger.
            NoDriverAvailableError: every driver is unavailable or mid-trip.
        """
        passenger = self._lookup.find_passenger(passenger_id)

        with self._store.transaction():
            candidates = eligible_drivers(self._store.drivers)
            driver = select_driver(candidates)
            if driver is None:
                with log_context(passenger_id=passenger.id, eligible_drivers=0):
                    logger.warning(
                        "No driver available for passenger %d (%d drivers, none eligible)",
                        passenger.id,
                        len(self._store.drivers),
                    )
                raise NoDriverAvailableError(
                    "No drivers currently available",
                    details={"passenger_id": passenger.id},
                )

            trip = Trip(
                id=len(self._store.trips) + 1,
                passenger_id=passenger.id,
                driver_id=driver.id,
                start_time=self._clock(),
                end_time=None,
                rating=None,
                passenger=passenger,
                driver=driver,
            )
            self._assign(trip, driver, passenger)

        with log_trip_context(
            trip.id,
            driver_id=driver.id,
            passenger_id=passenger.id,
            eligible_drivers=len(candidates),
        ):
            logger.info("Trip %d: driver %d assigned to passenger %d", trip.id, driver.id, passenger.id)
        return trip

    def _assign(self, trip: Trip, driver: Driver, passenger: Passenger) -> None:
        driver.add_trip(trip)
        driver.change_status(DriverStatus.UNAVAILABLE)
        passenger.add_trip(trip)
        self._store.trips.append(trip)

    def complete_trip(
        self,
        trip_id: Any,
        rating: int,
        end_time: datetime | None = None,
    ) -> Trip:
        """Close an in-progress trip and release its driver."""
        if isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
            raise ValidationError(
                f"Rating must be an integer from 1 to 5, got {rating!r}",
                details={"trip_id": trip_id, "rating": rating},
            )

        trip = self._lookup.find_trip(trip_id)

        with self._store.transaction():
            if not trip.in_progress:
                raise StateError(
                    f"Trip {trip.id} is already complete",
                    details={"trip_id": trip.id},
                )

            ended_at = as_utc(end_time) if end_time is not None else self._clock()
            if ended_at < trip.start_time:
                raise StateError(
                    f"Trip {trip.id} cannot end before it starts",
                    details={
                        "trip_id": trip.id,
                        "start_time": trip.start_time.isoformat(),
                        "end_time": ended_at.isoformat(),
                    },
                )

            trip.end_time = ended_at
            trip.rating = rating
            if trip.driver is not None and not has_open_trip(trip.driver):
                trip.driver.change_status(DriverStatus.AVAILABLE)

        with log_trip_context(trip.id, driver_id=trip.driver_id, rating=rating):
            logger.info("Trip %d completed with rating %d", trip.id, rating)
        return trip


class TripDispatcher:
    """Ride registry: linked passengers, drivers and trips plus dispatch.

    Construction links every loaded trip and fails with LinkIntegrityError on
    the first unresolved reference. The ``passengers``, ``drivers`` and
    ``trips`` accessors return tuples reflecting the state at call time.
    """

    def __init__(
        self,
        passengers: Iterable[Any],
        drivers: Iterable[Any],
        trips: Iterable[Any],
        clock: Clock | None = None,
    ) -> None:
        self._store = EntityStore.from_records(passengers, drivers, trips)
        self._lookup = LookupService(self._store)
        link_trips(self._store, self._lookup)
        self._engine = DispatchEngine(self._store, self._lookup, clock=clock)

    @classmethod
    def from_directory(cls, directory: Path | str, clock: Clock | None = None) -> "TripDispatcher":
        records = load_directory(directory)
        return cls(records.passengers, records.drivers, records.trips, clock=clock)

    @property
    def passengers(self) -> tuple[Passenger, ...]:
        return self._store.snapshot_passengers()

    @property
    def drivers(self) -> tuple[Driver, ...]:
        return self._store.snapshot_drivers()

    @property
    def trips(self) -> tuple[Trip, ...]:
        return self._store.snapshot_trips()

    def find_passenger(self, passenger_id: Any) -> Passenger:
        return self._lookup.find_passenger(passenger_id)

    def find_driver(self, driver_id: Any) -> Driver:
        return self._lookup.find_driver(driver_id)

    def find_trip(self, trip_id: Any) -> Trip:
        return self._lookup.find_trip(trip_id)

    def request_trip(self, passenger_id: Any) -> Trip:
        return self._engine.request_trip(passenger_id)

    def complete_trip(self, trip_id: Any, rating: int, end_time: datetime | None = None) -> Trip:
        return self._engine.complete_trip(trip_id, rating, end_time=end_time)

    def summary(self) -> dict[str, int]:
        counts = self._store.counts()
        counts["available_drivers"] = len(eligible_drivers(self._store.snapshot_drivers()))
        return counts

    def __repr__(self) -> str:
        counts = self._store.counts()
        return (
            f"<{type(self).__name__} {counts['trips']} trips, "
            f"{counts['drivers']} drivers, {counts['passengers']} passengers>"
        )
