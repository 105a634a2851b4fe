"""Entity store owning the passenger, driver and trip collections.

The store holds the three ordered collections and the single lock that
guards them. It has no entity mutation API of its own: the linker and the
dispatch engine append to the collections in place. What it does provide is
the transaction boundary those mutators run inside.
"""

import logging
import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ridedispatch.models import Driver, DriverStatus, Passenger, Trip
from ridedispatch.records import DriverRecord, PassengerRecord, TripRecord, coerce_record

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Snapshot:
    trip_count: int
    passenger_trip_counts: list[int]
    driver_states: list[tuple[DriverStatus, int]]
    trip_completions: list[tuple[datetime | None, int | None]]


class EntityStore:
    """In-memory store for the three entity collections.

    Thread-safe: mutators hold the store's RLock for the whole of a
    ``transaction()``; readers take tuple snapshots under the same lock.
    """

    def __init__(
        self,
        passengers: Iterable[Passenger],
        drivers: Iterable[Driver],
        trips: Iterable[Trip],
    ) -> None:
        self.passengers: list[Passenger] = list(passengers)
        self.drivers: list[Driver] = list(drivers)
        self.trips: list[Trip] = list(trips)
        # Trip ids a driver record listed for itself; linking checks them
        self.declared_trip_ids: dict[int, tuple[int, ...]] = {}
        self._lock = threading.RLock()

    @classmethod
    def from_records(
        cls,
        passengers: Iterable[Any],
        drivers: Iterable[Any],
        trips: Iterable[Any],
    ) -> "EntityStore":
        """Build unlinked entities from records, mappings or field tuples."""
        passenger_records = [coerce_record(PassengerRecord, raw) for raw in passengers]
        driver_records = [coerce_record(DriverRecord, raw) for raw in drivers]
        trip_records = [coerce_record(TripRecord, raw) for raw in trips]

        store = cls(
            passengers=(
                Passenger(id=r.id, name=r.name, phone_number=r.phone_number)
                for r in passenger_records
            ),
            drivers=(
                Driver(id=r.id, name=r.name, vehicle_id=r.vehicle_id, status=r.status)
                for r in driver_records
            ),
            trips=(
                Trip(
                    id=r.id,
                    passenger_id=r.passenger_id,
                    driver_id=r.driver_id,
                    start_time=r.start_time,
                    end_time=r.end_time,
                    rating=r.rating,
                    cost=r.cost,
                )
                for r in trip_records
            ),
        )
        store.declared_trip_ids = {r.id: r.trip_ids for r in driver_records if r.trip_ids}
        return store

    def snapshot_passengers(self) -> tuple[Passenger, ...]:
        with self._lock:
            return tuple(self.passengers)

    def snapshot_drivers(self) -> tuple[Driver, ...]:
        with self._lock:
            return tuple(self.drivers)

    def snapshot_trips(self) -> tuple[Trip, ...]:
        with self._lock:
            return tuple(self.trips)

    def counts(self) -> dict[str, int]:
        with self._lock:
            return {
                "passengers": len(self.passengers),
                "drivers": len(self.drivers),
                "trips": len(self.trips),
            }

    @contextmanager
    def transaction(self) -> Iterator["EntityStore"]:
        """Run a group of mutations as one unit.

        Holds the store lock for the duration. Trip lists only ever grow, so
        rolling back means truncating them to their recorded lengths and
        restoring driver statuses and trip completion fields.

        Example:
            with store.transaction():
                driver.add_trip(trip)
                passenger.add_trip(trip)
                store.trips.append(trip)
            # Either all three appends are visible or none is
        """
        with self._lock:
            snapshot = self._take_snapshot()
            try:
                yield self
            except BaseException:
                self._restore(snapshot)
                logger.debug("Store transaction rolled back")
                raise

    def _take_snapshot(self) -> _Snapshot:
        return _Snapshot(
            trip_count=len(self.trips),
            passenger_trip_counts=[len(p.trips) for p in self.passengers],
            driver_states=[(d.status, len(d.trips)) for d in self.drivers],
            trip_completions=[(t.end_time, t.rating) for t in self.trips],
        )

    def _restore(self, snapshot: _Snapshot) -> None:
        del self.trips[snapshot.trip_count :]
        for passenger, count in zip(self.passengers, snapshot.passenger_trip_counts, strict=True):
            del passenger.trips[count:]
        for driver, (status, count) in zip(self.drivers, snapshot.driver_states, strict=True):
            driver.status = status
            del driver.trips[count:]
        for trip, (end_time, rating) in zip(self.trips, snapshot.trip_completions, strict=True):
            trip.end_time = end_time
            trip.rating = rating
