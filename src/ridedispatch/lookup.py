"""Validated id to entity resolution over the entity store.

Every lookup is a linear scan of the relevant collection in store order and
returns the first entity whose ``id`` matches. Ids are unique in well-formed
data, so "first match" only matters for corrupt input.
"""

from typing import Any

from ridedispatch.core.exceptions import InvalidIdError, NotFoundError
from ridedispatch.models import Driver, Passenger, Trip
from ridedispatch.store import EntityStore


def validate_id(entity_id: Any, kind: str = "entity") -> int:
    """Return ``entity_id`` if it is a positive int, else raise InvalidIdError."""
    # bool is an int subclass but never a valid id
    if isinstance(entity_id, bool) or not isinstance(entity_id, int) or entity_id <= 0:
        raise InvalidIdError(
            f"{kind.capitalize()} id must be a positive integer, got {entity_id!r}",
            details={"kind": kind, "id": entity_id},
        )
    return entity_id


class LookupService:
    """Resolves passengers, drivers and trips by id. O(n) per call."""

    def __init__(self, store: EntityStore) -> None:
        self._store = store

    def find_passenger(self, passenger_id: Any) -> Passenger:
        validate_id(passenger_id, "passenger")
        for passenger in self._store.passengers:
            if passenger.id == passenger_id:
                return passenger
        raise NotFoundError(
            f"Passenger {passenger_id} not found", details={"passenger_id": passenger_id}
        )

    def find_driver(self, driver_id: Any) -> Driver:
        validate_id(driver_id, "driver")
        for driver in self._store.drivers:
            if driver.id == driver_id:
                return driver
        raise NotFoundError(f"Driver {driver_id} not found", details={"driver_id": driver_id})

    def find_trip(self, trip_id: Any) -> Trip:
        validate_id(trip_id, "trip")
        for trip in self._store.trips:
            if trip.id == trip_id:
                return trip
        raise NotFoundError(f"Trip {trip_id} not found", details={"trip_id": trip_id})
