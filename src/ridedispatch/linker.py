"""One-shot linking of loaded trips to their passengers and drivers."""

import logging

from ridedispatch.core.exceptions import LinkIntegrityError, NotFoundError
from ridedispatch.lookup import LookupService
from ridedispatch.store import EntityStore

logger = logging.getLogger(__name__)


def link_trips(store: EntityStore, lookup: LookupService) -> None:
    """Bind every loaded trip to its passenger and driver, in load order.

    Total: the first unresolved reference aborts linking with
    LinkIntegrityError, which means the input data is corrupt.
    """
    with store.transaction():
        for trip in store.trips:
            try:
                passenger = lookup.find_passenger(trip.passenger_id)
                driver = lookup.find_driver(trip.driver_id)
            except NotFoundError as e:
                raise LinkIntegrityError(
                    f"Trip {trip.id} references a missing entity: {e.message}",
                    details={"trip_id": trip.id, **e.details},
                ) from e
            trip.connect(passenger, driver)

    _check_declared_trip_ids(store)
    logger.debug(
        "Linked %d trips across %d passengers and %d drivers",
        len(store.trips),
        len(store.passengers),
        len(store.drivers),
    )


def _check_declared_trip_ids(store: EntityStore) -> None:
    for driver in store.drivers:
        declared = store.declared_trip_ids.get(driver.id)
        if declared is None:
            continue
        linked = sorted(trip.id for trip in driver.trips)
        if sorted(declared) != linked:
            logger.warning(
                "Driver %d lists trips %s but trips %s reference it; using linked trips",
                driver.id,
                sorted(declared),
                linked,
            )
