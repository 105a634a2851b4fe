"""In-memory ride dispatch registry."""

from ridedispatch.core.exceptions import (
    InvalidIdError,
    LinkIntegrityError,
    NoDriverAvailableError,
    NotFoundError,
    RegistryError,
)
from ridedispatch.dispatcher import DispatchEngine, TripDispatcher
from ridedispatch.models import Driver, DriverStatus, Passenger, Trip
from ridedispatch.records import DriverRecord, PassengerRecord, TripRecord

__version__ = "1.0.0"

__all__ = [
    # Entities
    "Driver",
    "DriverStatus",
    "Passenger",
    "Trip",
    # Records
    "DriverRecord",
    "PassengerRecord",
    "TripRecord",
    # Core
    "DispatchEngine",
    "TripDispatcher",
    # Errors
    "InvalidIdError",
    "LinkIntegrityError",
    "NoDriverAvailableError",
    "NotFoundError",
    "RegistryError",
]
