from ridedispatch.matching.availability import eligible_drivers, has_open_trip, is_eligible
from ridedispatch.matching.selection import select_driver

__all__ = ["eligible_drivers", "has_open_trip", "is_eligible", "select_driver"]
