"""CSV loader producing validated records for the registry.

Expects three files in one directory:

    passengers.csv  id,name[,phone_number]
    drivers.csv     id,name,vehicle_id,status[,trip_ids]
    trips.csv       id,passenger_id,driver_id,start_time,end_time,rating[,cost]

Empty cells become None. ``trip_ids`` is a ``;``-separated list. The legacy
column names ``phone_num`` and ``vin`` are accepted as aliases.
"""

import csv
import logging
from pathlib import Path
from typing import Any, NamedTuple, TypeVar

from pydantic import BaseModel

from ridedispatch.core.exceptions import ConfigurationError, RecordError
from ridedispatch.records import DriverRecord, PassengerRecord, TripRecord, coerce_record

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)

COLUMN_ALIASES = {
    "phone_num": "phone_number",
    "vin": "vehicle_id",
}


class LoadedRecords(NamedTuple):
    passengers: list[PassengerRecord]
    drivers: list[DriverRecord]
    trips: list[TripRecord]


def load_directory(directory: Path | str) -> LoadedRecords:
    """Read and validate the three CSV files under ``directory``."""
    directory = Path(directory)
    if not directory.is_dir():
        raise ConfigurationError(
            f"Data directory not found: {directory}", details={"directory": str(directory)}
        )

    records = LoadedRecords(
        passengers=_load_file(directory / "passengers.csv", PassengerRecord),
        drivers=_load_file(directory / "drivers.csv", DriverRecord),
        trips=_load_file(directory / "trips.csv", TripRecord),
    )
    logger.info(
        "Loaded %d passengers, %d drivers, %d trips from %s",
        len(records.passengers),
        len(records.drivers),
        len(records.trips),
        directory,
    )
    return records


def _load_file(path: Path, model: type[RecordT]) -> list[RecordT]:
    if not path.is_file():
        raise ConfigurationError(f"Missing data file: {path}", details={"path": str(path)})

    records: list[RecordT] = []
    with path.open(newline="", encoding="utf-8-sig") as f:
        reader = csv.DictReader(f)
        # Header is line 1
        for line_number, row in enumerate(reader, start=2):
            try:
                records.append(coerce_record(model, _clean_row(row)))
            except RecordError as e:
                raise RecordError(
                    f"{path.name} line {line_number}: {e.message}",
                    details={"file": str(path), "line": line_number, **e.details},
                ) from e
    return records


def _clean_row(row: dict[str | None, Any]) -> dict[str, Any]:
    cleaned: dict[str, Any] = {}
    for key, value in row.items():
        if key is None:
            # DictReader files surplus cells under None
            raise RecordError("Row has more cells than the header", details={"extra": value})
        name = COLUMN_ALIASES.get(key.strip(), key.strip())
        if isinstance(value, str):
            value = value.strip()
        cleaned[name] = value if value not in ("", None) else None

    trip_ids = cleaned.pop("trip_ids", None)
    if trip_ids:
        cleaned["trip_ids"] = [part.strip() for part in trip_ids.split(";") if part.strip()]

    # Let model defaults apply to absent optional values
    return {key: value for key, value in cleaned.items() if value is not None}
