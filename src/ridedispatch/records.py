"""Validated boundary records handed to the registry by a loader."""

from collections.abc import Mapping, Sequence
from datetime import UTC, datetime
from typing import Any, TypeVar

import pydantic
from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator, model_validator

from ridedispatch.core.exceptions import RecordError
from ridedispatch.models import DriverStatus

RecordT = TypeVar("RecordT", bound=BaseModel)


class PassengerRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: PositiveInt
    name: str
    phone_number: str | None = None


class DriverRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: PositiveInt
    name: str
    vehicle_id: str
    status: DriverStatus = DriverStatus.AVAILABLE
    trip_ids: tuple[PositiveInt, ...] = ()

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lstrip(":").upper()
        return v


class TripRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: PositiveInt
    passenger_id: PositiveInt
    driver_id: PositiveInt
    start_time: datetime
    end_time: datetime | None = None
    rating: int | None = Field(default=None, ge=1, le=5)
    cost: float | None = Field(default=None, ge=0.0)

    @field_validator("start_time", "end_time")
    @classmethod
    def assume_utc(cls, v: datetime | None) -> datetime | None:
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v

    @model_validator(mode="after")
    def validate_time_order(self) -> "TripRecord":
        if self.end_time is not None and self.end_time < self.start_time:
            raise ValueError(
                f"Trip {self.id} ends ({self.end_time.isoformat()}) "
                f"before it starts ({self.start_time.isoformat()})"
            )
        return self


def coerce_record(model: type[RecordT], raw: Any) -> RecordT:
    """Build a record from a model instance, a mapping, or a tuple in field order."""
    if isinstance(raw, model):
        return raw

    if isinstance(raw, Mapping):
        data = dict(raw)
    elif isinstance(raw, Sequence) and not isinstance(raw, str | bytes):
        fields = list(model.model_fields)
        if len(raw) > len(fields):
            raise RecordError(
                f"{model.__name__} takes at most {len(fields)} fields, got {len(raw)}",
                details={"record": list(raw)},
            )
        data = dict(zip(fields, raw, strict=False))
    else:
        raise RecordError(
            f"Cannot build {model.__name__} from {type(raw).__name__}",
            details={"record": raw},
        )

    try:
        return model.model_validate(data)
    except pydantic.ValidationError as e:
        raise RecordError(
            f"Invalid {model.__name__}: {e.error_count()} validation error(s)",
            details={"record": data, "errors": e.errors(include_url=False)},
        ) from e
