"""Registry configuration from DISPATCH_ environment variables."""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DispatchSettings(BaseSettings):
    data_directory: Path = Field(
        default=Path("./support"),
        description="Directory holding passengers.csv, drivers.csv and trips.csv",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["text", "json"] = "text"
    environment: str = "development"

    model_config = SettingsConfigDict(env_prefix="DISPATCH_")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> object:
        if isinstance(v, str):
            return v.upper()
        return v


def get_settings() -> DispatchSettings:
    """Load and validate settings from environment variables."""
    return DispatchSettings()
