"""Base schema emitting the camelCase field names the web client expects."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from backend.app.core.time import ensure_utc


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    @field_validator("*")
    @classmethod
    def attach_utc(cls, value):
        # SQLite hands back naive datetimes; they are stored as UTC.
        if isinstance(value, datetime):
            return ensure_utc(value)
        return value
