from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _to_utc(value: datetime) -> datetime:
    # Naive input is taken as UTC; the store keeps UTC wall-clock time.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class SkateSessionBase(BaseModel):
    place_name: str = Field(min_length=1, max_length=255)
    address: str | None = None
    session_date: datetime
    review: str | None = None

    @field_validator("place_name")
    @classmethod
    def _strip_place_name(cls, v: str) -> str:
        value = (v or "").strip()
        if not value:
            raise ValueError("place_name must not be blank")
        return value

    @field_validator("session_date")
    @classmethod
    def _session_date_utc(cls, v: datetime) -> datetime:
        return _to_utc(v)


class SkateSessionCreate(SkateSessionBase):
    pass


class SkateSessionUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    place_name: str | None = Field(default=None, min_length=1, max_length=255)
    address: str | None = None
    session_date: datetime | None = None
    review: str | None = None

    @field_validator("place_name", "session_date")
    @classmethod
    def _required_when_sent(cls, v):
        # Optional to send, but cannot be cleared.
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValueError("field cannot be empty")
        if isinstance(v, datetime):
            return _to_utc(v)
        return v.strip() if isinstance(v, str) else v


class SkateSessionRead(SkateSessionBase):
    id: str
    user_id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
