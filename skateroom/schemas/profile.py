from __future__ import annotations

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Stance(str, Enum):
    REGULAR = "Regular"
    GOOFY = "Goofy"


class ProfileRead(BaseModel):
    id: str
    username: str | None = None
    full_name: str | None = None
    avatar_url: str | None = None
    date_of_birth: date | None = None
    hometown: str | None = None
    stance: Stance | None = None
    skating_since: date | None = None
    total_sessions: int = 0
    decks_used: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class ProfileUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    username: str | None = None
    full_name: str | None = None
    date_of_birth: date | None = None
    hometown: str | None = None
    stance: Stance | None = None
    skating_since: date | None = None
    total_sessions: int | None = Field(default=None, ge=0)
    decks_used: int | None = Field(default=None, ge=0)

    @field_validator("date_of_birth", "skating_since", mode="before")
    @classmethod
    def _coerce_blank_dates(cls, v):
        # HTML date inputs submit "" when cleared.
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("total_sessions", "decks_used")
    @classmethod
    def _counter_not_cleared(cls, v: int | None) -> int:
        # Optional to send, but the stored counters are never null.
        if v is None:
            raise ValueError("field cannot be null")
        return v


class ProfileStats(BaseModel):
    age: int
    skating_duration: str


class ProfileResponse(BaseModel):
    profile: ProfileRead
    stats: ProfileStats
