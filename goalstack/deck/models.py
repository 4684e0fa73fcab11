"""Goal and deck view contracts — Pydantic v2 models."""

from __future__ import annotations

import re
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

_HHMM_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


class InvalidTimeFormat(ValueError):
    """A time-of-day string that is not a valid 24-hour "HH:MM"."""


def parse_hhmm(value: str) -> tuple[int, int]:
    """Parse "HH:MM" into (hour, minute). Raises InvalidTimeFormat."""
    m = _HHMM_RE.match(value) if isinstance(value, str) else None
    if m is None:
        raise InvalidTimeFormat(f"Expected HH:MM, got {value!r}")
    hour, minute = int(m.group(1)), int(m.group(2))
    if hour > 23 or minute > 59:
        raise InvalidTimeFormat(f"Time out of range: {value!r}")
    return hour, minute


class DeadlineKind(str, Enum):
    HOURLY = "HOURLY"
    AT_TIME = "AT_TIME"
    DAILY_EOD = "DAILY_EOD"
    WEEKLY_EOW = "WEEKLY_EOW"
    MONTHLY_EOM = "MONTHLY_EOM"


class SwipeDirection(str, Enum):
    left = "left"
    right = "right"


class Goal(BaseModel):
    """Catalog entry — immutable once built."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    category: str
    deadline_kind: str = DeadlineKind.DAILY_EOD.value  # unknown kinds behave like DAILY_EOD
    deadline_time: str | None = None  # "HH:MM", only read for AT_TIME

    @field_validator("deadline_time")
    @classmethod
    def _valid_time(cls, v: str | None) -> str | None:
        if v is not None:
            parse_hhmm(v)
        return v


class DeckRow(BaseModel):
    goal: Goal
    label: str
    countdown_text: str
    overdue: bool = False
    deadline: datetime
    color: str | None = None


class DeckView(BaseModel):
    """Everything the rendering layer needs for one stack."""

    id: str
    title: str
    color: str | None = None
    rows: list[DeckRow] = Field(default_factory=list)
    undo_available: bool = False
    undo_title: str | None = None
    undo_expires_at: datetime | None = None
    all_done: bool = False


class SwipeRequest(BaseModel):
    direction: SwipeDirection = SwipeDirection.right
