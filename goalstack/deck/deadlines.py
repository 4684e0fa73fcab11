"""Deadline engine — pure functions of (goal, now), never raises on validated goals.

All datetimes are naive local wall-clock values. Nothing here is cached:
"next occurrence" is relative to the caller's `now`.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import datetime, timedelta

from goalstack.deck.models import DeadlineKind, Goal, parse_hhmm

USER_END_OF_DAY = "23:00"
DEFAULT_AT_TIME = "21:00"

_LAST_MOMENT = {"hour": 23, "minute": 59, "second": 59, "microsecond": 999000}


@dataclass(frozen=True, slots=True)
class Countdown:
    text: str
    overdue: bool = False


# ---------------------------------------------------------------------------
# Period boundaries
# ---------------------------------------------------------------------------

def next_hour(now: datetime) -> datetime:
    """Start of the next whole hour, strictly after `now`."""
    return now.replace(minute=0, second=0, microsecond=0) + timedelta(hours=1)


def next_time_of_day(now: datetime, hhmm: str) -> datetime:
    """Today at `hhmm` if still ahead of `now`, otherwise tomorrow."""
    hour, minute = parse_hhmm(hhmm)
    candidate = now.replace(hour=hour, minute=minute, second=0, microsecond=0)
    if candidate <= now:
        candidate += timedelta(days=1)
    return candidate


def end_of_current_week(now: datetime) -> datetime:
    """Saturday 23:59:59.999 of the Sunday-based week containing `now`.

    Does not roll over to next week once that instant has passed.
    """
    days_since_sunday = (now.weekday() + 1) % 7
    saturday = now + timedelta(days=6 - days_since_sunday)
    return saturday.replace(**_LAST_MOMENT)


def end_of_current_month(now: datetime) -> datetime:
    """Last day of `now`'s month at 23:59:59.999. Never rolls over."""
    last_day = calendar.monthrange(now.year, now.month)[1]
    return now.replace(day=last_day, **_LAST_MOMENT)


# ---------------------------------------------------------------------------
# Goal-level API
# ---------------------------------------------------------------------------

def next_deadline(
    goal: Goal,
    now: datetime,
    *,
    end_of_day: str = USER_END_OF_DAY,
    default_at_time: str = DEFAULT_AT_TIME,
) -> datetime:
    """Next deadline for `goal` as seen from `now`.

    Unknown kinds fall back to DAILY_EOD.
    """
    kind = goal.deadline_kind
    if kind == DeadlineKind.HOURLY:
        return next_hour(now)
    if kind == DeadlineKind.AT_TIME:
        return next_time_of_day(now, goal.deadline_time or default_at_time)
    if kind == DeadlineKind.WEEKLY_EOW:
        return end_of_current_week(now)
    if kind == DeadlineKind.MONTHLY_EOM:
        return end_of_current_month(now)
    return next_time_of_day(now, end_of_day)


def format_countdown(deadline: datetime, now: datetime) -> Countdown:
    """Human countdown text for `deadline`, e.g. "in 1h 30m" or "OVERDUE"."""
    remaining = deadline - now
    if remaining <= timedelta(0):
        return Countdown("OVERDUE", overdue=True)

    minutes = remaining // timedelta(minutes=1)
    hours = minutes // 60
    days = hours // 24

    if minutes < 60:
        return Countdown(f"in {minutes}m")
    if hours < 24:
        return Countdown(f"in {hours}h {minutes % 60}m")
    if days == 1:
        return Countdown("tomorrow")
    if days < 30:
        return Countdown(f"in {days}d")
    return Countdown(f"in {days // 30}mo")


def label_for_kind(goal: Goal, *, default_at_time: str = DEFAULT_AT_TIME) -> str:
    """Short recurrence label shown next to the countdown."""
    kind = goal.deadline_kind
    if kind == DeadlineKind.HOURLY:
        return "Hourly"
    if kind == DeadlineKind.AT_TIME:
        return f"At {goal.deadline_time or default_at_time}"
    if kind == DeadlineKind.DAILY_EOD:
        return "Today"
    if kind == DeadlineKind.WEEKLY_EOW:
        return "This week"
    if kind == DeadlineKind.MONTHLY_EOM:
        return "This month"
    return ""
