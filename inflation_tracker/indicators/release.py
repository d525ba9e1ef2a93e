"""Countdown to the next scheduled CPI release."""

from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class Countdown:
    """Time remaining until a release. All zero once reached."""

    days: int
    hours: int
    minutes: int
    seconds: int
    reached: bool


def parse_release_time(value: str) -> datetime:
    """
    Parse an ISO 8601 release time such as 2025-09-11T08:30:00-04:00.

    Naive times are taken as UTC.
    """
    try:
        parsed = datetime.fromisoformat(value.strip())
    except (AttributeError, ValueError) as e:
        raise ValueError(f"Invalid release datetime: {value!r}") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def release_countdown(target: datetime | str, now: datetime | None = None) -> Countdown:
    """Whole days, hours, minutes and seconds until target."""
    if isinstance(target, str):
        target = parse_release_time(target)
    elif target.tzinfo is None:
        target = target.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    remaining = max(0, int((target - now).total_seconds()))
    return Countdown(
        days=remaining // 86400,
        hours=(remaining % 86400) // 3600,
        minutes=(remaining % 3600) // 60,
        seconds=remaining % 60,
        reached=remaining == 0,
    )
