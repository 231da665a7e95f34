"""
Kickoff scheduling for knockout rounds and legs.

Round dates are computed on the local calendar of the tournament's time zone,
so a daylight-saving change between rounds never moves the local kickoff day
or hour.
"""
from datetime import date, datetime, time, timedelta
from typing import List, Optional, Sequence, Union

import pytz

from .errors import InvalidConfigurationError

DEFAULT_TIMEZONE = 'Europe/Istanbul'
DEFAULT_ROUND_SPACING_DAYS = 2
LEG_HOUR_STEP = 6
LATEST_KICKOFF_HOUR = 23

DateLike = Union[date, datetime]


def resolve_timezone(name: str):
    """Return the pytz zone for name, rejecting unknown zones."""
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError:
        raise InvalidConfigurationError(f"Unknown timezone: {name}")


def validate_hour(hour) -> int:
    if isinstance(hour, bool) or not isinstance(hour, int) or not 0 <= hour <= LATEST_KICKOFF_HOUR:
        raise InvalidConfigurationError(f"Kickoff hour must be an integer between 0 and 23 (got {hour!r})")
    return hour


def local_day(start_date: DateLike, tz) -> date:
    """Calendar day of start_date as seen in tz. Naive datetimes are UTC instants."""
    if isinstance(start_date, datetime):
        if start_date.tzinfo is None:
            start_date = pytz.utc.localize(start_date)
        return start_date.astimezone(tz).date()
    return start_date


def kickoff_for_round(start_date: DateLike, timezone: str, hour: int,
                      round_index: int, spacing_days: int) -> datetime:
    """
    Kickoff instant for a round.

    The local day of start_date is moved forward round_index * spacing_days
    calendar days and the result is hour:00 local time on that day.
    """
    validate_hour(hour)
    if round_index < 0:
        raise InvalidConfigurationError(f"Round index must not be negative (got {round_index})")
    if spacing_days < 0:
        raise InvalidConfigurationError(f"Round spacing must not be negative (got {spacing_days})")

    tz = resolve_timezone(timezone)
    target_day = local_day(start_date, tz) + timedelta(days=round_index * spacing_days)
    # normalize() pushes a kickoff that falls in a DST gap forward to a real local time
    return tz.normalize(tz.localize(datetime.combine(target_day, time(hour=hour))))


def resolve_leg_hours(kickoff_hour: int, legs_per_tie: int,
                      leg_kickoff_hours: Optional[Sequence[Optional[int]]] = None) -> List[int]:
    """
    Kickoff hour of every leg in a tie.

    Explicit hours win leg by leg. Otherwise leg 1 uses kickoff_hour and each
    later leg starts six hours after the previous one, never after 23:00.
    Hours supplied beyond legs_per_tie are ignored.
    """
    if legs_per_tie < 1:
        raise InvalidConfigurationError(f"Legs per tie must be at least 1 (got {legs_per_tie})")
    validate_hour(kickoff_hour)
    explicit = list(leg_kickoff_hours or [])

    hours = []
    for leg_index in range(legs_per_tie):
        if leg_index < len(explicit) and explicit[leg_index] is not None:
            hours.append(validate_hour(explicit[leg_index]))
        elif leg_index == 0:
            hours.append(kickoff_hour)
        else:
            hours.append(min(hours[-1] + LEG_HOUR_STEP, LATEST_KICKOFF_HOUR))
    return hours


def parse_start_date(value) -> Optional[DateLike]:
    """Parse an ISO date ('2025-01-01') or instant ('2025-01-01T00:00:00+00:00')."""
    if value is None:
        return None
    value = str(value).strip()
    if len(value) == 10:
        return date.fromisoformat(value)
    return datetime.fromisoformat(value.replace('Z', '+00:00'))
