from datetime import date, datetime, time, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from weather_informer.core.config import settings
from weather_informer.core.errors import InvalidInputError

ICON_URL_TEMPLATE = "https://openweathermap.org/img/wn/{code}@2x.png"

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def resolve_timezone(name: Optional[str] = None) -> tzinfo:
    """
    Return the timezone for an IANA name, defaulting to `LOCAL_TIMEZONE`.

    Raises:
        InvalidInputError: the name is not a known timezone.
    """
    key = name or settings.local_timezone
    try:
        return ZoneInfo(key)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise InvalidInputError(f"Unknown timezone: {key}") from e


def local_now(tz: Optional[tzinfo] = None, now: Optional[datetime] = None) -> datetime:
    """Current (or given) instant expressed in `tz`."""
    tz = tz or resolve_timezone()
    if now is None:
        return datetime.now(tz)
    if now.tzinfo is None:
        # naive values are already local wall-clock time
        return now.replace(tzinfo=tz)
    return now.astimezone(tz)


def local_date_key(instant: datetime, tz: Optional[tzinfo] = None) -> str:
    """YYYY-MM-DD of `instant` on the local calendar of `tz`."""
    return local_now(tz, instant).date().isoformat()


def local_day_name(date_key: str, tz: Optional[tzinfo] = None, now: Optional[datetime] = None) -> str:
    """
    "Today" when `date_key` is the current local date, otherwise the
    full weekday name (e.g. "Monday").

    The key is read at local noon so DST transitions never shift it
    onto a neighbouring day.
    """
    tz = tz or resolve_timezone()
    day = datetime.combine(date.fromisoformat(date_key), time(12, 0), tzinfo=tz)
    today = local_now(tz, now).date()

    if day.date() == today:
        return "Today"
    return WEEKDAYS[day.weekday()]


def to_12_hour_clock(text: str) -> str:
    """
    Render a provider clock string as 12-hour time.

    "2024-01-15 15:00:00" -> "3:00 PM", "2024-01-15 00:00:00" -> "12:00 AM".
    The string is read as wall-clock time; no timezone conversion happens.
    """
    parsed = datetime.fromisoformat(text.strip().replace(" ", "T"))
    hour = parsed.hour % 12 or 12
    suffix = "AM" if parsed.hour < 12 else "PM"
    return f"{hour}:{parsed.minute:02d} {suffix}"


def icon_url(icon_code: str) -> str:
    """Full URL of the 2x OpenWeatherMap icon for `icon_code`."""
    return ICON_URL_TEMPLATE.format(code=icon_code)
