"""
Time model.

Times of day are carried as integer minutes since midnight. Slots are
enumerated per restaurant and weekday from the configured opening hours.
"""

from datetime import date, datetime
from typing import List, Optional, Tuple, TYPE_CHECKING

from tablebook.core.errors import InvalidTimeFormat

if TYPE_CHECKING:
    from tablebook.models.restaurant import Restaurant

SLOT_GRANULARITY = 30  # minutes
DEFAULT_DINING_DURATION = 120  # minutes
DEFAULT_OPENING_TIME = "11:00"
DEFAULT_CLOSING_TIME = "23:00"

MINUTES_PER_DAY = 24 * 60

WEEKDAYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

_TIME_FORMATS = ("%H:%M", "%I:%M %p")


def to_minutes(value: str) -> int:
    """
    Parse a wall-clock time into minutes since midnight.

    Accepts 24h ``HH:MM`` and 12h ``H:MM AM/PM``. ``24:00`` is accepted
    as end-of-day so closing times past midnight can be expressed.

    Raises:
        InvalidTimeFormat: if the value matches neither format
    """
    if not isinstance(value, str):
        raise InvalidTimeFormat(f"Invalid time: {value!r}")

    text = value.strip()
    if text == "24:00":
        return MINUTES_PER_DAY

    for fmt in _TIME_FORMATS:
        try:
            parsed = datetime.strptime(text, fmt)
        except ValueError:
            continue
        return parsed.hour * 60 + parsed.minute

    raise InvalidTimeFormat(f"Invalid time: {value!r} (expected HH:MM or H:MM AM/PM)")


def format_minutes(minutes: int) -> str:
    """Render minutes since midnight as ``HH:MM``"""
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def weekday_name(day: date) -> str:
    return WEEKDAYS[day.weekday()]


def opening_window(
    restaurant: "Restaurant",
    day: date,
    default_open: str = DEFAULT_OPENING_TIME,
    default_close: str = DEFAULT_CLOSING_TIME,
) -> Optional[Tuple[int, int]]:
    """
    Opening and closing minute for a restaurant on a given date.

    A weekday missing from the restaurant's hours falls back to the
    defaults; a weekday explicitly set to ``None`` is closed all day.
    """
    name = weekday_name(day)
    hours = restaurant.opening_hours

    if name not in hours:
        return to_minutes(default_open), to_minutes(default_close)

    entry = hours[name]
    if entry is None:
        return None

    return to_minutes(entry.open), to_minutes(entry.close)


def generate_slots(
    restaurant: "Restaurant",
    day: date,
    granularity: int = SLOT_GRANULARITY,
    dining_duration: int = DEFAULT_DINING_DURATION,
    default_open: str = DEFAULT_OPENING_TIME,
    default_close: str = DEFAULT_CLOSING_TIME,
) -> List[int]:
    """
    Bookable start times for a restaurant on a date.

    Slots are aligned to ``granularity`` from the opening time. The last
    slot is the latest one whose full dining duration ends by closing.
    """
    window = opening_window(restaurant, day, default_open, default_close)
    if window is None:
        return []

    opening, closing = window
    # Align the first slot up to the granularity grid
    first = -(-opening // granularity) * granularity

    return list(range(first, closing - dining_duration + 1, granularity))
