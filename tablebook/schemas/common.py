"""Shared schema types"""

from typing import Annotated, Union

from pydantic import BeforeValidator, PlainSerializer

from tablebook.core.errors import InvalidTimeFormat
from tablebook.core.timeslots import MINUTES_PER_DAY, format_minutes, to_minutes


def _parse_wire_time(value) -> int:
    if not isinstance(value, str):
        raise ValueError(f"Time must be a string like '19:00' or '7:00 PM', got {value!r}")
    try:
        return to_minutes(value)
    except InvalidTimeFormat as exc:
        raise ValueError(exc.message) from exc


def _parse_start_time(value) -> int:
    minutes = _parse_wire_time(value)
    if minutes >= MINUTES_PER_DAY:
        raise ValueError("A sitting cannot start at 24:00")
    return minutes


def _parse_clock_time(value: Union[str, int]) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        if not 0 <= value <= MINUTES_PER_DAY:
            raise ValueError(f"Minute of day out of range: {value}")
        return value
    return _parse_wire_time(value)


_as_clock = PlainSerializer(format_minutes, return_type=str)

# Minutes since midnight on the inside, "HH:MM" on the wire.
# Responses are built from stored minutes, so ClockTime also takes 0..1440.
ClockTime = Annotated[int, BeforeValidator(_parse_clock_time), _as_clock]

# Request fields: strings only
StartTime = Annotated[int, BeforeValidator(_parse_start_time), _as_clock]
EndTime = Annotated[int, BeforeValidator(_parse_wire_time), _as_clock]
