"""Utility functions."""

from youthwork.utils.time import (
    clock_minutes,
    format_clock,
    format_hour,
    shift_overlaps_window,
    time_in_window,
    today,
    utc_now,
)

__all__ = [
    "utc_now",
    "today",
    "clock_minutes",
    "format_clock",
    "format_hour",
    "shift_overlaps_window",
    "time_in_window",
]
