"""Time and clock utilities."""

from datetime import date, datetime, timezone


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)


def today() -> date:
    """Get today's date in UTC."""
    return utc_now().date()


def clock_minutes(dt: datetime) -> int:
    """Minutes past midnight on the datetime's own wall clock.

    Offsets are not normalised: a shift posted as 18:00+01:00 is an
    18:00 shift wherever the server runs.
    """
    return dt.hour * 60 + dt.minute


def format_hour(hour: int) -> str:
    """Format an hour of day as HH:00.

    Args:
        hour: Hour 0-24

    Returns:
        Zero-padded clock string, e.g. "06:00"
    """
    return f"{hour:02d}:00"


def format_clock(dt: datetime) -> str:
    """Format a datetime's wall-clock time as HH:MM."""
    return dt.strftime("%H:%M")


def shift_overlaps_window(
    start: datetime,
    end: datetime,
    window_start_hour: int,
    window_end_hour: int,
) -> bool:
    """Check whether a shift overlaps a daily clock window.

    The window may wrap midnight (e.g. 22-6). Shifts that run past
    midnight are treated as overlapping any window that wraps midnight.

    Args:
        start: Shift start
        end: Shift end
        window_start_hour: Window start hour (inclusive)
        window_end_hour: Window end hour (exclusive)

    Returns:
        True if any part of the shift falls inside the window
    """
    wraps = window_start_hour > window_end_hour
    if end.date() > start.date():
        if wraps:
            return True
        end_minutes = 24 * 60 + clock_minutes(end)
    else:
        end_minutes = clock_minutes(end)
    start_minutes = clock_minutes(start)

    if wraps:
        windows = [(window_start_hour * 60, 24 * 60), (0, window_end_hour * 60)]
    else:
        windows = [(window_start_hour * 60, window_end_hour * 60)]

    return any(start_minutes < w_end and end_minutes > w_start for w_start, w_end in windows)


def time_in_window(dt: datetime, window_start_hour: int, window_end_hour: int) -> bool:
    """Check whether a single clock time falls inside a daily window.

    The window may wrap midnight (e.g. 22-6). Start is inclusive, end
    exclusive.
    """
    minutes = clock_minutes(dt)
    start = window_start_hour * 60
    end = window_end_hour * 60
    if window_start_hour > window_end_hour:
        return minutes >= start or minutes < end
    return start <= minutes < end
