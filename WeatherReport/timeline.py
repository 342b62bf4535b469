"""Grouping of timestamped conditions into calendar days."""
import logging
from dataclasses import replace
from typing import Iterable, List, Sequence, Tuple

from weather_data import Cond, Day


def bucket_days(conds: Iterable[Cond], num_days: int) -> List[Day]:
    """
    Group time-ordered conditions into one Day per local calendar date.

    Day identity is the date part of ``Cond.time`` as given, so providers that
    send UTC must convert to local time first. At most ``num_days`` days are
    returned; input past the last of them is not consumed. Empty days never
    appear in the result.

    Args:
        conds: Conditions ordered by time
        num_days: Maximum number of days to return

    Returns:
        List of Day objects ordered by date
    """
    if num_days < 1:
        return []

    forecast: List[Day] = []
    slots: List[Cond] = []
    for cond in conds:
        if slots and cond.time.date() != slots[0].time.date():
            if len(forecast) >= num_days - 1:
                break
            forecast.append(Day(date=slots[0].time.date(), slots=tuple(slots)))
            slots = []
        slots.append(cond)

    if slots:
        forecast.append(Day(date=slots[0].time.date(), slots=tuple(slots)))

    logging.debug(f"Bucketed conditions into {len(forecast)} day(s) (max {num_days})")
    return forecast


def merge_today(history: Sequence[Cond], future: Sequence[Cond]) -> Tuple[Cond, ...]:
    """
    Merge the elapsed hours of today with today's forecast, ordered by time.

    Both inputs must be ordered by time. When both contain the same instant
    the forecast entry is kept and the history entry dropped.
    """
    merged: List[Cond] = []
    h, f = 0, 0
    collisions = 0
    while h < len(history) or f < len(future):
        if f >= len(future):
            merged.append(history[h])
            h += 1
        elif h >= len(history) or history[h].time > future[f].time:
            merged.append(future[f])
            f += 1
        elif history[h].time < future[f].time:
            merged.append(history[h])
            h += 1
        else:
            merged.append(future[f])
            h += 1
            f += 1
            collisions += 1

    logging.debug(
        f"Merged {len(history)} history and {len(future)} forecast slots "
        f"into {len(merged)} ({collisions} duplicates dropped)"
    )
    return tuple(merged)


def replace_first_day_slots(forecast: Sequence[Day], slots: Sequence[Cond]) -> Tuple[Day, ...]:
    """Return ``forecast`` with the slots of its first day replaced."""
    if not forecast:
        return tuple(forecast)
    return (replace(forecast[0], slots=tuple(slots)),) + tuple(forecast[1:])
