"""Tests for day bucketing and the merge of today's history with the forecast."""
import logging
from datetime import date, datetime, timedelta, timezone

import pytest
from timeline import bucket_days, merge_today, replace_first_day_slots
from weather_data import Cond, Day

TZ = timezone(timedelta(hours=-5))


def cond(day, hour, temp=None):
    return Cond(time=datetime(2024, 3, day, hour, tzinfo=TZ), temp_c=temp)


def test_bucket_three_days_from_five_conditions():
    conds = [cond(1, 9), cond(1, 15), cond(2, 9), cond(3, 9), cond(4, 9)]

    days = bucket_days(conds, 3)

    assert [day.date for day in days] == [date(2024, 3, 1), date(2024, 3, 2), date(2024, 3, 3)]
    assert [len(day.slots) for day in days] == [2, 1, 1]
    assert days[0].slots == (conds[0], conds[1])


def test_bucket_single_day_keeps_all_slots():
    conds = [cond(1, hour) for hour in (0, 3, 6, 9, 12, 15, 18, 21)]
    days = bucket_days(conds, 5)
    assert len(days) == 1
    assert days[0].slots == tuple(conds)


def test_bucket_single_row():
    days = bucket_days([cond(1, 12)], 3)
    assert len(days) == 1
    assert len(days[0].slots) == 1


@pytest.mark.parametrize("num_days", [1, 2, 3, 4, 7])
def test_bucket_never_exceeds_requested_days(num_days):
    conds = [cond(day, hour) for day in range(1, 6) for hour in (6, 18)]
    days = bucket_days(conds, num_days)
    assert len(days) == min(num_days, 5)
    assert all(day.slots for day in days)


@pytest.mark.parametrize("num_days", [0, -1])
def test_bucket_nothing_requested(num_days):
    assert bucket_days([cond(1, 12)], num_days) == []


def test_bucket_empty_input():
    assert bucket_days([], 3) == []


def test_bucket_uses_local_date():
    """Days are cut at the local midnight of the condition's own timezone."""
    late = Cond(time=datetime(2024, 3, 1, 23, tzinfo=TZ))
    next_day_utc = Cond(time=datetime(2024, 3, 2, 4, tzinfo=timezone.utc).astimezone(TZ))
    days = bucket_days([late, next_day_utc], 3)
    assert len(days) == 1


def test_bucket_does_not_consume_past_the_last_day():
    consumed = []

    def conds():
        for day in range(1, 6):
            consumed.append(day)
            yield cond(day, 12)

    bucket_days(conds(), 2)
    assert consumed == [1, 2, 3]


def test_merge_interleaves_and_future_wins():
    history = [cond(1, 8, temp=1.0), cond(1, 10, temp=2.0), cond(1, 14, temp=3.0)]
    future = [cond(1, 14, temp=30.0), cond(1, 17, temp=40.0)]

    merged = merge_today(history, future)

    assert [c.time.hour for c in merged] == [8, 10, 14, 17]
    assert merged[2].temp_c == 30.0
    assert len(merged) == len(history) + len(future) - 1


def test_merge_with_empty_sides():
    slots = [cond(1, 9), cond(1, 12)]
    assert merge_today([], slots) == tuple(slots)
    assert merge_today(slots, []) == tuple(slots)
    assert merge_today([], []) == ()


def test_merge_is_ordered():
    history = [cond(1, hour) for hour in (0, 2, 4, 6)]
    future = [cond(1, hour) for hour in (3, 6, 9)]
    merged = merge_today(history, future)
    times = [c.time for c in merged]
    assert times == sorted(times)
    assert len(merged) == 6


def test_replace_first_day_slots():
    forecast = (Day(date=date(2024, 3, 1), slots=(cond(1, 12),)), Day(date=date(2024, 3, 2)))
    merged = (cond(1, 8), cond(1, 12))

    result = replace_first_day_slots(forecast, merged)

    assert result[0].slots == merged
    assert result[0].date == date(2024, 3, 1)
    assert result[1] is forecast[1]
    assert replace_first_day_slots((), merged) == ()


def test_merge_logs_dropped_duplicates(caplog):
    history = [cond(1, 6), cond(1, 9)]
    future = [cond(1, 9, temp=4.0), cond(1, 12)]

    with caplog.at_level(logging.DEBUG):
        merge_today(history, future)

    assert "Merged 2 history and 2 forecast slots into 3 (1 duplicates dropped)" in caplog.text
