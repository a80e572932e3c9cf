from datetime import date, datetime, timedelta

import pytest

from meal_calendar.core.calendar import (
    add_months, build_month_grid, build_week, day_label, days_in_month,
    month_title, page_week, parse_key, to_key, week_monday, week_range_label,
)


def test_to_key_zero_pads():
    assert to_key(date(2024, 3, 1)) == "2024-03-01"
    assert to_key(date(987, 12, 31)) == "0987-12-31"


def test_to_key_ignores_time_of_day():
    assert to_key(datetime(2024, 3, 1, 0, 0)) == to_key(datetime(2024, 3, 1, 23, 59))


def test_to_key_parses_back_over_a_leap_year():
    d = date(2024, 1, 1)
    seen = set()
    while d.year == 2024:
        key = to_key(d)
        assert parse_key(key) == d
        seen.add(key)
        d += timedelta(days=1)
    assert len(seen) == 366


@pytest.mark.parametrize("bad", ["", "2024-3-1", "2024-02-30", "not-a-date", None, "2024-03-01-01"])
def test_parse_key_rejects_malformed(bad):
    assert parse_key(bad) is None


def test_days_in_month():
    assert days_in_month(2024, 2) == 29
    assert days_in_month(2023, 2) == 28
    assert days_in_month(2024, 12) == 31
    assert days_in_month(2024, 4) == 30


def test_february_2024_grid():
    cells = build_month_grid(date(2024, 2, 10), today=date(2024, 2, 14))
    days = [c.day for c in cells if c.day is not None]
    assert days == list(range(1, 30))
    assert len(cells) % 7 == 0
    # 2024-02-01 is a Thursday: three leading fillers.
    assert [c.day for c in cells[:4]] == [None, None, None, 1]
    today_cells = [c for c in cells if c.is_today]
    assert len(today_cells) == 1 and today_cells[0].day == 14


def test_month_starting_on_monday_has_no_leading_fillers():
    cells = build_month_grid(date(2024, 1, 1), today=date(2000, 1, 1))
    assert cells[0].day == 1
    assert not any(c.is_today for c in cells)


def test_grid_properties_across_many_months():
    today = date(2025, 6, 15)
    view = date(2023, 1, 1)
    for _ in range(36):
        cells = build_month_grid(view, today=today)
        assert len(cells) % 7 == 0
        assert sum(1 for c in cells if c.day is not None) == days_in_month(view.year, view.month)
        expected_today = 1 if (view.year, view.month) == (today.year, today.month) else 0
        assert sum(1 for c in cells if c.is_today) == expected_today
        view = add_months(view, 1)


def test_add_months_wraps_years():
    assert add_months(date(2024, 12, 31), 1) == date(2025, 1, 1)
    assert add_months(date(2024, 1, 15), -1) == date(2023, 12, 1)
    assert add_months(date(2024, 3, 31), -13) == date(2023, 2, 1)


def test_month_title():
    assert month_title(date(2024, 3, 5)) == "2024年 3月"


def test_week_monday_is_idempotent():
    d = date(2024, 1, 1)
    for i in range(30):
        monday = week_monday(d + timedelta(days=i))
        assert monday.weekday() == 0
        assert week_monday(monday) == monday


def test_sunday_belongs_to_the_preceding_monday():
    assert week_monday(date(2024, 3, 3)) == date(2024, 2, 26)


def test_build_week_is_seven_consecutive_days():
    week = build_week(date(2024, 2, 29))
    assert week[0] == date(2024, 2, 26)
    assert len(week) == 7
    assert all(b - a == timedelta(days=1) for a, b in zip(week, week[1:]))


def test_page_week_round_trip():
    ref = date(2024, 3, 6)
    forward = page_week(ref, 1)
    back = page_week(forward[0], -1)
    assert back == build_week(ref)


def test_page_week_does_not_drift():
    ref = date(2024, 3, 6)
    assert page_week(ref, 52)[0] == week_monday(ref) + timedelta(weeks=52)
    assert page_week(ref, -104)[0] == week_monday(ref) - timedelta(weeks=104)
    assert page_week(ref, 0) == build_week(ref)


def test_week_labels():
    week = build_week(date(2024, 2, 28))
    assert week_range_label(week) == "2/26 - 3/3"
    assert day_label(week[0]) == "2/26 (月)"
    assert day_label(week[-1]) == "3/3 (日)"


def test_grid_at_the_ends_of_the_calendar():
    last = build_month_grid(date(9999, 12, 1), today=date(2024, 1, 1))
    assert len(last) % 7 == 0
    assert [c.day for c in last if c.day is not None] == list(range(1, 32))

    first = build_month_grid(date(1, 1, 1), today=date(1, 1, 15))
    # 0001-01-01 is a Monday.
    assert first[0].day == 1
    assert len(first) % 7 == 0
    assert [c.day for c in first if c.is_today] == [15]


def test_add_months_past_the_ends_raises():
    assert add_months(date(9999, 11, 30), 1) == date(9999, 12, 1)
    assert add_months(date(1, 2, 1), -1) == date(1, 1, 1)
    with pytest.raises(ValueError):
        add_months(date(9999, 12, 1), 1)
    with pytest.raises(ValueError):
        add_months(date(1, 1, 1), -1)


def test_week_at_the_ends_of_the_calendar():
    assert build_week(date(1, 1, 3))[0] == date(1, 1, 1)
    assert week_monday(date(9999, 12, 31)) == date(9999, 12, 27)
    # The last week would run into year 10000.
    with pytest.raises(OverflowError):
        build_week(date(9999, 12, 31))


def test_page_week_large_offsets():
    ref = date(2024, 3, 6)
    assert page_week(ref, 100000)[0] == week_monday(ref) + timedelta(weeks=100000)
    with pytest.raises(OverflowError):
        page_week(ref, 1000000)
    with pytest.raises(OverflowError):
        page_week(ref, -1000000)
