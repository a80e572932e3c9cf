"""Date arithmetic for the month grid and the week list.

Weeks start on Monday.  Every date-indexed structure is keyed by to_key(),
which only looks at the calendar day, never the time of day.
"""

from calendar import monthrange
from datetime import date, datetime, timedelta
from typing import Optional

from meal_calendar.db.models import Cell

WEEKDAYS = ["月", "火", "水", "木", "金", "土", "日"]


def _as_date(d) -> date:
    if isinstance(d, datetime):
        return d.date()
    return d


def to_key(d) -> str:
    """Return the canonical YYYY-MM-DD key for a date or datetime."""
    d = _as_date(d)
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def parse_key(key: str) -> Optional[date]:
    """Inverse of to_key.  Returns None for anything that is not a valid key."""
    try:
        year, month, day = key.split("-")
        if len(year) != 4 or len(month) != 2 or len(day) != 2:
            return None
        return date(int(year), int(month), int(day))
    except (AttributeError, ValueError):
        return None


def monday_offset(d) -> int:
    """Days since the Monday on or before d (Monday=0 .. Sunday=6)."""
    return _as_date(d).weekday()


def days_in_month(year: int, month: int) -> int:
    return monthrange(year, month)[1]


def add_months(d, delta: int) -> date:
    """Return the first day of the month delta months away from d.

    Raises ValueError if that month is outside date.min .. date.max.
    """
    d = _as_date(d)
    index = d.year * 12 + (d.month - 1) + delta
    return date(index // 12, index % 12 + 1, 1)


def month_title(d) -> str:
    d = _as_date(d)
    return f"{d.year}年 {d.month}月"


def build_month_grid(view_date, today=None) -> list[Cell]:
    """Build the Monday-start 7-column grid for view_date's month.

    Leading filler cells align day 1 under its weekday; trailing filler cells
    pad the grid to whole weeks.  Exactly one cell is marked is_today when
    today falls inside the month.
    """
    view_date = _as_date(view_date)
    today = _as_date(today) if today is not None else date.today()
    year, month = view_date.year, view_date.month

    cells = [Cell(day=None) for _ in range(monday_offset(date(year, month, 1)))]
    for day in range(1, days_in_month(year, month) + 1):
        cells.append(Cell(day=day, is_today=date(year, month, day) == today))
    trailing = (7 - len(cells) % 7) % 7
    cells.extend(Cell(day=None) for _ in range(trailing))
    return cells


def week_monday(d) -> date:
    """Returns the Monday of the week containing d."""
    d = _as_date(d)
    return d - timedelta(days=monday_offset(d))


def build_week(d) -> list[date]:
    """Seven consecutive dates, Monday through Sunday, of the week containing d."""
    monday = week_monday(d)
    return [monday + timedelta(days=i) for i in range(7)]


def page_week(reference, offset_weeks: int) -> list[date]:
    """The week offset_weeks away from reference's week.

    Always computed from (reference, offset) so repeated paging cannot drift.
    Raises OverflowError if the week leaves date.min .. date.max.
    """
    return build_week(_as_date(reference) + timedelta(days=7 * offset_weeks))


def week_range_label(days: list[date]) -> str:
    """'M/D - M/D' for the first and last day of a week."""
    start, end = days[0], days[-1]
    return f"{start.month}/{start.day} - {end.month}/{end.day}"


def day_label(d) -> str:
    d = _as_date(d)
    return f"{d.month}/{d.day} ({WEEKDAYS[monday_offset(d)]})"


def weekend_kind(d) -> Optional[str]:
    """'saturday', 'sunday', or None."""
    offset = monday_offset(d)
    if offset == 5:
        return "saturday"
    if offset == 6:
        return "sunday"
    return None


def is_holiday(d, holidays) -> bool:
    return to_key(d) in holidays
