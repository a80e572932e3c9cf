from datetime import date

from fastapi import APIRouter, Depends, HTTPException

from app.dependencies import get_planner
from meal_calendar import config
from meal_calendar.core import calendar as cal
from meal_calendar.core.planner import Planner
from meal_calendar.db.models import SLOT_BADGES

router = APIRouter(prefix="/calendar", tags=["calendar"])


def _parse_month(month: str = None) -> date:
    if not month:
        return date.today().replace(day=1)
    try:
        year, mon = month.split("-")
        return date(int(year), int(mon), 1)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Invalid month: {month}")


def _neighbour_month(view_date: date, delta: int):
    """YYYY-MM of the month delta away, or None past the ends of the calendar."""
    try:
        return cal.to_key(cal.add_months(view_date, delta))[:7]
    except ValueError:
        return None


@router.get("")
def month_view(month: str = None, planner: Planner = Depends(get_planner)):
    view_date = _parse_month(month)
    holidays = config.holidays()
    cells = []
    for cell in cal.build_month_grid(view_date):
        if cell.day is None:
            cells.append({"day": None, "is_today": False})
            continue
        d = view_date.replace(day=cell.day)
        planned = planner.meal_plan.planned_slots(d)
        cells.append({
            "day": cell.day,
            "is_today": cell.is_today,
            "key": cal.to_key(d),
            "weekend": cal.weekend_kind(d),
            "holiday": cal.is_holiday(d, holidays),
            "planned": planned,
            "badges": [SLOT_BADGES[slot] for slot in planned],
        })
    return {
        "title": cal.month_title(view_date),
        "month": f"{view_date.year:04d}-{view_date.month:02d}",
        "prev_month": _neighbour_month(view_date, -1),
        "next_month": _neighbour_month(view_date, 1),
        "weekdays": cal.WEEKDAYS,
        "cells": cells,
    }
