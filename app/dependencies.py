from datetime import date

from fastapi import HTTPException, Request

from meal_calendar.core.calendar import parse_key
from meal_calendar.core.planner import Planner
from meal_calendar.db.models import CATEGORIES, MEAL_SLOTS


def get_planner(request: Request) -> Planner:
    return request.app.state.planner


def get_week_anchor(request: Request) -> date:
    """The date week paging is relative to, fixed when the app started."""
    return request.app.state.week_anchor


def parse_date_key(date_key: str) -> date:
    d = parse_key(date_key)
    if d is None:
        raise HTTPException(status_code=404, detail=f"Invalid date: {date_key}")
    return d


def check_slot(slot: str) -> str:
    if slot not in MEAL_SLOTS:
        raise HTTPException(status_code=404, detail=f"Unknown meal slot: {slot}")
    return slot


def check_category(category: str) -> str:
    if category not in CATEGORIES:
        raise HTTPException(status_code=404, detail=f"Unknown category: {category}")
    return category
