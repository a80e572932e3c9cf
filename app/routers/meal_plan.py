from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Request

from app.dependencies import check_category, check_slot, get_planner, get_week_anchor, parse_date_key
from meal_calendar.core import calendar as cal
from meal_calendar.core.planner import Planner
from meal_calendar.db.models import CATEGORIES, SLOT_LABELS

router = APIRouter(prefix="/meal-plan", tags=["meal_plan"])


# ── Week list ──────────────────────────────────────────────────────────────────

@router.get("/week")
def week_view(offset: int = 0, planner: Planner = Depends(get_planner),
              anchor: date = Depends(get_week_anchor)):
    try:
        days = cal.page_week(anchor, offset)
    except OverflowError:
        raise HTTPException(status_code=404, detail=f"Week offset out of range: {offset}")
    return {
        "offset": offset,
        "range_label": cal.week_range_label(days),
        "prev_offset": offset - 1,
        "next_offset": offset + 1,
        "slot_labels": SLOT_LABELS,
        "days": [
            {"key": day.key, "label": day.label, "summaries": day.summaries}
            for day in planner.meal_plan.week_overview(days)
        ],
    }


# ── Suggestions ────────────────────────────────────────────────────────────────

@router.get("/suggestions/{category}")
def suggestions(category: str, planner: Planner = Depends(get_planner)):
    check_category(category)
    return {"category": category, "values": planner.suggestions.lookup(category)}


# ── Entry read / save ──────────────────────────────────────────────────────────

@router.get("/{date_key}/{slot}")
def get_entry(date_key: str, slot: str, planner: Planner = Depends(get_planner)):
    d = parse_date_key(date_key)
    check_slot(slot)
    entry = planner.meal_plan.get_entry(d, slot)
    return {"date": cal.to_key(d), "slot": slot, "entry": entry,
            "summary": planner.meal_plan.summarize(entry)}


@router.post("/{date_key}/{slot}")
async def save_entry(date_key: str, slot: str, request: Request,
                     planner: Planner = Depends(get_planner)):
    d = parse_date_key(date_key)
    check_slot(slot)
    form = await request.form()
    entry = {category: form.get(category) or "" for category in CATEGORIES}
    saved = planner.meal_plan.save_entry(d, slot, entry)
    return {"date": cal.to_key(d), "slot": slot, "entry": saved,
            "summary": planner.meal_plan.summarize(saved)}
