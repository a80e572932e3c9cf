from fastapi import APIRouter, Depends, Form
from fastapi.responses import PlainTextResponse

from app.dependencies import get_planner
from meal_calendar.core.planner import Planner
from meal_calendar.core.shopping_list import format_shopping_list

router = APIRouter(prefix="/shopping", tags=["shopping"])


def _items(planner: Planner) -> list[dict]:
    return planner.shopping.snapshot()


@router.get("")
def shopping_page(planner: Planner = Depends(get_planner)):
    return {"items": _items(planner)}


@router.post("/add")
def shopping_add(text: str = Form(""), planner: Planner = Depends(get_planner)):
    item = planner.shopping.add_item(text)
    return {"added": item.id if item else None, "items": _items(planner)}


@router.post("/clear-done")
def shopping_clear_done(planner: Planner = Depends(get_planner)):
    removed = planner.shopping.clear_done()
    return {"removed": removed, "items": _items(planner)}


@router.post("/{item_id}/toggle")
def shopping_toggle(item_id: str, planner: Planner = Depends(get_planner)):
    toggled = planner.shopping.toggle(item_id)
    return {"toggled": toggled, "items": _items(planner)}


@router.get("/export")
def shopping_export(planner: Planner = Depends(get_planner)):
    text = format_shopping_list(planner.shopping.items())
    return PlainTextResponse(text, headers={
        "Content-Disposition": "attachment; filename=shopping_list.txt",
    })
