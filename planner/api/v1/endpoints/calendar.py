from datetime import date
from typing import Optional
from fastapi import APIRouter, Query

from planner.constants.constants import DATE_PATTERN
from planner.schemas.calendarSchema import CalendarMonthResponse
from planner.ui.calendar import build_month_grid

router = APIRouter(prefix="/calendar", tags=["calendar"])


@router.get("/month", response_model=CalendarMonthResponse)
async def get_month(
    year: Optional[int] = Query(None, ge=1, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
    selected: Optional[str] = Query(None, pattern=DATE_PATTERN),
):
    """Month grid for the calendar view; defaults to the current month."""
    today = date.today()
    grid = build_month_grid(year or today.year, month or today.month, today=today, selected=selected)
    return CalendarMonthResponse.model_validate(grid)
