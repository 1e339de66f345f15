from typing import List, Optional

from planner.schemas.taskSchema import CamelModel


class CalendarDayResponse(CamelModel):
    day: int
    date: str
    is_today: bool
    is_selected: bool


class CalendarMonthResponse(CamelModel):
    year: int
    month: int
    leading_blanks: int
    days: List[CalendarDayResponse]
    selected: Optional[str] = None
