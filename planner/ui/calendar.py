"""Month grid arithmetic for the planner's calendar view."""

import calendar
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Tuple

from planner.constants.constants import DATE_FORMAT


@dataclass(frozen=True)
class DayCell:
    day: int
    date: str
    is_today: bool = False
    is_selected: bool = False


@dataclass(frozen=True)
class MonthGrid:
    year: int
    month: int
    leading_blanks: int
    days: List[DayCell] = field(default_factory=list)
    selected: Optional[str] = None

    def cells(self) -> List[Optional[DayCell]]:
        """Blank cells (None) for the weekday offset, then one cell per day."""
        return [None] * self.leading_blanks + list(self.days)

    def weeks(self) -> List[List[Optional[DayCell]]]:
        cells = self.cells()
        cells += [None] * (-len(cells) % 7)
        return [cells[i:i + 7] for i in range(0, len(cells), 7)]


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def first_weekday_offset(year: int, month: int) -> int:
    """Index of the first day of the month in a Sunday-first week."""
    # date.weekday() is Monday=0; shift so Sunday=0
    return (date(year, month, 1).weekday() + 1) % 7


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def build_month_grid(
    year: int,
    month: int,
    today: Optional[date] = None,
    selected: Optional[str] = None,
) -> MonthGrid:
    """Lay out a month with today and the selected date flagged."""
    today_str = (today or date.today()).strftime(DATE_FORMAT)
    days = []
    for day in range(1, days_in_month(year, month) + 1):
        date_str = date(year, month, day).strftime(DATE_FORMAT)
        days.append(DayCell(
            day=day,
            date=date_str,
            is_today=date_str == today_str,
            is_selected=date_str == selected,
        ))
    return MonthGrid(
        year=year,
        month=month,
        leading_blanks=first_weekday_offset(year, month),
        days=days,
        selected=selected,
    )
