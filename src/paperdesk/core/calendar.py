"""Pure month-calendar logic - no I/O dependencies."""

from calendar import Calendar
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum

from .dates import format_date
from .paperwork import Paperwork, Status, classify_status, due_date

DAYS_PER_WEEK = 7

_SUNDAY_FIRST = Calendar(firstweekday=6)


class DayHighlight(Enum):
    """Highlight for a calendar day. Overdue dominates plain activity."""

    NONE = "none"
    HAS_OVERDUE = "has_overdue"
    HAS_ACTIVE = "has_active"


@dataclass
class DayCell:
    """One calendar day with its paperwork."""

    day: date
    visible: list[Paperwork] = field(default_factory=list)
    remaining: int = 0
    highlight: DayHighlight = DayHighlight.NONE
    is_today: bool = False

    @property
    def total(self) -> int:
        return len(self.visible) + self.remaining


@dataclass
class MonthView:
    """Assembled month view ready for rendering."""

    month: date
    weeks: list[list[DayCell | None]]

    @property
    def title(self) -> str:
        return self.month.strftime("%B %Y")

    def cells(self) -> list[DayCell]:
        """All non-empty cells in row-major order."""
        return [cell for week in self.weeks for cell in week if cell is not None]


def month_start(day: date) -> date:
    """First day of the month containing `day`."""
    return day.replace(day=1)


def month_end(day: date) -> date:
    """Last day of the month containing `day`."""
    return shift_month(day, 1) - timedelta(days=1)


def shift_month(month: date, delta: int) -> date:
    """First day of the month `delta` months away (negative goes back)."""
    index = month.year * 12 + (month.month - 1) + delta
    return date(index // 12, index % 12 + 1, 1)


def month_grid(month: date) -> list[list[date | None]]:
    """
    Lay out a month as Sunday-first weeks.

    Days before the 1st and after the last day are padded with None, so
    every row has exactly 7 cells. A month needs 4 to 6 rows.
    """
    first = month_start(month)
    cells = [
        first.replace(day=d) if d else None
        for d in _SUNDAY_FIRST.itermonthdays(first.year, first.month)
    ]

    return [cells[i : i + DAYS_PER_WEEK] for i in range(0, len(cells), DAYS_PER_WEEK)]


def day_key(day: date) -> str:
    """Grouping key for a calendar day, in the dd-MM-yyyy convention."""
    return format_date(day)[:10]


def group_by_date(records: list[Paperwork]) -> dict[str, list[Paperwork]]:
    """
    Bucket paperwork by the day portion of its due date.

    Insertion order is kept within each bucket.
    """
    grouped: dict[str, list[Paperwork]] = {}
    for p in records:
        key = (p.target_completion_date or "")[:10]
        grouped.setdefault(key, []).append(p)
    return grouped


def records_for_day(day: date | None, grouped: dict[str, list[Paperwork]]) -> list[Paperwork]:
    """Paperwork due on `day`. Always a list, never None."""
    if day is None:
        return []
    return list(grouped.get(day_key(day), []))


def is_on_day(paperwork: Paperwork, day: date | None) -> bool:
    """Check if the paperwork is due on the given day."""
    if day is None:
        return False
    return due_date(paperwork) == day


def split_visible(
    records: list[Paperwork], max_visible: int = 3
) -> tuple[list[Paperwork], int]:
    """Split into the first `max_visible` records and a count of the rest."""
    max_visible = max(0, max_visible)
    visible = records[:max_visible]
    return visible, max(0, len(records) - max_visible)


def day_highlight(
    day: date | None,
    grouped: dict[str, list[Paperwork]],
    today: date | None = None,
) -> DayHighlight:
    """HAS_OVERDUE if any paperwork that day is overdue, else HAS_ACTIVE if any."""
    day_records = records_for_day(day, grouped)
    if any(classify_status(p, today) == Status.OVERDUE for p in day_records):
        return DayHighlight.HAS_OVERDUE
    if day_records:
        return DayHighlight.HAS_ACTIVE
    return DayHighlight.NONE


def is_current_or_future(day: date | None, today: date | None = None) -> bool:
    """Check if a date is today or later."""
    if not isinstance(day, date):
        return False
    return day >= (today or date.today())


def build_month_view(
    records: list[Paperwork],
    month: date,
    max_visible: int = 3,
    today: date | None = None,
) -> MonthView:
    """
    Assemble a month view: grid, per-day paperwork and highlights.

    Pure function - no I/O.
    """
    today = today or date.today()
    grouped = group_by_date(records)

    weeks: list[list[DayCell | None]] = []
    for week in month_grid(month):
        row: list[DayCell | None] = []
        for day in week:
            if day is None:
                row.append(None)
                continue
            visible, remaining = split_visible(records_for_day(day, grouped), max_visible)
            row.append(
                DayCell(
                    day=day,
                    visible=visible,
                    remaining=remaining,
                    highlight=day_highlight(day, grouped, today),
                    is_today=day == today,
                )
            )
        weeks.append(row)

    return MonthView(month=month_start(month), weeks=weeks)
