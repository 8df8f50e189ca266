"""Functional core - pure business logic with no I/O."""

from .dates import parse_date, format_date, try_parse_date
from .paperwork import (
    Paperwork,
    NewPaperwork,
    Priority,
    Status,
    PaperType,
    PaperSource,
    classify_status,
    is_completed,
)
from .query import (
    PaperworkQuery,
    SortKey,
    SortDirection,
    filter_paperwork,
    sort_paperwork,
    apply_query,
)
from .calendar import (
    DayCell,
    DayHighlight,
    MonthView,
    month_grid,
    group_by_date,
    records_for_day,
    split_visible,
    day_highlight,
    build_month_view,
)

__all__ = [
    # Dates
    "parse_date",
    "format_date",
    "try_parse_date",
    # Paperwork
    "Paperwork",
    "NewPaperwork",
    "Priority",
    "Status",
    "PaperType",
    "PaperSource",
    "classify_status",
    "is_completed",
    # Query
    "PaperworkQuery",
    "SortKey",
    "SortDirection",
    "filter_paperwork",
    "sort_paperwork",
    "apply_query",
    # Calendar
    "DayCell",
    "DayHighlight",
    "MonthView",
    "month_grid",
    "group_by_date",
    "records_for_day",
    "split_visible",
    "day_highlight",
    "build_month_view",
]
