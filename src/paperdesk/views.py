"""View layer between the repository and the CLI.

Each function fetches through a PaperworkRepository, runs the pure core,
and returns something ready to print or serialize.
"""

from datetime import date

from .config import Config
from .core.calendar import DayHighlight, MonthView, build_month_view, group_by_date, records_for_day
from .core.display import count_text, format_paperwork_line
from .core.paperwork import Paperwork, classify_status
from .core.query import PaperworkQuery, SortDirection, SortKey, apply_query
from .ports.paperwork_repo import PaperworkRepository

CELL_WIDTH = 9

_HIGHLIGHT_MARKS = {
    DayHighlight.NONE: " ",
    DayHighlight.HAS_ACTIVE: "*",
    DayHighlight.HAS_OVERDUE: "!",
}


def default_query(config: Config) -> PaperworkQuery:
    """Query with the configured default sort and no filters."""
    return PaperworkQuery(
        sort_by=SortKey(config.default_sort),
        direction=SortDirection(config.default_direction),
    )


def listing(
    repo: PaperworkRepository,
    query: PaperworkQuery,
    today: date | None = None,
) -> list[Paperwork]:
    """Fetch paperwork and apply the query."""
    return apply_query(repo.fetch_all(), query, today)


def month(
    repo: PaperworkRepository,
    target: date,
    config: Config,
    today: date | None = None,
) -> MonthView:
    """Fetch paperwork and build the month view for `target`."""
    return build_month_view(repo.fetch_all(), target, config.max_visible_per_day, today)


def day(repo: PaperworkRepository, target: date) -> list[Paperwork]:
    """All paperwork due on a single day."""
    return records_for_day(target, group_by_date(repo.fetch_all()))


def paperwork_to_dict(p: Paperwork, today: date | None = None) -> dict:
    return {
        "id": p.id,
        "title": p.title,
        "description": p.description,
        "priority": p.priority.value if p.priority else None,
        "target_completion_date": p.target_completion_date,
        "actual_completion_date": p.actual_completion_date,
        "status": classify_status(p, today).value,
    }


def month_to_dict(view: MonthView, today: date | None = None) -> dict:
    return {
        "month": view.month.strftime("%Y-%m"),
        "weeks": [
            [
                None
                if cell is None
                else {
                    "day": cell.day.isoformat(),
                    "highlight": cell.highlight.value,
                    "is_today": cell.is_today,
                    "visible": [paperwork_to_dict(p, today) for p in cell.visible],
                    "remaining": cell.remaining,
                }
                for cell in week
            ]
            for week in view.weeks
        ],
    }


def render_listing(paperwork: list[Paperwork], query: PaperworkQuery, today: date | None = None) -> str:
    """Plain-text listing, with an empty-state message."""
    if not paperwork:
        if query.has_filters:
            return "No paperwork matches the current filters."
        return "No paperwork yet."
    lines = [format_paperwork_line(p, today) for p in paperwork]
    lines.append("")
    lines.append(count_text(len(paperwork)))
    return "\n".join(lines)


def render_month(view: MonthView) -> str:
    """
    Plain-text month grid.

    Each cell shows the day number, a highlight mark (! overdue, * has
    paperwork) and the paperwork count for that day.
    """
    weekdays = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
    lines = [view.title.center(CELL_WIDTH * 7 + 6), " ".join(f"{d:^{CELL_WIDTH}}" for d in weekdays)]
    for week in view.weeks:
        cells = []
        for cell in week:
            if cell is None:
                cells.append(" " * CELL_WIDTH)
                continue
            mark = _HIGHLIGHT_MARKS[cell.highlight]
            count = f"({cell.total})" if cell.total else ""
            day_num = f"[{cell.day.day:2}]" if cell.is_today else f" {cell.day.day:2} "
            cells.append(f"{day_num}{mark}{count}".ljust(CELL_WIDTH))
        lines.append(" ".join(cells))
    return "\n".join(lines)


def render_day(target: date, paperwork: list[Paperwork], today: date | None = None) -> str:
    header = f"### {target.strftime('%A, %B')} {target.day} - {count_text(len(paperwork))}"
    if not paperwork:
        return f"{header}\n  Nothing due."
    return "\n".join([header] + [f"  {format_paperwork_line(p, today)}" for p in paperwork])
