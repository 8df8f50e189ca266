"""Pure filter and sort engine over paperwork collections - no I/O dependencies."""

import locale
import logging
from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Iterable

from .dates import parse_date
from .paperwork import Paperwork, Priority, Status, classify_status

logger = logging.getLogger(__name__)

PRIORITY_RANK = {Priority.HIGH: 3, Priority.MEDIUM: 2, Priority.LOW: 1}
STATUS_RANK = {Status.OVERDUE: 4, Status.ACTIVE: 3, Status.DELAYED: 2, Status.PUNCTUAL: 1}


class SortKey(str, Enum):
    DATE = "date"
    PRIORITY = "priority"
    TITLE = "title"
    STATUS = "status"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class PaperworkQuery:
    """Search, filter and sort state for a paperwork listing."""

    search: str = ""
    priorities: frozenset[Priority] = field(default_factory=frozenset)
    statuses: frozenset[Status] = field(default_factory=frozenset)
    sort_by: SortKey = SortKey.DATE
    direction: SortDirection = SortDirection.ASC

    @property
    def has_filters(self) -> bool:
        return bool(self.search.strip() or self.priorities or self.statuses)

    def with_search(self, search: str) -> "PaperworkQuery":
        return replace(self, search=search)

    def toggle_priority(self, priority: Priority) -> "PaperworkQuery":
        return replace(self, priorities=self.priorities ^ {priority})

    def toggle_status(self, status: Status) -> "PaperworkQuery":
        return replace(self, statuses=self.statuses ^ {status})

    def with_sort(
        self, sort_by: SortKey, direction: SortDirection | None = None
    ) -> "PaperworkQuery":
        return replace(self, sort_by=sort_by, direction=direction or self.direction)

    def clear_filters(self) -> "PaperworkQuery":
        return replace(self, search="", priorities=frozenset(), statuses=frozenset())


def _matches_search(paperwork: Paperwork, term: str) -> bool:
    if not term:
        return True
    return any(
        term in (value or "").casefold()
        for value in (paperwork.id, paperwork.title, paperwork.description)
    )


def filter_paperwork(
    records: list[Paperwork],
    search: str = "",
    priorities: Iterable[Priority] = (),
    statuses: Iterable[Status] = (),
    today: date | None = None,
    log: logging.Logger | None = None,
) -> list[Paperwork]:
    """
    Filter by free-text search, priority set and status set.

    Empty sets mean no filtering on that category. Original order is kept.
    Pure function - no I/O.
    """
    if not isinstance(records, (list, tuple)):
        (log or logger).warning(f"filter_paperwork: records is not a sequence: {type(records).__name__}")
        return []

    today = today or date.today()
    term = (search or "").strip().casefold()
    priorities = set(priorities)
    statuses = set(statuses)

    result = []
    for p in records:
        if not isinstance(p, Paperwork):
            continue
        if not _matches_search(p, term):
            continue
        if priorities and p.priority not in priorities:
            continue
        if statuses and classify_status(p, today, log) not in statuses:
            continue
        result.append(p)
    return result


def sort_paperwork(
    records: list[Paperwork],
    sort_by: SortKey = SortKey.DATE,
    direction: SortDirection = SortDirection.ASC,
    today: date | None = None,
    log: logging.Logger | None = None,
) -> list[Paperwork]:
    """
    Return a sorted copy of the records.

    The sort is stable in both directions: ties keep their input order.
    Records without a due date go last when ascending and first when
    descending. Items that are not Paperwork are dropped, as in
    filter_paperwork. Pure function - no I/O.
    """
    if not isinstance(records, (list, tuple)):
        (log or logger).warning(f"sort_paperwork: records is not a sequence: {type(records).__name__}")
        return []

    today = today or date.today()
    sort_by = SortKey(sort_by)
    direction = SortDirection(direction)
    records = [p for p in records if isinstance(p, Paperwork)]

    if sort_by is SortKey.DATE:

        def sort_key(p: Paperwork) -> tuple:
            if not p.target_completion_date:
                return (1, date.min)
            return (0, parse_date(p.target_completion_date, today, log))

    elif sort_by is SortKey.PRIORITY:

        def sort_key(p: Paperwork) -> int:
            return PRIORITY_RANK.get(p.priority, 0)

    elif sort_by is SortKey.STATUS:

        def sort_key(p: Paperwork) -> int:
            return STATUS_RANK.get(classify_status(p, today, log), 0)

    else:

        def sort_key(p: Paperwork) -> str:
            return locale.strxfrm((p.title or "").casefold())

    return sorted(records, key=sort_key, reverse=direction is SortDirection.DESC)


def apply_query(
    records: list[Paperwork],
    query: PaperworkQuery,
    today: date | None = None,
) -> list[Paperwork]:
    """Filter then sort, producing the display list for a query."""
    filtered = filter_paperwork(
        records, query.search, query.priorities, query.statuses, today
    )
    return sort_paperwork(filtered, query.sort_by, query.direction, today)
