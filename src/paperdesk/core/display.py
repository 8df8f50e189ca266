"""Pure display formatting for paperwork - no I/O dependencies."""

from datetime import date

from .dates import parse_date
from .paperwork import Paperwork, Priority, classify_status, is_completed


def long_date(d: date) -> str:
    """Format like 'June 13, 2024'."""
    return f"{d.strftime('%B')} {d.day}, {d.year}"


def completion_label(paperwork: Paperwork, today: date | None = None) -> str:
    """'Completed on ...' for completed paperwork, otherwise 'Due on ...'."""
    if is_completed(paperwork):
        completed = paperwork.actual_completion_date or paperwork.target_completion_date
        return f"Completed on {long_date(parse_date(completed, today))}"
    return f"Due on {long_date(parse_date(paperwork.target_completion_date, today))}"


def count_text(count: int) -> str:
    """'1 document', '3 documents'."""
    return f"{count} {'document' if count == 1 else 'documents'}"


def priority_marker(priority: Priority | None) -> str:
    """Short priority marker for plain-text output."""
    markers = {Priority.HIGH: "!!!", Priority.MEDIUM: "!!", Priority.LOW: "!"}
    return markers.get(priority, "")


def format_paperwork_line(paperwork: Paperwork, today: date | None = None) -> str:
    """
    Format a single paperwork item for a listing.

    Pure function - no I/O.
    """
    status = classify_status(paperwork, today)
    marker = priority_marker(paperwork.priority)
    return f"[{marker:3}] {paperwork.title} ({completion_label(paperwork, today)}) [{status.value}]"
