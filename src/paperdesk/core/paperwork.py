"""Pure paperwork domain logic - no I/O dependencies."""

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum

from paperdesk.errors import InvalidPaperworkError

from .dates import parse_date, to_api_date, try_parse_date

logger = logging.getLogger(__name__)

# Values an upstream serializer has been seen emitting for a missing date.
_ABSENT_MARKERS = {"undefined", "null"}


class Priority(str, Enum):
    """Processing priority."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @classmethod
    def parse(cls, value: object) -> "Priority | None":
        """Case-insensitive lookup. Returns None for unknown values."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        for member in cls:
            if member.value.lower() == value.strip().lower():
                return member
        return None


class Status(str, Enum):
    """Derived completion status. Never stored."""

    ACTIVE = "Active"
    OVERDUE = "Overdue"
    PUNCTUAL = "Punctual"  # Completed on or before the due date
    DELAYED = "Delayed"  # Completed after the due date

    @classmethod
    def parse(cls, value: object) -> "Status | None":
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        for member in cls:
            if member.value.lower() == value.strip().lower():
                return member
        return None


class PaperType(str, Enum):
    PHYSICAL = "Physical Paper"
    DIGITAL = "Digital Paper"


class PaperSource(str, Enum):
    INTERNAL = "Internal Source"
    EXTERNAL = "External Source"


def _present(value: object) -> bool:
    """True if a completion date string is really there."""
    if not isinstance(value, str):
        return False
    stripped = value.strip()
    return bool(stripped) and stripped.lower() not in _ABSENT_MARKERS


@dataclass(frozen=True)
class Paperwork:
    """A tracked paperwork item."""

    id: str
    title: str
    target_completion_date: str
    priority: Priority | None = None
    description: str = ""
    actual_completion_date: str | None = None

    @classmethod
    def from_api(cls, data: dict) -> "Paperwork":
        """
        Create Paperwork from a retrieval API item.

        This is the validation boundary: absent-looking completion dates
        become None and unknown priorities become None.
        """
        if not isinstance(data, dict):
            raise InvalidPaperworkError(f"Paperwork item is not an object: {data!r}")
        paperwork_id = data.get("paperwork_id")
        if paperwork_id is None or str(paperwork_id).strip() == "":
            raise InvalidPaperworkError("Paperwork item is missing paperwork_id")

        raw_priority = data.get("processing_priority")
        priority = Priority.parse(raw_priority)
        if raw_priority and priority is None:
            logger.warning(f"Unknown priority {raw_priority!r} for paperwork {paperwork_id}")

        actual = data.get("actual_completion_date")
        return cls(
            id=str(paperwork_id),
            title=data.get("paper_title") or "",
            description=data.get("paper_description") or "",
            priority=priority,
            target_completion_date=data.get("target_completion_date") or "",
            actual_completion_date=actual.strip() if _present(actual) else None,
        )

    def to_api(self) -> dict:
        """Serialize back to the retrieval API field names."""
        return {
            "paperwork_id": self.id,
            "paper_title": self.title,
            "paper_description": self.description,
            "processing_priority": self.priority.value if self.priority else None,
            "target_completion_date": self.target_completion_date,
            "actual_completion_date": self.actual_completion_date,
        }


@dataclass(frozen=True)
class NewPaperwork:
    """A paperwork submission, before the server assigns it an id."""

    title: str
    description: str
    paper_type: PaperType
    paper_source: PaperSource
    priority: Priority
    target_completion_date: date

    def validate(self, today: date | None = None) -> None:
        """Raise InvalidPaperworkError if the submission is not acceptable."""
        today = today or date.today()
        if not self.title.strip():
            raise InvalidPaperworkError("Title is required")
        if not self.description.strip():
            raise InvalidPaperworkError("Description is required")
        if not isinstance(self.paper_type, PaperType):
            raise InvalidPaperworkError(f"Unknown paper type: {self.paper_type!r}")
        if not isinstance(self.paper_source, PaperSource):
            raise InvalidPaperworkError(f"Unknown paper source: {self.paper_source!r}")
        if not isinstance(self.priority, Priority):
            raise InvalidPaperworkError(f"Unknown priority: {self.priority!r}")
        if self.target_completion_date < today:
            raise InvalidPaperworkError("Target completion date cannot be in the past")

    def to_api(self) -> dict:
        """Serialize for the submission endpoint."""
        return {
            "paper_title": self.title,
            "paper_description": self.description,
            "paper_type": self.paper_type.value,
            "paper_source": self.paper_source.value,
            "processing_priority": self.priority.value,
            "target_completion_date": to_api_date(self.target_completion_date),
        }


def is_completed(paperwork: Paperwork) -> bool:
    """A record is completed iff it carries a real completion date."""
    return _present(paperwork.actual_completion_date)


def classify_status(
    paperwork: Paperwork,
    today: date | None = None,
    log: logging.Logger | None = None,
) -> Status:
    """
    Derive the completion status from the record's dates.

    Pure function - no I/O. Unparseable dates fall back to today (with a
    logged warning), so classification degrades but never raises.
    """
    if not paperwork.target_completion_date:
        return Status.ACTIVE

    today = today or date.today()
    due = parse_date(paperwork.target_completion_date, today, log)

    if not is_completed(paperwork):
        return Status.OVERDUE if due < today else Status.ACTIVE

    completed = parse_date(paperwork.actual_completion_date.strip(), today, log)
    return Status.PUNCTUAL if completed <= due else Status.DELAYED


def due_date(paperwork: Paperwork) -> date | None:
    """The parsed due date, or None if missing or malformed."""
    return try_parse_date(paperwork.target_completion_date)
