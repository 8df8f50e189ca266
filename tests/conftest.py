"""Shared fixtures."""

from datetime import date

import pytest

from paperdesk.core.paperwork import Paperwork, Priority


@pytest.fixture
def today():
    return date(2024, 6, 15)


@pytest.fixture
def make_paperwork():
    """Factory for creating paperwork."""
    def _make(
        id: str = "PW-1",
        title: str = "Paper",
        due: str = "20-06-2024",
        priority: Priority | None = Priority.MEDIUM,
        completed: str | None = None,
        description: str = "",
    ) -> Paperwork:
        return Paperwork(
            id=id,
            title=title,
            description=description,
            priority=priority,
            target_completion_date=due,
            actual_completion_date=completed,
        )
    return _make


@pytest.fixture
def sample_paperwork():
    """Twelve items: 4 High, 4 Medium, 4 Low, mixed statuses (as of 15-06-2024)."""
    return [
        Paperwork("PW-001", "Budget approval", "10-06-2024", Priority.HIGH, "Q3 budget"),
        Paperwork("PW-002", "Vendor contract", "20-06-2024", Priority.MEDIUM, "Renewal"),
        Paperwork("PW-003", "Leave request", "13-06-2024", Priority.LOW, "", "12-06-2024"),
        Paperwork("PW-004", "Audit report", "13-06-2024", Priority.HIGH, "Annual audit", "16-06-2024"),
        Paperwork("PW-005", "Travel claim", "15-06-2024", Priority.LOW, "Conference travel"),
        Paperwork("PW-006", "Purchase order", "01-07-2024", Priority.MEDIUM, "Laptops"),
        Paperwork("PW-007", "Safety inspection", "05-06-2024", Priority.HIGH, "Warehouse"),
        Paperwork("PW-008", "Training plan", "", Priority.LOW, "No date yet"),
        Paperwork("PW-009", "Policy update", "20-06-2024", Priority.HIGH, "HR policy", "19-06-2024"),
        Paperwork("PW-010", "Insurance renewal", "28-06-2024", Priority.MEDIUM, "Fleet insurance"),
        Paperwork("PW-011", "Asset disposal", "01-06-2024", Priority.LOW, "Old servers", "undefined"),
        Paperwork("PW-012", "Grant application", "30-06-2024", Priority.MEDIUM, "Research grant", "30-06-2024"),
    ]
