"""Tests for display formatting."""

from paperdesk.core.display import (
    completion_label,
    count_text,
    format_paperwork_line,
    long_date,
    priority_marker,
)
from paperdesk.core.paperwork import Priority


class TestCompletionLabel:
    def test_due(self, make_paperwork, today):
        assert completion_label(make_paperwork(due="13-06-2024"), today) == "Due on June 13, 2024"

    def test_completed(self, make_paperwork, today):
        p = make_paperwork(due="13-06-2024", completed="05-06-2024")
        assert completion_label(p, today) == "Completed on June 5, 2024"

    def test_undefined_completion_shows_due(self, make_paperwork, today):
        p = make_paperwork(due="13-06-2024", completed="undefined")
        assert completion_label(p, today).startswith("Due on")


class TestCountText:
    def test_singular(self):
        assert count_text(1) == "1 document"

    def test_plural(self):
        assert count_text(0) == "0 documents"
        assert count_text(3) == "3 documents"


def test_priority_marker():
    assert priority_marker(Priority.HIGH) == "!!!"
    assert priority_marker(Priority.LOW) == "!"
    assert priority_marker(None) == ""


def test_long_date(today):
    assert long_date(today) == "June 15, 2024"


def test_format_paperwork_line(make_paperwork, today):
    p = make_paperwork(title="Audit report", due="10-06-2024", priority=Priority.HIGH)
    assert format_paperwork_line(p, today) == "[!!!] Audit report (Due on June 10, 2024) [Overdue]"
