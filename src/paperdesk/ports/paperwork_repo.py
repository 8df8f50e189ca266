"""Paperwork repository interface."""

from typing import Protocol

from paperdesk.core.paperwork import NewPaperwork, Paperwork


class PaperworkRepository(Protocol):
    """Interface for retrieving and submitting paperwork on any backend."""

    def fetch_all(self) -> list[Paperwork]:
        """Fetch all paperwork visible to the signed-in user."""
        ...

    def submit(self, new: NewPaperwork) -> dict:
        """Submit new paperwork. Returns the server response body."""
        ...
