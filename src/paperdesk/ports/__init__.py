"""Ports - interfaces/protocols for external dependencies."""

from .paperwork_repo import PaperworkRepository

__all__ = [
    "PaperworkRepository",
]
