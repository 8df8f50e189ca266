"""Adapters - I/O implementations of ports."""

from .paperwork_api import PaperworkAPIAdapter, submitted_record

__all__ = [
    "PaperworkAPIAdapter",
    "submitted_record",
]
