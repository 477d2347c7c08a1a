"""
Domain models shared across scripts and services.
"""

from omdb_field.models.entries import EntryRecord, FieldIds, build_entry_link

__all__ = [
    "EntryRecord",
    "FieldIds",
    "build_entry_link",
]
