"""
Repository layer for DB access patterns.
"""

from omdb_field.repositories.app_installations import (
    AppInstallationRepositoryError,
    fetch_app_parameters,
    save_app_parameters,
)
from omdb_field.repositories.entries import (
    EntryRepositoryError,
    fetch_entry,
    insert_entry,
    query_entries,
    update_entry_fields,
)

__all__ = [
    "AppInstallationRepositoryError",
    "EntryRepositoryError",
    "fetch_app_parameters",
    "fetch_entry",
    "insert_entry",
    "query_entries",
    "save_app_parameters",
    "update_entry_fields",
]
