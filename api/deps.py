"""
Dependency injection for the Supabase-backed host and other shared resources.
"""
from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import Depends, HTTPException
from supabase import Client

from omdb_field.db.supabase import create_supabase_admin_client
from omdb_field.repositories.app_installations import AppInstallationRepositoryError
from omdb_field.repositories.entries import EntryRepositoryError
from omdb_field.sdk.base import HostApi
from omdb_field.sdk.supabase_host import SupabaseHost
from omdb_field.utils.env import get_app_id, get_default_locale, load_env

load_env()

logger = logging.getLogger(__name__)

REPOSITORY_ERRORS = (EntryRepositoryError, AppInstallationRepositoryError)


def get_supabase_admin_client() -> Client:
    """
    Returns a Supabase client using the service role key (bypasses RLS).
    The app writes entries and installation parameters, so it always needs it.
    """
    return create_supabase_admin_client()


def get_host(db: Annotated[Client, Depends(get_supabase_admin_client)]) -> HostApi:
    return SupabaseHost(db, locale=get_default_locale(), app_id=get_app_id())


# Type aliases for dependency injection
Host = Annotated[HostApi, Depends(get_host)]


def raise_for_repository_error(exc: Exception, context: str = "database operation") -> None:
    """
    Convert a repository failure into a 502 without leaking internal details.

    Raises:
        HTTPException: always
    """
    logger.error(f"Supabase error during {context}: {exc}")
    raise HTTPException(status_code=502, detail=f"Database error during {context}") from exc


def require_entry(entry: Any, entry_id: str) -> Any:
    if entry is None:
        raise HTTPException(status_code=404, detail=f"Entry {entry_id} not found")
    return entry
