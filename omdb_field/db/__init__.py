"""
Database helpers for OMDb field app scripts/services.
"""

from omdb_field.db.supabase import create_supabase_admin_client

__all__ = [
    "create_supabase_admin_client",
]
