from __future__ import annotations

import argparse
import logging

from supabase import Client

from omdb_field.db.supabase import create_supabase_admin_client
from omdb_field.sdk.supabase_host import SupabaseHost
from omdb_field.utils.env import get_app_id, get_default_locale, load_env


def add_entry_filter_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--entry-id", action="append", default=[], help="cms.entries id. Repeatable.")
    parser.add_argument("--limit", type=int, default=None, help="Optional cap on number of entries to process.")
    parser.add_argument("--force", action="store_true", help="Refetch entries that already have OMDb data.")
    parser.add_argument("--dry-run", action="store_true", help="Run without writing to Supabase.")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging.")


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def load_env_and_host() -> tuple[Client, SupabaseHost]:
    load_env()
    db = create_supabase_admin_client()
    return db, SupabaseHost(db, locale=get_default_locale(), app_id=get_app_id())
