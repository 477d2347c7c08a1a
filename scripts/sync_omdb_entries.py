#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys

from omdb_field.ingestion.entry_sync import select_entries_to_sync, sync_entries
from omdb_field.models.entries import FieldIds
from omdb_field.repositories.entries import fetch_entry, list_entries_by_content_type

from scripts._omdb_common import add_entry_filter_args, configure_logging, load_env_and_host


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="sync_omdb_entries",
        description="Fetch OMDb metadata into movie entries (omdb, title and genre fields).",
    )
    add_entry_filter_args(parser)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv if argv is not None else sys.argv[1:])
    configure_logging(args.verbose)
    db, host = load_env_and_host()
    field_ids = FieldIds()

    if args.entry_id:
        rows = [row for row in (fetch_entry(db, entry_id) for entry_id in args.entry_id) if row]
    else:
        rows = list_entries_by_content_type(db, field_ids.movie_content_type)

    selected, reasons = select_entries_to_sync(rows, locale=host.locale, field_ids=field_ids, force=args.force)
    if args.limit is not None:
        selected = selected[: args.limit]
    if reasons:
        print("SKIPPED " + " ".join(f"{reason}={count}" for reason, count in sorted(reasons.items())))
    if not selected:
        print("No entries matched the filters.")
        return 0

    summary = sync_entries(host, [record.id for record in selected], field_ids=field_ids, dry_run=args.dry_run)
    print(
        "SYNC summary "
        f"attempted={summary.attempted} "
        f"updated={summary.updated} "
        f"skipped={summary.skipped} "
        f"failed={summary.failed}"
    )
    for failure in summary.failures:
        print(f"FAILED entry id={failure.entry_id}: {failure.message}")
    return 1 if summary.failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
