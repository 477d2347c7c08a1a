from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, cast

from omdb_field.app import build_field_context, init
from omdb_field.editor.field_editor import OmdbFieldEditor
from omdb_field.integrations.omdb.client import parse_imdb_id
from omdb_field.models.entries import EntryRecord, FieldIds
from omdb_field.sdk.base import CollectingNotifier, HostApi

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SyncFailure:
    entry_id: str
    message: str


@dataclass(frozen=True)
class SyncSummary:
    attempted: int
    updated: int
    skipped: int
    failed: int
    failures: list[SyncFailure] = field(default_factory=list)


def select_entries_to_sync(
    rows: Iterable[Mapping[str, Any]],
    *,
    locale: str,
    field_ids: FieldIds = FieldIds(),
    force: bool = False,
) -> tuple[list[EntryRecord], dict[str, int]]:
    """
    Keep entries with a parseable IMDb URL and (unless `force`) no OMDb data yet.

    Returns the selected records and skip counts by reason.
    """

    selected: list[EntryRecord] = []
    reasons: dict[str, int] = {}
    seen: set[str] = set()
    for row in rows:
        record = EntryRecord.from_row(row)
        if not record.id or record.id in seen:
            continue
        seen.add(record.id)
        if parse_imdb_id(record.get_value(field_ids.source, locale)) is None:
            reasons["no_imdb_url"] = reasons.get("no_imdb_url", 0) + 1
            continue
        if not force and record.get_value(field_ids.derived, locale) is not None:
            reasons["already_synced"] = reasons.get("already_synced", 0) + 1
            continue
        selected.append(record)
    return selected, reasons


def sync_entries(
    host: HostApi,
    entry_ids: Iterable[str],
    *,
    field_ids: FieldIds = FieldIds(),
    dry_run: bool = False,
) -> SyncSummary:
    """
    Run the field editor's Fetch action for each entry, one at a time.
    """

    attempted = updated = skipped = failed = 0
    failures: list[SyncFailure] = []
    for entry_id in entry_ids:
        attempted += 1
        entry = host.open_entry(entry_id)
        if entry is None:
            skipped += 1
            logger.warning(f"Entry {entry_id} not found; skipping")
            continue
        if parse_imdb_id(entry.get_localized(field_ids.source, entry.locale)) is None:
            skipped += 1
            logger.info(f"Entry {entry_id} has no IMDb URL; skipping")
            continue
        if dry_run:
            skipped += 1
            logger.info(f"[dry-run] would fetch OMDb data for entry {entry_id}")
            continue

        notifier = CollectingNotifier()
        editor = cast(
            OmdbFieldEditor,
            init(build_field_context(host, entry, notifier, field_ids=field_ids), field_ids=field_ids),
        )
        try:
            editor.fetch()
            editor.flush()
        except Exception as exc:
            failed += 1
            failures.append(SyncFailure(entry_id=entry_id, message=str(exc)))
            logger.error(f"Sync failed for entry {entry_id}: {exc}")
            continue
        finally:
            editor.close()

        if notifier.errors:
            failed += 1
            failures.append(SyncFailure(entry_id=entry_id, message="; ".join(notifier.errors)))
            continue
        updated += 1

    return SyncSummary(attempted=attempted, updated=updated, skipped=skipped, failed=failed, failures=failures)
