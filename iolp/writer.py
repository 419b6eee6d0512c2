"""Batched writes for the owned replace and the lease merge.

Two disciplines:
- replace: empty both tables, verify they are empty, then insert in
  sequential batches of INSERT_BATCH_SIZE
- merge: run updates in batches of UPDATE_BATCH_SIZE, every update of a
  batch in flight at once with a barrier between batches, then insert the
  new rows in sequential batches

A multi-row insert covers a whole batch, so inserts never overlap.
"""

import logging
from collections.abc import Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Any

from .dedup import LeaseResolution
from .exceptions import IntegrityError
from .models import LeaseProperty, OwnedProperty
from .store import Store

logger = logging.getLogger(__name__)

OWNED_TABLE = OwnedProperty.__tablename__
LEASES_TABLE = LeaseProperty.__tablename__

# Rows per multi-row INSERT
INSERT_BATCH_SIZE = 500
# Concurrent UPDATEs per batch; bounds lock contention on the leases table
UPDATE_BATCH_SIZE = 100


def chunked(rows: Sequence[Any], size: int) -> Iterator[Sequence[Any]]:
    """Yield consecutive slices of at most ``size`` rows."""
    if size < 1:
        raise ValueError(f"Batch size must be positive, got {size}")
    for start in range(0, len(rows), size):
        yield rows[start:start + size]


def clear_tables(store: Store, tables: Sequence[str] = (OWNED_TABLE, LEASES_TABLE)) -> None:
    """Delete every row of ``tables`` and check they all ended up empty.

    Raises IntegrityError before anything is inserted if any table still
    has rows.
    """
    for table in tables:
        store.delete_all(table)

    counts = {table: store.count(table) for table in tables}
    if any(counts.values()):
        raise IntegrityError(counts)
    logger.info("Tables cleared successfully: %s", ", ".join(tables))


def insert_batches(
    store: Store,
    table: str,
    rows: Sequence[dict[str, Any]],
    batch_size: int = INSERT_BATCH_SIZE,
) -> int:
    """Insert ``rows`` one batch at a time. Returns the number of batches."""
    batches = 0
    for batch in chunked(rows, batch_size):
        store.insert_many(table, batch)
        batches += 1
        logger.debug("Inserted batch %d into %s (%d rows)", batches, table, len(batch))
    if batches:
        logger.info("Inserted %d rows into %s in %d batches", len(rows), table, batches)
    return batches


def _update_batch(store: Store, table: str, batch: Sequence[dict[str, Any]]) -> None:
    with ThreadPoolExecutor(max_workers=len(batch)) as executor:
        futures = [
            executor.submit(
                store.update_by_id,
                table,
                update["id"],
                {column: value for column, value in update.items() if column != "id"},
            )
            for update in batch
        ]
        # Barrier: every update settles, failed or not, before the next batch
        wait(futures)

    errors = [future.exception() for future in futures if future.exception() is not None]
    if errors:
        logger.error("%d of %d updates failed on %s", len(errors), len(batch), table)
        raise errors[0]


def update_batches(
    store: Store,
    table: str,
    updates: Sequence[dict[str, Any]],
    batch_size: int = UPDATE_BATCH_SIZE,
) -> int:
    """Apply id-carrying ``updates`` batch by batch. Returns the number of batches."""
    batches = 0
    for batch in chunked(updates, batch_size):
        _update_batch(store, table, batch)
        batches += 1
        logger.debug("Updated batch %d on %s (%d rows)", batches, table, len(batch))
    if batches:
        logger.info("Updated %d rows on %s in %d batches", len(updates), table, batches)
    return batches


def replace_owned(
    store: Store,
    owned_rows: Sequence[dict[str, Any]],
    leased_rows: Sequence[dict[str, Any]],
    batch_size: int = INSERT_BATCH_SIZE,
) -> int:
    """Replace ``owned`` and ``leases`` with rows from the buildings workbook.

    Returns the total number of insert batches.
    """
    clear_tables(store, (OWNED_TABLE, LEASES_TABLE))
    batches = insert_batches(store, OWNED_TABLE, owned_rows, batch_size)
    batches += insert_batches(store, LEASES_TABLE, leased_rows, batch_size)
    return batches


def merge_leases(
    store: Store,
    resolution: LeaseResolution,
    insert_batch_size: int = INSERT_BATCH_SIZE,
    update_batch_size: int = UPDATE_BATCH_SIZE,
) -> tuple[int, int]:
    """Apply a lease resolution: updates first, then inserts.

    Returns ``(update_batches, insert_batches)``.
    """
    updated = update_batches(store, LEASES_TABLE, resolution.updates, update_batch_size)
    inserted = insert_batches(store, LEASES_TABLE, resolution.inserts, insert_batch_size)
    return updated, inserted
