"""IOLP import: buildings workbook (destructive replace), then leases workbook (merge).

Pipeline:
1. Read the buildings workbook, cleanse asset names, split on the
   "Owned or Leased" flag
2. Empty ``owned`` and ``leases``, verify, insert F rows into ``owned`` and
   L rows into ``leases``
3. Read the leases workbook, cleanse and map every row
4. Index stored leases by street address, update matches, insert the rest

Run through ``scripts/import_data.py`` or ``python -m iolp.importer``.
"""

import argparse
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path

import logfire

from .database import init_db, make_engine
from .dedup import KeyFunc, build_address_index, resolve_leases, street_address_key
from .mappers import building_to_lease, map_building, map_lease
from .schemas import OWNED_OR_LEASED, ImportStats, OwnershipFlag
from .spreadsheet import read_spreadsheet
from .store import SqlAlchemyStore, Store
from .transformations import process_row
from .writer import (
    INSERT_BATCH_SIZE,
    LEASES_TABLE,
    OWNED_TABLE,
    UPDATE_BATCH_SIZE,
    merge_leases,
    replace_owned,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Configuration
# =============================================================================

DEFAULT_BUILDINGS_FILE = "2025-5-23-iolp-buildings.xlsx"
DEFAULT_LEASES_FILE = "2025-5-23-iolp-leases.xlsx"


@dataclass
class ImportConfig:
    """Everything one import run needs besides the store."""

    buildings_path: Path
    leases_path: Path
    insert_batch_size: int = INSERT_BATCH_SIZE
    update_batch_size: int = UPDATE_BATCH_SIZE

    @classmethod
    def from_env(cls, buildings: str | None = None, leases: str | None = None) -> "ImportConfig":
        """Explicit paths win over IOLP_BUILDINGS_FILE / IOLP_LEASES_FILE."""
        return cls(
            buildings_path=Path(
                buildings or os.getenv("IOLP_BUILDINGS_FILE", DEFAULT_BUILDINGS_FILE)
            ),
            leases_path=Path(leases or os.getenv("IOLP_LEASES_FILE", DEFAULT_LEASES_FILE)),
        )


# =============================================================================
# Import phases
# =============================================================================


def import_buildings(
    store: Store,
    path: str | Path,
    batch_size: int = INSERT_BATCH_SIZE,
) -> ImportStats:
    """Replace ``owned`` (and ``leases``) with the buildings workbook."""
    stats = ImportStats(source=str(path))

    rows = [process_row(row) for row in read_spreadsheet(path)]
    stats.rows_read = len(rows)

    owned_rows = [
        map_building(row) for row in rows if row.get(OWNED_OR_LEASED) == OwnershipFlag.FEE
    ]
    leased_rows = [
        building_to_lease(row) for row in rows if row.get(OWNED_OR_LEASED) == OwnershipFlag.LEASED
    ]
    stats.rows_skipped = stats.rows_read - len(owned_rows) - len(leased_rows)
    if stats.rows_skipped:
        logger.warning(
            "%d buildings rows have no F/L ownership flag and were skipped", stats.rows_skipped
        )
    logger.info("Buildings: %d owned (F), %d leased (L)", len(owned_rows), len(leased_rows))

    stats.insert_batches = replace_owned(store, owned_rows, leased_rows, batch_size)
    stats.owned_inserted = len(owned_rows)
    stats.leases_inserted = len(leased_rows)
    return stats


def import_leases(
    store: Store,
    path: str | Path,
    insert_batch_size: int = INSERT_BATCH_SIZE,
    update_batch_size: int = UPDATE_BATCH_SIZE,
    key: KeyFunc = street_address_key,
) -> ImportStats:
    """Merge the leases workbook into ``leases`` by street address."""
    stats = ImportStats(source=str(path))

    rows = [map_lease(process_row(row)) for row in read_spreadsheet(path)]
    stats.rows_read = len(rows)

    index = build_address_index(store, key)
    resolution = resolve_leases(rows, index, key)
    logger.info(
        "Leases: %d new, %d matching existing addresses",
        len(resolution.inserts),
        len(resolution.updates),
    )

    stats.update_batches, stats.insert_batches = merge_leases(
        store, resolution, insert_batch_size, update_batch_size
    )
    stats.leases_updated = len(resolution.updates)
    stats.leases_inserted = len(resolution.inserts)
    return stats


def run_import(store: Store, config: ImportConfig) -> list[ImportStats]:
    """Run both phases in order. Any failure propagates and stops the run."""
    buildings = import_buildings(store, config.buildings_path, config.insert_batch_size)
    leases = import_leases(
        store,
        config.leases_path,
        insert_batch_size=config.insert_batch_size,
        update_batch_size=config.update_batch_size,
    )
    return [buildings, leases]


# =============================================================================
# CLI
# =============================================================================


def print_stats(store: Store) -> None:
    """Print current table counts."""
    print("\n=== Database Statistics ===\n")
    print(f"Owned buildings: {store.count(OWNED_TABLE):,}")
    print(f"Leases: {store.count(LEASES_TABLE):,}")


def configure_logging() -> None:
    logging.basicConfig(
        level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if os.getenv("LOGFIRE_TOKEN"):
        logfire.configure()


def main(argv: list[str] | None = None, store: Store | None = None) -> int:
    parser = argparse.ArgumentParser(description="Import IOLP buildings and leases workbooks")
    parser.add_argument("--buildings", help="Buildings workbook (default: $IOLP_BUILDINGS_FILE)")
    parser.add_argument("--leases", help="Leases workbook (default: $IOLP_LEASES_FILE)")
    parser.add_argument("--stats", action="store_true", help="Show table counts after the import")
    parser.add_argument("--stats-only", action="store_true", help="Show table counts and exit")
    args = parser.parse_args(argv)

    configure_logging()

    try:
        if store is None:
            engine = make_engine()
            if os.getenv("LOGFIRE_TOKEN"):
                logfire.instrument_sqlalchemy(engine=engine)
            init_db(engine)
            store = SqlAlchemyStore(engine)

        if args.stats_only:
            print_stats(store)
            return 0

        config = ImportConfig.from_env(args.buildings, args.leases)
        for stats in run_import(store, config):
            logger.info(
                "%s: %d rows read, %d rows written",
                stats.source,
                stats.rows_read,
                stats.rows_written,
            )

        if args.stats:
            print_stats(store)
    except Exception:
        logger.exception("Import failed")
        return 1

    logger.info("Import completed successfully")
    return 0


if __name__ == "__main__":
    sys.exit(main())
