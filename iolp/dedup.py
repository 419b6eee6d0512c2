"""Classify incoming lease rows as new leases or updates to stored ones.

Stored leases are re-identified by street address, compared as an exact
string: no case, whitespace or punctuation normalization. Near-duplicate
addresses therefore become separate leases. The key extractor is a plain
function so a normalized-address key can be swapped in without touching
the batching code.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from .models import LeaseProperty
from .store import Store

logger = logging.getLogger(__name__)

LEASES_TABLE = LeaseProperty.__tablename__

# Columns an existing lease picks up from the leases workbook
UPDATE_COLUMNS = (
    "lease_number",
    "lease_effective_date",
    "lease_expiration_date",
    "federal_leased_code",
)

KeyFunc = Callable[[dict[str, Any]], Any]


def street_address_key(row: dict[str, Any]) -> Any:
    return row.get("street_address")


@dataclass
class LeaseResolution:
    """Mapped lease rows split into inserts and id-carrying updates."""

    inserts: list[dict[str, Any]] = field(default_factory=list)
    updates: list[dict[str, Any]] = field(default_factory=list)


def build_address_index(store: Store, key: KeyFunc = street_address_key) -> dict[Any, int]:
    """Index every stored lease id by its dedup key.

    When several stored leases share a key the last one read wins. Leases
    without a key are left out and can never be matched.
    """
    index: dict[Any, int] = {}
    for lease in store.select_columns(LEASES_TABLE, ["id", "street_address"]):
        lease_key = key(lease)
        if lease_key is not None:
            index[lease_key] = lease["id"]
    logger.info("Indexed %d existing leases by address", len(index))
    return index


def resolve_leases(
    rows: Iterable[dict[str, Any]],
    index: dict[Any, int],
    key: KeyFunc = street_address_key,
) -> LeaseResolution:
    """Route each mapped lease row to UPDATE (key hit) or INSERT (miss)."""
    resolution = LeaseResolution()
    for row in rows:
        row_key = key(row)
        lease_id = index.get(row_key) if row_key is not None else None
        if lease_id:
            update = {"id": lease_id}
            update.update({column: row.get(column) for column in UPDATE_COLUMNS})
            resolution.updates.append(update)
        else:
            resolution.inserts.append(row)
    return resolution
