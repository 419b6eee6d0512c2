import threading
import time

import pytest
from openpyxl import Workbook

from iolp.store import Store

BUILDINGS_HEADERS = [
    "Location Code",
    "Real Property Asset Name",
    "Installation Name",
    "Owned or Leased",
    "GSA Region",
    "Street Address",
    "City",
    "State",
    "Zip Code",
    "Latitude",
    "Longitude",
    "Building Rentable Square Feet",
    "Available Square Feet",
    "Construction Date",
    "Congressional District",
    "Congressional District Representative Name",
    "Building Status",
    "Real Property Asset Type",
]

LEASES_HEADERS = [
    "Location Code",
    "Real Property Asset Name",
    "Installation Name",
    "Federal Leased Code",
    "GSA Region",
    "Street Address",
    "City",
    "State",
    "Zip Code",
    "Latitude",
    "Longitude",
    "Building Rentable Square Feet",
    "Available Square Feet",
    "Construction Date",
    "Congressional District",
    "Congressional District Representative",
    "Lease Number",
    "Lease Effective Date",
    "Lease Expiration Date",
    "Real Property Asset type",
]


class FakeStore(Store):
    """In-memory store that records every call.

    ``sticky_tables`` ignore delete_all, to simulate a failed delete.
    ``update_errors`` maps a lease id to the exception its update raises.
    ``update_delay`` keeps each update in flight long enough to overlap.
    """

    def __init__(self, update_delay: float = 0.0):
        self.rows = {"owned": [], "leases": []}
        self.next_id = {"owned": 1, "leases": 1}
        self.calls = []
        self.events = []
        self.sticky_tables = set()
        self.update_errors = {}
        self.update_delay = update_delay
        self.in_flight = 0
        self.max_in_flight = 0
        self._lock = threading.Lock()

    def _record(self, *call):
        with self._lock:
            self.calls.append(call)

    def count(self, table):
        self._record("count", table)
        return len(self.rows[table])

    def delete_all(self, table):
        self._record("delete_all", table)
        if table not in self.sticky_tables:
            self.rows[table] = []

    def insert_many(self, table, rows):
        self._record("insert_many", table, len(rows))
        for row in rows:
            self.rows[table].append({"id": self.next_id[table], **row})
            self.next_id[table] += 1

    def update_by_id(self, table, row_id, values):
        self._record("update_by_id", table, row_id)
        with self._lock:
            self.events.append(("start", row_id))
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.update_delay:
                time.sleep(self.update_delay)
            if row_id in self.update_errors:
                raise self.update_errors[row_id]
            for row in self.rows[table]:
                if row["id"] == row_id:
                    row.update(values)
        finally:
            with self._lock:
                self.in_flight -= 1
                self.events.append(("end", row_id))

    def select_columns(self, table, columns):
        self._record("select_columns", table, tuple(columns))
        return [{column: row.get(column) for column in columns} for row in self.rows[table]]

    def seed(self, table, rows):
        """Put rows in place without recording a call."""
        for row in rows:
            self.rows[table].append({"id": self.next_id[table], **row})
            self.next_id[table] += 1

    def ops(self, name):
        return [call for call in self.calls if call[0] == name]


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def make_workbook(tmp_path):
    """Write an .xlsx whose first sheet holds ``headers`` then ``rows``."""

    def _make(name, headers, rows, extra_sheet=None):
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = "Data"
        sheet.append(headers)
        for row in rows:
            sheet.append(row)
        if extra_sheet is not None:
            other = workbook.create_sheet("Other")
            for row in extra_sheet:
                other.append(row)
        path = tmp_path / name
        workbook.save(path)
        return path

    return _make


def building_row(**values):
    """A buildings-workbook row in header order; keyword names use underscores."""
    defaults = {
        "Location Code": "DC0001ZZ",
        "Real Property Asset Name": "FEDERAL OFFICE BUILDING",
        "Installation Name": None,
        "Owned or Leased": "F",
        "GSA Region": 11,
        "Street Address": "1800 F ST NW",
        "City": "WASHINGTON",
        "State": "DC",
        "Zip Code": "20405",
        "Latitude": 38.8973,
        "Longitude": -77.0425,
        "Building Rentable Square Feet": 512000,
        "Available Square Feet": None,
        "Construction Date": 1917,
        "Congressional District": "98",
        "Congressional District Representative Name": "NORTON, ELEANOR",
        "Building Status": "ACTIVE",
        "Real Property Asset Type": "BUILDING",
    }
    for key, value in values.items():
        defaults[key.replace("_", " ")] = value
    return [defaults[h] for h in BUILDINGS_HEADERS]


def lease_row(**values):
    defaults = {
        "Location Code": "DC0100ZZ",
        "Real Property Asset Name": "PATRIOTS PLAZA",
        "Installation Name": None,
        "Federal Leased Code": "L",
        "GSA Region": 11,
        "Street Address": "395 E ST SW",
        "City": "WASHINGTON",
        "State": "DC",
        "Zip Code": "20024",
        "Latitude": 38.8834,
        "Longitude": -77.0171,
        "Building Rentable Square Feet": 250000,
        "Available Square Feet": 1200,
        "Construction Date": 2007,
        "Congressional District": "98",
        "Congressional District Representative": "NORTON, ELEANOR",
        "Lease Number": "LDC00001",
        "Lease Effective Date": 44927,
        "Lease Expiration Date": 48580,
        "Real Property Asset type": "BUILDING",
    }
    for key, value in values.items():
        defaults[key.replace("_", " ")] = value
    return [defaults[h] for h in LEASES_HEADERS]
