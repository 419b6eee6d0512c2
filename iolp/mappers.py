"""Map processed spreadsheet rows onto the ``owned`` and ``leases`` columns.

Mapped rows are plain dicts keyed by column name, ready for a bulk insert.
Geo and area columns are kept as nullable decimal strings (a falsy cell,
including 0, becomes None) except available square feet, which defaults
to 0.
"""

from datetime import date, datetime
from typing import Any

from . import schemas as col
from .transformations import convert_excel_date, parse_available_square_feet


def as_text(value: Any) -> str | None:
    """Render a loosely typed cell for a text column."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def as_numeric_text(value: Any) -> str | None:
    """Render a numeric cell as a decimal string, or None when falsy."""
    return as_text(value) if value else None


def _shared_columns(row: dict[str, Any]) -> dict[str, Any]:
    """Columns both tables fill the same way from either workbook."""
    return {
        "location_code": as_text(row.get(col.LOCATION_CODE)),
        "real_property_asset_name": as_text(row.get(col.ASSET_NAME)),
        "installation_name": as_text(row.get(col.INSTALLATION_NAME)),
        "gsa_region": as_text(row.get(col.GSA_REGION)),
        "street_address": as_text(row.get(col.STREET_ADDRESS)),
        "city": as_text(row.get(col.CITY)),
        "state": as_text(row.get(col.STATE)),
        "zip_code": as_text(row.get(col.ZIP_CODE)),
        "latitude": as_numeric_text(row.get(col.LATITUDE)),
        "longitude": as_numeric_text(row.get(col.LONGITUDE)),
        "building_rentable_square_feet": as_numeric_text(row.get(col.RENTABLE_SQUARE_FEET)),
        "available_square_feet": parse_available_square_feet(row.get(col.AVAILABLE_SQUARE_FEET)),
        "construction_date": as_text(row.get(col.CONSTRUCTION_DATE)),
        "congressional_district": as_text(row.get(col.CONGRESSIONAL_DISTRICT)),
    }


def _cleansing_columns(row: dict[str, Any]) -> dict[str, Any]:
    return {
        "cleaned_building_name": as_text(row.get(col.CLEANED_BUILDING_NAME)),
        "address_in_name": bool(row.get(col.ADDRESS_IN_NAME, False)),
    }


def map_building(row: dict[str, Any]) -> dict[str, Any]:
    """Map a buildings-workbook row onto the ``owned`` table."""
    return {
        **_shared_columns(row),
        "owned_or_leased": as_text(row.get(col.OWNED_OR_LEASED)),
        "congressional_district_representative_name": as_text(
            row.get(col.BUILDINGS_REPRESENTATIVE)
        ),
        "building_status": as_text(row.get(col.BUILDING_STATUS)),
        "real_property_asset_type": as_text(row.get(col.BUILDINGS_ASSET_TYPE)),
        **_cleansing_columns(row),
    }


def map_lease(row: dict[str, Any]) -> dict[str, Any]:
    """Map a leases-workbook row onto the ``leases`` table."""
    return {
        **_shared_columns(row),
        "federal_leased_code": as_text(row.get(col.FEDERAL_LEASED_CODE)),
        "congressional_district_representative": as_text(
            row.get(col.LEASES_REPRESENTATIVE)
        ),
        "lease_number": as_text(row.get(col.LEASE_NUMBER)),
        "lease_effective_date": convert_excel_date(row.get(col.LEASE_EFFECTIVE_DATE)),
        "lease_expiration_date": convert_excel_date(row.get(col.LEASE_EXPIRATION_DATE)),
        "real_property_asset_type": as_text(row.get(col.LEASES_ASSET_TYPE)),
        **_cleansing_columns(row),
    }


def building_to_lease(row: dict[str, Any]) -> dict[str, Any]:
    """Map a buildings-workbook row flagged "L" onto the ``leases`` table.

    The buildings export carries no lease terms, so the lease-only columns
    are left empty.
    """
    return {
        **_shared_columns(row),
        "federal_leased_code": None,
        "congressional_district_representative": as_text(
            row.get(col.BUILDINGS_REPRESENTATIVE)
        ),
        "lease_number": None,
        "lease_effective_date": None,
        "lease_expiration_date": None,
        "real_property_asset_type": as_text(row.get(col.BUILDINGS_ASSET_TYPE)),
        **_cleansing_columns(row),
    }
