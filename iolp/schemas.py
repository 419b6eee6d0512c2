"""Column labels, value sets and run statistics for IOLP imports.

The two IOLP workbooks share most headers but not all of them: the
representative column and the capitalization of "Real Property Asset
Type" differ between the buildings and the leases exports, so each
workbook gets its own label constants.
"""

from enum import Enum

from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class OwnershipFlag(str, Enum):
    """Value of the "Owned or Leased" column in the buildings workbook."""

    FEE = "F"
    """Federally owned (fee) building. Imported into ``owned``."""

    LEASED = "L"
    """Leased building listed in the buildings workbook. Imported into ``leases``."""


# =============================================================================
# Spreadsheet column labels
# =============================================================================

LOCATION_CODE = "Location Code"
ASSET_NAME = "Real Property Asset Name"
INSTALLATION_NAME = "Installation Name"
OWNED_OR_LEASED = "Owned or Leased"
FEDERAL_LEASED_CODE = "Federal Leased Code"
GSA_REGION = "GSA Region"
STREET_ADDRESS = "Street Address"
CITY = "City"
STATE = "State"
ZIP_CODE = "Zip Code"
LATITUDE = "Latitude"
LONGITUDE = "Longitude"
RENTABLE_SQUARE_FEET = "Building Rentable Square Feet"
AVAILABLE_SQUARE_FEET = "Available Square Feet"
CONSTRUCTION_DATE = "Construction Date"
CONGRESSIONAL_DISTRICT = "Congressional District"
BUILDING_STATUS = "Building Status"
LEASE_NUMBER = "Lease Number"
LEASE_EFFECTIVE_DATE = "Lease Effective Date"
LEASE_EXPIRATION_DATE = "Lease Expiration Date"

# Buildings workbook spellings
BUILDINGS_REPRESENTATIVE = "Congressional District Representative Name"
BUILDINGS_ASSET_TYPE = "Real Property Asset Type"

# Leases workbook spellings
LEASES_REPRESENTATIVE = "Congressional District Representative"
LEASES_ASSET_TYPE = "Real Property Asset type"

# Derived fields attached by the row processor
CLEANED_BUILDING_NAME = "cleanedBuildingName"
ADDRESS_IN_NAME = "addressInName"


# =============================================================================
# Run statistics
# =============================================================================


class ImportStats(BaseModel):
    """Counts from one import phase."""

    source: str = Field(description="Workbook path")
    rows_read: int = 0
    owned_inserted: int = 0
    leases_inserted: int = 0
    leases_updated: int = 0
    rows_skipped: int = Field(
        default=0,
        description="Buildings rows whose ownership flag is neither F nor L",
    )
    insert_batches: int = 0
    update_batches: int = 0

    @property
    def rows_written(self) -> int:
        return self.owned_inserted + self.leases_inserted + self.leases_updated
