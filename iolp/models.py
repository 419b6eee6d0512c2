"""SQLAlchemy models for the IOLP owned and leased building tables.

Data Architecture Overview:
- ``owned`` holds federally owned ("F") buildings and is fully replaced on
  every buildings import
- ``leases`` holds leased buildings from both workbooks; rows survive across
  imports and are re-identified by street address when the leases workbook
  is merged

Numeric columns stay nullable except available square feet, which defaults
to 0 (no recorded vacancy means fully utilized).
"""

from decimal import Decimal

from sqlalchemy import Boolean, Integer, Numeric, Text, false
from sqlalchemy.orm import Mapped, mapped_column

from .database import Base


class OwnedProperty(Base):
    """A federally owned building from the IOLP buildings workbook."""

    __tablename__ = "owned"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    location_code: Mapped[str | None] = mapped_column(Text)
    real_property_asset_name: Mapped[str | None] = mapped_column(Text)
    installation_name: Mapped[str | None] = mapped_column(Text)
    owned_or_leased: Mapped[str | None] = mapped_column(Text)  # F or L
    gsa_region: Mapped[str | None] = mapped_column(Text)
    street_address: Mapped[str | None] = mapped_column(Text)
    city: Mapped[str | None] = mapped_column(Text)
    state: Mapped[str | None] = mapped_column(Text)
    zip_code: Mapped[str | None] = mapped_column(Text)
    latitude: Mapped[Decimal | None] = mapped_column(Numeric)
    longitude: Mapped[Decimal | None] = mapped_column(Numeric)
    building_rentable_square_feet: Mapped[Decimal | None] = mapped_column(Numeric)
    available_square_feet: Mapped[Decimal] = mapped_column(
        Numeric(10, 0), default=0, server_default="0"
    )
    construction_date: Mapped[str | None] = mapped_column(
        Text,
        doc="Free text as exported; usually a year but not guaranteed.",
    )
    congressional_district: Mapped[str | None] = mapped_column(Text)
    congressional_district_representative_name: Mapped[str | None] = mapped_column(Text)
    building_status: Mapped[str | None] = mapped_column(Text)
    real_property_asset_type: Mapped[str | None] = mapped_column(Text)
    cleaned_building_name: Mapped[str | None] = mapped_column(Text)
    address_in_name: Mapped[bool | None] = mapped_column(
        Boolean, default=False, server_default=false()
    )

    def __repr__(self) -> str:
        return f"<OwnedProperty {self.location_code}: {self.cleaned_building_name}>"


class LeaseProperty(Base):
    """A leased building, from either workbook."""

    __tablename__ = "leases"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    location_code: Mapped[str | None] = mapped_column(Text)
    real_property_asset_name: Mapped[str | None] = mapped_column(Text)
    installation_name: Mapped[str | None] = mapped_column(Text)
    federal_leased_code: Mapped[str | None] = mapped_column(Text)
    gsa_region: Mapped[str | None] = mapped_column(Text)
    street_address: Mapped[str | None] = mapped_column(
        Text,
        doc="Merge key for lease imports. Compared as an exact string; "
            "neither unique nor normalized.",
    )
    city: Mapped[str | None] = mapped_column(Text)
    state: Mapped[str | None] = mapped_column(Text)
    zip_code: Mapped[str | None] = mapped_column(Text)
    latitude: Mapped[Decimal | None] = mapped_column(Numeric)
    longitude: Mapped[Decimal | None] = mapped_column(Numeric)
    building_rentable_square_feet: Mapped[Decimal | None] = mapped_column(Numeric)
    available_square_feet: Mapped[Decimal] = mapped_column(
        Numeric(10, 0), default=0, server_default="0"
    )
    construction_date: Mapped[str | None] = mapped_column(Text)
    congressional_district: Mapped[str | None] = mapped_column(Text)
    congressional_district_representative: Mapped[str | None] = mapped_column(Text)
    lease_number: Mapped[str | None] = mapped_column(Text)
    lease_effective_date: Mapped[str | None] = mapped_column(Text)  # YYYY-MM-DD
    lease_expiration_date: Mapped[str | None] = mapped_column(Text)  # YYYY-MM-DD
    real_property_asset_type: Mapped[str | None] = mapped_column(Text)
    cleaned_building_name: Mapped[str | None] = mapped_column(Text)
    address_in_name: Mapped[bool | None] = mapped_column(
        Boolean, default=False, server_default=false()
    )

    def __repr__(self) -> str:
        return f"<LeaseProperty {self.lease_number}: {self.street_address}>"


TABLES = {
    OwnedProperty.__tablename__: OwnedProperty,
    LeaseProperty.__tablename__: LeaseProperty,
}
