"""
Domain models for the license search client.

Defines the filter criteria a user can search by and the mapping from each
criterion to the dataset column it matches against. License records themselves
are schema-less and passed through as decoded JSON objects.
"""
from __future__ import annotations

from typing import Any, Dict, Tuple

from pydantic import BaseModel, Field

LicenseRecord = Dict[str, Any]

# Field order here is the order conditions appear in the where clause.
FIELD_COLUMNS: Tuple[Tuple[str, str], ...] = (
    ("exp_date", "license_expiration_date_mmddccyy"),
    ("license_number", "license_number"),
    ("license_type", "license_type"),
    ("business_county", "business_county"),
    ("license_subtype", "license_subtype"),
    ("business_name", "business_name"),
    ("owner_name", "owner_name"),
)


class FilterCriteria(BaseModel):
    """
    Optional substring filters applied to the license dataset.

    An empty value means "no condition" for that field.
    """

    exp_date: str = Field("", description="Expiration date (eg. 12/16/2025).")
    license_number: str = Field("", description="License number (eg. 90210).")
    license_type: str = Field("", description="License type (eg. A/C Technician).")
    business_county: str = Field("", description="Business county (eg. HARRIS).")
    license_subtype: str = Field("", description="License sub-type (eg. REG).")
    business_name: str = Field("", description="Business name (eg. BOB'S PLUMBING).")
    owner_name: str = Field("", description="Owner name (eg. BOBS, BOBBY).")

    model_config = {
        "frozen": True,
        "extra": "forbid",
    }

    def active_filters(self) -> Dict[str, str]:
        """Return the non-empty filters keyed by column name, in clause order."""
        return {
            column: getattr(self, field_name)
            for field_name, column in FIELD_COLUMNS
            if getattr(self, field_name)
        }

    def is_empty(self) -> bool:
        return not self.active_filters()


__all__ = ["FIELD_COLUMNS", "FilterCriteria", "LicenseRecord"]
