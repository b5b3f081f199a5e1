"""
Domain package for the license search client.

Exports the filter criteria model and the where-clause builder. Keep this
package free of I/O.
"""

from license_search.domain.models import FIELD_COLUMNS, FilterCriteria, LicenseRecord
from license_search.domain.query import build_condition, build_where_clause, escape_literal

__all__ = [
    "FIELD_COLUMNS",
    "FilterCriteria",
    "LicenseRecord",
    "build_condition",
    "build_where_clause",
    "escape_literal",
]
