"""
Adapters between the planning engine and the outside world:
file import, CSV/ICS export, and the ISO-dated persistent store.
"""

from .csv_importer import CSVImportError, parse_csv
from .exporters import generate_ics, to_csv
from .store import (
    StoreFormatError,
    check_store_ready,
    from_store_record,
    to_store_record,
    to_store_records
)

__all__ = [
    "CSVImportError",
    "parse_csv",
    "generate_ics",
    "to_csv",
    "StoreFormatError",
    "check_store_ready",
    "from_store_record",
    "to_store_record",
    "to_store_records",
]
