"""SymbiFi services."""

from symbifi.services.csv_export import export_rows, rows_to_csv
from symbifi.services.record_service import RecordService
from symbifi.services.snapshot_service import SnapshotService

__all__ = [
    "RecordService",
    "SnapshotService",
    "export_rows",
    "rows_to_csv",
]
