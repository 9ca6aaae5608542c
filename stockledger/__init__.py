"""
stockledger - wide daily inventory spreadsheets -> per-day product ledger.
"""

from .service import ingest_upload, ingest_path
from .reader import read_workbook
from .validation import validate_rows
from .extract import extract_row, ProductRow, DayObservation
from .ledger import build_ledger, LedgerEntry
from .persist import LedgerUnitOfWork, commit_ledgers, IngestSummary

__all__ = [
    "ingest_upload",
    "ingest_path",
    "read_workbook",
    "validate_rows",
    "extract_row",
    "ProductRow",
    "DayObservation",
    "build_ledger",
    "LedgerEntry",
    "LedgerUnitOfWork",
    "commit_ledgers",
    "IngestSummary",
]
