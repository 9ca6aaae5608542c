"""
Upload entrypoint: auth gate -> read -> validate -> extract -> ledger -> commit.

Returns (http_status, json_body) so any thin HTTP handler or UI can pass the
result straight through.
"""
import argparse
import json
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Callable, Optional, Tuple, Union

from sqlalchemy.orm import sessionmaker

from .errors import IngestError, PersistenceFailure, Unauthorized
from .extract import extract_row
from .ledger import anchor_date, build_ledger
from .persist import commit_ledgers
from .reader import read_workbook
from .validation import validate_rows

logger = logging.getLogger(__name__)


def ingest_upload(
    filename: Optional[str],
    data: Optional[bytes],
    session_factory: sessionmaker,
    as_of: Optional[Union[date, datetime]] = None,
    authorize: Optional[Callable[[], bool]] = None,
) -> Tuple[int, dict]:
    try:
        if authorize is not None and not authorize():
            raise Unauthorized()

        columns, rows = read_workbook(data, filename)
        validate_rows(rows, columns)

        anchor = anchor_date(as_of)
        batches = []
        for row in rows:
            product = extract_row(row)
            batches.append((product, build_ledger(product, anchor)))

        summary = commit_ledgers(session_factory, batches)
    except IngestError as e:
        if e.status >= 500:
            logger.error(f"Upload of {filename} failed: {e.message}")
        else:
            logger.info(f"Upload of {filename} rejected ({e.status}): {e.message}")
        return e.status, e.to_response()
    except Exception:
        logger.exception(f"Unexpected error while processing {filename}")
        err = PersistenceFailure()
        return err.status, err.to_response()

    return 200, {
        "success": True,
        "message": "File processed successfully",
        "summary": summary.model_dump(by_alias=True),
    }


def ingest_path(path: Union[str, Path], session_factory: sessionmaker, as_of=None) -> Tuple[int, dict]:
    p = Path(path)
    return ingest_upload(p.name, p.read_bytes(), session_factory, as_of=as_of)


if __name__ == "__main__":
    # Example CLI run:
    #   python -m stockledger.service data/inventory.xlsx --as-of 2024-01-15
    from .db import engine, init_db, SessionLocal
    from .logger import setup_logger

    parser = argparse.ArgumentParser(description="Load a daily inventory workbook into the ledger database.")
    parser.add_argument("workbook", type=Path)
    parser.add_argument("--as-of", type=date.fromisoformat, default=None,
                        help="anchor date for the last day column (default: today)")
    args = parser.parse_args()

    setup_logger("stockledger")
    init_db(engine)
    status, body = ingest_path(args.workbook, SessionLocal, as_of=args.as_of)
    print(json.dumps(body, indent=2))
    raise SystemExit(0 if status == 200 else 1)
