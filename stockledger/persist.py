"""
Transactional write side: upsert products by code, replace each product's
daily records wholesale, one commit per upload.
"""
import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from sqlalchemy import delete, insert, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from .errors import PersistenceFailure, UploadConflict
from .models import DailyRecord, Product
from .schemas import IngestSummary, LedgerEntry, ProductRow

logger = logging.getLogger(__name__)

DUPLICATE_MARKERS = ("duplicate key", "unique constraint")


def is_duplicate_key(exc: Exception) -> bool:
    text = str(getattr(exc, "orig", exc)).lower()
    return any(m in text for m in DUPLICATE_MARKERS)


class LedgerUnitOfWork:
    """
    One database transaction for one upload. Commits once on a clean exit from
    the `with` block, rolls back everything on any exception.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory
        self.session: Optional[Session] = None
        self._pending: List[dict] = []

    def __enter__(self) -> "LedgerUnitOfWork":
        self.session = self.session_factory()
        return self

    def __exit__(self, exc_type, exc, tb):
        try:
            if exc_type is None:
                self.flush_records()
                self.session.commit()
            else:
                self.session.rollback()
        except BaseException:
            self.session.rollback()
            raise
        finally:
            self.session.close()
            self.session = None
            self._pending = []
        return False

    def upsert_product(self, product_code: str, name: str) -> Product:
        """Insert by code, or update the name of the existing product. Returns it with a stable id."""
        product = self.session.execute(
            select(Product).where(Product.product_code == product_code)
        ).scalar_one_or_none()
        if product is None:
            product = Product(product_code=product_code, name=name)
            self.session.add(product)
            self.session.flush()
            logger.debug(f"Created product {product_code} (id={product.id})")
        else:
            product.name = name
            logger.debug(f"Updated product {product_code} (id={product.id})")
        return product

    def delete_records(self, product_id: int) -> int:
        result = self.session.execute(delete(DailyRecord).where(DailyRecord.product_id == product_id))
        return result.rowcount or 0

    def add_records(self, product_id: int, entries: Iterable[LedgerEntry]) -> int:
        """Queue records for the single bulk insert done at commit."""
        values = [e.record_values(product_id) for e in entries]
        self._pending.extend(values)
        return len(values)

    def flush_records(self) -> int:
        if not self._pending:
            return 0
        count = len(self._pending)
        self.session.execute(insert(DailyRecord), self._pending)
        self._pending = []
        return count


def commit_ledgers(
    session_factory: sessionmaker,
    batches: Sequence[Tuple[ProductRow, List[LedgerEntry]]],
) -> IngestSummary:
    """
    Persist every (product, ledger) pair all-or-nothing. Products are handled one
    after another: upsert, drop all their old records, queue the new ones; then
    one batched insert and one commit. Products with an empty ledger are skipped.
    """
    summary = IngestSummary()
    try:
        with LedgerUnitOfWork(session_factory) as uow:
            for product_row, entries in batches:
                if not entries:
                    continue
                product = uow.upsert_product(product_row.product_code, product_row.product_name)
                removed = uow.delete_records(product.id)
                summary.records_created += uow.add_records(product.id, entries)
                summary.products_processed += 1
                if removed:
                    logger.debug(f"Replacing {removed} record(s) for {product_row.product_code}")
    except IntegrityError as e:
        if is_duplicate_key(e):
            logger.warning(f"Upload conflicted with existing data: {e.orig}")
            raise UploadConflict() from e
        logger.exception("Integrity error while committing ledger")
        raise PersistenceFailure() from e
    except SQLAlchemyError as e:
        logger.exception("Database error while committing ledger")
        raise PersistenceFailure() from e

    logger.info(
        f"Committed {summary.records_created} record(s) for {summary.products_processed} product(s)"
    )
    return summary
