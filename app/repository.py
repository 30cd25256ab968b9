"""
Persistence collaborator for vouchers and sales rows.

Wraps a SQLAlchemy session; every database error surfaces as
:class:`PersistenceError` after the session has been rolled back.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from fastapi import Depends
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.database import get_db
from app.models import SalesByCustomerModel, VoucherModel
from app.schemas import SalesRow, VoucherRecord

logger = logging.getLogger(__name__)


class PersistenceError(Exception):
    """The store rejected or could not complete an operation."""


class PersistenceUnavailable(PersistenceError):
    """No store is configured for this process."""

    def __init__(self, message: str = "database is not configured (DATABASE_URL missing)"):
        super().__init__(message)


def _build_voucher_upsert(session: Session, rows: list[dict[str, Any]]):
    insert_fn = sqlite_insert if session.get_bind().dialect.name == "sqlite" else pg_insert
    table = VoucherModel.__table__
    stmt = insert_fn(table).values(rows)
    set_cols = {
        col.name: stmt.excluded[col.name]
        for col in table.columns
        if col.name not in ("id", "unique_key")
    }
    return stmt.on_conflict_do_update(index_elements=[table.c.unique_key], set_=set_cols)


class LedgerRepository:
    def __init__(self, session: Optional[Session]):
        self.session = session

    def _require_session(self) -> Session:
        if self.session is None:
            raise PersistenceUnavailable()
        return self.session

    def upsert_vouchers(self, records: Iterable[VoucherRecord]) -> int:
        """Insert-or-overwrite a batch keyed on ``unique_key``; returns rows written."""
        session = self._require_session()

        # one statement cannot touch the same key twice; last occurrence wins
        by_key: dict[str, dict[str, Any]] = {}
        for record in records:
            by_key[record.unique_key] = record.model_dump()
        rows = list(by_key.values())
        if not rows:
            return 0

        try:
            result = session.execute(_build_voucher_upsert(session, rows))
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            logger.error("Voucher upsert failed: %s", exc)
            raise PersistenceError(str(getattr(exc, "orig", None) or exc)) from exc

        written = result.rowcount if result.rowcount is not None and result.rowcount >= 0 else len(rows)
        logger.info("Upserted %d vouchers", written)
        return written

    def insert_sales_rows(self, rows: Iterable[SalesRow]) -> int:
        session = self._require_session()
        models = [SalesByCustomerModel(**row.model_dump()) for row in rows]
        try:
            session.add_all(models)
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            logger.error("Sales insert failed: %s", exc)
            raise PersistenceError(str(getattr(exc, "orig", None) or exc)) from exc
        return len(models)

    def vouchers_in_window(self, start: str, end: str, limit: int) -> list[Any]:
        """Voucher payloads dated within ``[start, end]``, newest first, at most *limit*."""
        session = self._require_session()
        try:
            rows = (
                session.query(VoucherModel.payload)
                .filter(VoucherModel.voucher_date >= start, VoucherModel.voucher_date <= end)
                .order_by(VoucherModel.voucher_date.desc())
                .limit(limit)
                .all()
            )
        except SQLAlchemyError as exc:
            session.rollback()
            raise PersistenceError(str(getattr(exc, "orig", None) or exc)) from exc
        return [r.payload for r in rows]


def get_repository(db: Optional[Session] = Depends(get_db)) -> LedgerRepository:
    return LedgerRepository(db)
