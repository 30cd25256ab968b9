"""
Reporting endpoint.

GET /api/sales-summary?days=N — per-customer totals over the trailing window
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.config import settings
from app.pipeline.aggregator import summarize
from app.repository import LedgerRepository, PersistenceError, get_repository
from app.schemas import SummaryResponse

logger = logging.getLogger(__name__)
router = APIRouter()


# ── GET /api/sales-summary ───────────────────────────────────────────────
@router.get("/sales-summary", response_model=SummaryResponse)
def sales_summary(
    days: int = Query(default=settings.SUMMARY_DEFAULT_DAYS, ge=0, le=3650),
    repository: LedgerRepository = Depends(get_repository),
):
    try:
        rows = summarize(repository, days, limit=settings.SUMMARY_ROW_LIMIT)
    except PersistenceError as exc:
        logger.error("Sales summary failed: %s", exc)
        return JSONResponse(status_code=500, content={"ok": False, "error": str(exc)})
    except Exception as exc:
        logger.exception("Sales summary crash")
        return JSONResponse(status_code=500, content={"ok": False, "error": str(exc)})
    return SummaryResponse(days=days, rows=rows)
