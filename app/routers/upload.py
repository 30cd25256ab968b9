"""
Agent upload endpoint.

POST /api/agent/upload — voucher export or kind-dispatched sales rows
"""
from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from app.pipeline import UploadRejected, process_upload
from app.repository import LedgerRepository, PersistenceError, get_repository
from app.schemas import UploadResponse

logger = logging.getLogger(__name__)
router = APIRouter()


def _failure(status_code: int, message: str) -> JSONResponse:
    body = UploadResponse(ok=False, error=message).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)


# ── POST /api/agent/upload ───────────────────────────────────────────────
@router.post("/agent/upload", response_model=UploadResponse, response_model_exclude_none=True)
def upload(
    payload: Dict[str, Any] = Body(...),
    repository: LedgerRepository = Depends(get_repository),
):
    try:
        return process_upload(payload, repository)
    except UploadRejected as exc:
        return _failure(400, str(exc))
    except PersistenceError as exc:
        logger.error("Upload persistence error: %s", exc)
        return _failure(500, str(exc))
    except Exception as exc:
        logger.exception("Upload handler crash")
        return _failure(500, str(exc))
