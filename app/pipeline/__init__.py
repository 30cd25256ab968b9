"""
Agent upload pipeline.

Voucher uploads: collect vouchers → map to records → one keyed upsert.
Sales uploads:   validate body → map TitleCase rows → plain insert.
"""
import logging
from datetime import datetime, timezone
from typing import Any

from app.pipeline.collector import collect_vouchers
from app.pipeline.mapper import to_debug_record, to_sales_row, to_voucher_record
from app.schemas import UploadResponse

logger = logging.getLogger(__name__)

KIND_SALES_BY_CUSTOMER = "sales_by_customer"
KIND_VOUCHERS = "vouchers"


class UploadRejected(ValueError):
    """The upload body is missing fields its kind requires."""


def _first(payload: dict, *keys: str) -> Any:
    for key in keys:
        if payload.get(key) is not None:
            return payload[key]
    return None


def ingest_vouchers(payload: dict, repository) -> UploadResponse:
    company = _first(payload, "company", "companyName")
    agent_id = _first(payload, "agentId", "agent_id")
    timestamp = _first(payload, "ts", "timestamp") or datetime.now(timezone.utc).isoformat()
    company = str(company) if company is not None else None
    agent_id = str(agent_id) if agent_id is not None else None
    timestamp = str(timestamp)

    vouchers = collect_vouchers(payload.get("data"))
    logger.info("Collected %d vouchers for company=%s agent=%s", len(vouchers), company, agent_id)

    if not vouchers:
        record = to_debug_record(payload, company, agent_id, timestamp)
        repository.upsert_vouchers([record])
        return UploadResponse(ok=True, inserted=1, note="no vouchers found; raw payload stored")

    records = [to_voucher_record(v, company, agent_id, timestamp) for v in vouchers]
    inserted = repository.upsert_vouchers(records)
    return UploadResponse(ok=True, inserted=inserted)


def ingest_sales(payload: dict, repository) -> UploadResponse:
    company = payload.get("company")
    period = payload.get("period")
    rows = payload.get("rows")
    if not isinstance(period, dict):
        period = {}

    if not company or not period.get("from") or not period.get("to") or not isinstance(rows, list):
        raise UploadRejected("company, period.from, period.to and rows are required")

    company = str(company)
    period_from, period_to = str(period["from"]), str(period["to"])
    records = [to_sales_row(r, company, period_from, period_to) for r in rows]
    records = [r for r in records if r is not None]
    if not records:
        return UploadResponse(ok=True, inserted=0, note="no valid rows after normalization")

    inserted = repository.insert_sales_rows(records)
    logger.info("Inserted %d sales rows for %s (%s..%s)", inserted, company, period_from, period_to)
    return UploadResponse(ok=True, inserted=inserted)


def process_upload(payload: dict, repository) -> UploadResponse:
    """Dispatch an upload on its ``kind``."""
    kind = payload.get("kind")
    rows = payload.get("rows")
    logger.info(
        "Upload kind=%s company=%s rows=%d",
        kind,
        payload.get("company") or payload.get("companyName"),
        len(rows) if isinstance(rows, list) else 0,
    )

    if kind == KIND_SALES_BY_CUSTOMER:
        return ingest_sales(payload, repository)
    if kind is None or kind == KIND_VOUCHERS:
        return ingest_vouchers(payload, repository)

    logger.info("No handler for kind: %s", kind)
    return UploadResponse(ok=True, inserted=0, note="no handler for this kind")
