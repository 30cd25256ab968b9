"""
Canonical pydantic v2 models for the ingestion pipeline and its HTTP responses.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Persistence rows
# ---------------------------------------------------------------------------

class VoucherRecord(BaseModel):
    """One flattened voucher, ready for the ``vouchers`` upsert."""
    agent_id: Optional[str] = None
    company: Optional[str] = None
    timestamp: str
    voucher_date: Optional[str] = Field(None, description="YYYY-MM-DD, or None when unparsed")
    voucher_number: Optional[str] = None
    voucher_type: Optional[str] = None
    unique_key: str = Field(..., description="company|date|voucher number (or random token)")
    payload: Any = Field(..., description="The original voucher object, untouched")


class SalesRow(BaseModel):
    """One customer total for the ``sales_by_customer`` table."""
    company: str
    period_from: str
    period_to: str
    customer: str
    total_sales: float
    lines: Optional[float] = None


# ---------------------------------------------------------------------------
# HTTP envelopes
# ---------------------------------------------------------------------------

class UploadResponse(BaseModel):
    ok: bool
    inserted: Optional[int] = None
    note: Optional[str] = None
    error: Optional[str] = None


class SummaryRow(BaseModel):
    customer: str
    invoices: int
    total: float


class SummaryResponse(BaseModel):
    ok: bool = True
    days: int
    rows: list[SummaryRow] = Field(default_factory=list)
