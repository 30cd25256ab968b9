"""
Row mapping: raw voucher or raw sales row into a flat persistence record.

Source keys arrive in inconsistent casing, so each canonical field is resolved
through an ordered list of accepted variants; the first non-null value wins.
"""
from __future__ import annotations

import math
import re
import uuid
from typing import Any, Mapping, Optional

from app.pipeline.dates import normalize_date
from app.schemas import SalesRow, VoucherRecord

# canonical name → accepted source keys, most preferred first
VOUCHER_FIELDS: dict[str, tuple[str, ...]] = {
    "date": ("DATE", "date"),
    "voucher_number": ("VOUCHERNUMBER", "vouchernumber"),
    "voucher_type": ("VOUCHERTYPENAME", "vouchertypename"),
    "party": ("PARTYLEDGERNAME", "partyledgername", "PARTYNAME", "partyname"),
    "amount": ("AMOUNT", "amount"),
    "inventory_entries": (
        "ALLINVENTORYENTRIES.LIST",
        "ALLINVENTORYENTRIES",
        "allinventoryentries",
        "INVENTORYENTRIES.LIST",
        "inventoryentries",
    ),
}

SALES_FIELDS: dict[str, tuple[str, ...]] = {
    "customer": ("Customer", "customer"),
    "total_sales": ("TotalSales", "total_sales"),
    "lines": ("Lines", "lines"),
}

NO_VOUCHERS_SENTINEL = "no-vouchers"

_NUMERIC_LITERAL_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
_INFINITY_RE = re.compile(r"^[+-]?Infinity$")
_RADIX_LITERAL_RE = re.compile(r"^0([xXoObB])([0-9a-fA-F]+)$")
_RADIX = {"x": 16, "o": 8, "b": 2}


def resolve_fields(row: Mapping[str, Any], table: dict[str, tuple[str, ...]]) -> dict[str, Any]:
    """Resolve every canonical field of *table* against *row* in one pass."""
    resolved: dict[str, Any] = {}
    for name, keys in table.items():
        resolved[name] = None
        for key in keys:
            value = row.get(key)
            if value is not None:
                resolved[name] = value
                break
    return resolved


def random_token() -> str:
    return uuid.uuid4().hex


def build_unique_key(company: Optional[str], date_part: Any, number_part: Any) -> str:
    return f"{company or ''}|{date_part}|{number_part}"


def to_voucher_record(
    voucher: Mapping[str, Any],
    company: Optional[str],
    agent_id: Optional[str],
    timestamp: str,
) -> VoucherRecord:
    fields = resolve_fields(voucher, VOUCHER_FIELDS)
    raw_date = fields["date"]
    voucher_date = normalize_date(raw_date)
    number = fields["voucher_number"]
    voucher_type = fields["voucher_type"]

    unique_key = build_unique_key(
        company,
        voucher_date or raw_date or timestamp,
        number or random_token(),
    )
    return VoucherRecord(
        agent_id=agent_id,
        company=company,
        timestamp=timestamp,
        voucher_date=voucher_date,
        voucher_number=str(number) if number is not None else None,
        voucher_type=str(voucher_type) if voucher_type is not None else None,
        unique_key=unique_key,
        payload=dict(voucher),
    )


def to_debug_record(
    payload: Mapping[str, Any],
    company: Optional[str],
    agent_id: Optional[str],
    timestamp: str,
) -> VoucherRecord:
    """Raw row kept when an upload carries no vouchers at all."""
    return VoucherRecord(
        agent_id=agent_id,
        company=company,
        timestamp=timestamp,
        unique_key=build_unique_key(company, timestamp, f"{NO_VOUCHERS_SENTINEL}|{random_token()}"),
        payload=dict(payload),
    )


def to_number(value: Any) -> float:
    """Strict numeric coercion with numeric-literal semantics.

    Whitespace is trimmed and an empty string is 0. ``Infinity`` spellings and
    ``0x`` / ``0o`` / ``0b`` integer literals are accepted. An empty list is 0
    and a one-element list coerces its element. Anything else non-numeric is
    NaN, including thousands separators (``"1,234.50"`` → NaN).
    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    if isinstance(value, list):
        if not value:
            return 0.0
        # a list stringifies its element, so booleans become "true"/"false"
        if len(value) == 1 and not isinstance(value[0], (bool, Mapping)):
            return to_number(value[0])
        return math.nan
    if not isinstance(value, str):
        return math.nan

    text = value.strip()
    if not text:
        return 0.0
    if _NUMERIC_LITERAL_RE.match(text):
        return float(text)
    if _INFINITY_RE.match(text):
        return -math.inf if text.startswith("-") else math.inf
    m = _RADIX_LITERAL_RE.match(text)
    if m:
        try:
            parsed = int(m.group(2), _RADIX[m.group(1).lower()])
        except ValueError:
            return math.nan
        try:
            return float(parsed)
        except OverflowError:
            return math.inf
    return math.nan


def to_sales_row(row: Mapping[str, Any], company: str, period_from: str, period_to: str) -> Optional[SalesRow]:
    """Map one TitleCase agent row; ``None`` when it must be dropped."""
    if not isinstance(row, Mapping):
        return None
    fields = resolve_fields(row, SALES_FIELDS)
    customer = fields["customer"]
    total_sales = to_number(fields["total_sales"])
    lines = to_number(fields["lines"])

    if not customer or math.isnan(total_sales):
        return None
    return SalesRow(
        company=company,
        period_from=period_from,
        period_to=period_to,
        customer=str(customer),
        total_sales=total_sales,
        lines=None if math.isnan(lines) else lines,
    )
