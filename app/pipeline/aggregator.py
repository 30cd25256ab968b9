"""
Per-customer invoice counts and totals over a trailing window.
"""
from __future__ import annotations

import logging
import math
import re
from datetime import date, timedelta
from typing import Any, Iterable, Mapping, Optional

from app.pipeline.mapper import VOUCHER_FIELDS, resolve_fields
from app.schemas import SummaryRow

logger = logging.getLogger(__name__)

UNKNOWN_CUSTOMER = "Unknown"

_NON_NUMERIC_RE = re.compile(r"[^0-9.\-]")


def parse_amount(value: Any) -> float:
    """Lenient amount parsing: drop everything but digits, ``.`` and ``-``; junk → 0.

    Non-finite results (NaN / Infinity literals, overflowing digit runs) also count as junk.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        if isinstance(value, (int, float)):
            result = float(value)
        else:
            result = float(_NON_NUMERIC_RE.sub("", str(value)))
    except (ValueError, OverflowError):
        return 0.0
    return result if math.isfinite(result) else 0.0


def voucher_amount(voucher: Mapping[str, Any]) -> float:
    """Sum of inventory-entry amounts when present, else the voucher's own amount."""
    fields = resolve_fields(voucher, VOUCHER_FIELDS)
    entries = fields["inventory_entries"]
    if isinstance(entries, Mapping):
        entries = [entries]
    if isinstance(entries, list) and entries:
        return sum(
            parse_amount(resolve_fields(e, VOUCHER_FIELDS)["amount"])
            for e in entries
            if isinstance(e, Mapping)
        )
    return parse_amount(fields["amount"])


def aggregate_by_customer(vouchers: Iterable[Mapping[str, Any]]) -> list[SummaryRow]:
    """Group vouchers by party name and order by descending total."""
    totals: dict[str, float] = {}
    counts: dict[str, int] = {}

    for voucher in vouchers:
        if not isinstance(voucher, Mapping):
            continue
        customer = resolve_fields(voucher, VOUCHER_FIELDS)["party"] or UNKNOWN_CUSTOMER
        customer = str(customer)
        totals[customer] = totals.get(customer, 0.0) + voucher_amount(voucher)
        counts[customer] = counts.get(customer, 0) + 1

    rows = [
        SummaryRow(customer=c, invoices=counts[c], total=round(totals[c], 2))
        for c in totals
    ]
    rows.sort(key=lambda r: r.total, reverse=True)
    return rows


def window_bounds(days: int, today: Optional[date] = None) -> tuple[str, str]:
    """Inclusive ``[today - days, today]`` as ISO strings."""
    today = today or date.today()
    return (today - timedelta(days=days)).isoformat(), today.isoformat()


def summarize(repository, days: int, limit: int, today: Optional[date] = None) -> list[SummaryRow]:
    start, end = window_bounds(days, today)
    vouchers = repository.vouchers_in_window(start, end, limit)
    if len(vouchers) >= limit:
        logger.warning("Summary window %s..%s hit the %d row cap; totals are partial", start, end, limit)
    rows = aggregate_by_customer(vouchers)
    logger.info("Summary %s..%s: %d vouchers, %d customers", start, end, len(vouchers), len(rows))
    return rows
