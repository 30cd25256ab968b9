"""
Date-string normalization for agent exports.

Only two shapes are recognised: compact ``YYYYMMDD`` and ``DD-MM-YYYY``.
Anything else is reported as unparsed (``None``) and never raises.
"""
from __future__ import annotations

import re
from typing import Any, Optional

_COMPACT_RE = re.compile(r"^(\d{4})(\d{2})(\d{2})$")
_DAY_FIRST_RE = re.compile(r"^(\d{2})-(\d{2})-(\d{4})$")


def normalize_date(value: Any) -> Optional[str]:
    """Return ``YYYY-MM-DD`` for a recognised date string, else ``None``."""
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    if not text:
        return None

    m = _COMPACT_RE.match(text)
    if m:
        year, month, day = m.groups()
        return f"{year}-{month}-{day}"

    m = _DAY_FIRST_RE.match(text)
    if m:
        day, month, year = m.groups()
        return f"{year}-{month}-{day}"

    return None
