"""
Finds every ``VOUCHER`` entry in an arbitrarily nested payload.

The walk is depth-first and pre-order, driven by an explicit stack so that
hostile nesting cannot exhaust the interpreter stack. Containers already seen
are skipped and nodes deeper than ``MAX_DEPTH`` are ignored.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping

logger = logging.getLogger(__name__)

VOUCHER_KEY = "VOUCHER"
MAX_DEPTH = 256


def _children(node: Any) -> list[Any]:
    if isinstance(node, Mapping):
        return list(node.values())
    if isinstance(node, list):
        return list(node)
    return []


def collect_vouchers(root: Any, max_depth: int = MAX_DEPTH) -> list[dict]:
    """Return all vouchers found under *root*, flattened, in walk order."""
    vouchers: list[dict] = []
    seen: set[int] = set()
    stack: list[tuple[Any, int]] = [(root, 0)]
    truncated = 0

    while stack:
        node, depth = stack.pop()
        if not isinstance(node, (Mapping, list)):
            continue
        if id(node) in seen:
            continue
        seen.add(id(node))
        if depth > max_depth:
            truncated += 1
            continue

        if isinstance(node, Mapping) and VOUCHER_KEY in node:
            found = node[VOUCHER_KEY]
            for item in found if isinstance(found, list) else [found]:
                if isinstance(item, Mapping):
                    vouchers.append(item)
                else:
                    logger.debug("Skipping non-object VOUCHER entry: %r", item)

        # reversed so the first child is visited first
        for child in reversed(_children(node)):
            stack.append((child, depth + 1))

    if truncated:
        logger.warning("Voucher walk hit depth limit %d (%d nodes skipped)", max_depth, truncated)
    return vouchers
