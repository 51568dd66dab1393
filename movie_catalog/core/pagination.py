"""Cursor Pagination — pure parsing/encoding of order items and opaque cursors.

Invariants:
    - Order item format: "<field>_<ASC|DESC>" (field names are wire names, e.g. likeCount)
    - Only whitelisted fields are accepted (caller passes the whitelist)
    - "id" is always part of the resolved order (appended as tie-breaker)
    - Cursor = urlsafe base64 of JSON {"values": {field: value}, "order": [...]}
    - A cursor's embedded order overrides the requested order
"""

import base64
import binascii
import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from movie_catalog.core.domain_types import SortDirection
from movie_catalog.core.errors import BadRequestError

TIE_BREAKER_FIELD = "id"


@dataclass(frozen=True)
class OrderItem:
    field: str
    direction: SortDirection

    def encode(self) -> str:
        return f"{self.field}_{self.direction.value}"


@dataclass(frozen=True)
class CursorState:
    values: dict[str, Any]
    order: list[str]


def parse_order_item(raw: str, allowed_fields: Iterable[str]) -> OrderItem:
    field, sep, direction = raw.rpartition("_")
    if not sep or not field:
        raise BadRequestError(
            f"Invalid order '{raw}': expected <field>_<ASC|DESC>",
            "INVALID_ORDER",
        )
    try:
        sort_direction = SortDirection(direction.upper())
    except ValueError:
        raise BadRequestError(
            "Order direction must be ASC or DESC", "INVALID_ORDER",
        )
    if field not in set(allowed_fields):
        raise BadRequestError(
            f"Cannot order by '{field}'", "INVALID_ORDER",
        )
    return OrderItem(field=field, direction=sort_direction)


def resolve_order(
    raw_order: list[str], allowed_fields: Iterable[str],
) -> list[OrderItem]:
    """Parse order items and append the id tie-breaker when missing."""
    allowed = list(allowed_fields)
    if not raw_order:
        raw_order = [f"{TIE_BREAKER_FIELD}_{SortDirection.DESC.value}"]
    items = [parse_order_item(raw, allowed) for raw in raw_order]

    seen: set[str] = set()
    for item in items:
        if item.field in seen:
            raise BadRequestError(
                f"Duplicate order field '{item.field}'", "INVALID_ORDER",
            )
        seen.add(item.field)

    if TIE_BREAKER_FIELD not in seen:
        items.append(OrderItem(TIE_BREAKER_FIELD, items[0].direction))
    return items


def encode_cursor(values: Mapping[str, Any], order: list[OrderItem]) -> str:
    payload = {
        "values": dict(values),
        "order": [item.encode() for item in order],
    }
    raw = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii")


def decode_cursor(cursor: str) -> CursorState:
    try:
        raw = base64.urlsafe_b64decode(cursor.encode("ascii")).decode("utf-8")
        payload = json.loads(raw)
    except (binascii.Error, UnicodeError, ValueError):
        raise BadRequestError("Invalid cursor", "INVALID_CURSOR")

    values = payload.get("values") if isinstance(payload, dict) else None
    order = payload.get("order") if isinstance(payload, dict) else None
    if not isinstance(values, dict) or not isinstance(order, list) or not order:
        raise BadRequestError("Invalid cursor", "INVALID_CURSOR")
    return CursorState(values=values, order=[str(o) for o in order])


def build_next_cursor(
    last_row_values: Mapping[str, Any] | None, order: list[OrderItem],
) -> str | None:
    """Cursor pointing past the last row of a page, or None for an empty page."""
    if last_row_values is None:
        return None
    values = {item.field: last_row_values[item.field] for item in order}
    return encode_cursor(values, order)
