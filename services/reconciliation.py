"""
Quantity-by-part comparison between a shipment's items and a memo's manual items.

Pure functions: no database access, no exceptions for bad data. Items may be
dicts (camelCase or snake_case keys), pydantic models or ORM rows.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from core.coercion import Number, to_number


def _read(item: Any, *names: str) -> Any:
    for name in names:
        if isinstance(item, dict):
            if name in item:
                return item[name]
        elif hasattr(item, name):
            return getattr(item, name)
    return None


def _norm(value: Any) -> str:
    return "" if value is None else str(value).strip().lower()


def item_key(item: Any) -> str:
    """``partNo|partName``, trimmed and lower-cased."""
    part_no = _read(item, "part_no", "partNo")
    part_name = _read(item, "part_name", "partName")
    return f"{_norm(part_no)}|{_norm(part_name)}"


def item_quantity(item: Any) -> Number:
    return to_number(_read(item, "quantity", "qty"))


def summarize(items: Optional[Iterable[Any]]) -> Dict[str, Number]:
    """Sum quantities per key; duplicate rows add up. Keeps first-seen order."""
    totals: Dict[str, Number] = {}
    for item in items or []:
        key = item_key(item)
        totals[key] = totals.get(key, 0) + item_quantity(item)
    return totals


@dataclass(frozen=True)
class ReconciliationRow:
    key: str
    shipment_qty: Number
    memo_qty: Number

    @property
    def matches(self) -> bool:
        return self.shipment_qty == self.memo_qty

    def to_dict(self) -> dict:
        return {"key": self.key, "shipmentQty": self.shipment_qty, "memoQty": self.memo_qty}


@dataclass(frozen=True)
class ReconciliationResult:
    rows: List[ReconciliationRow] = field(default_factory=list)

    @property
    def is_match(self) -> bool:
        # Nothing to compare is not a match.
        return bool(self.rows) and all(row.matches for row in self.rows)

    @property
    def first_mismatch_key(self) -> Optional[str]:
        for row in self.rows:
            if not row.matches:
                return row.key
        return None

    def to_dict(self) -> dict:
        return {
            "rows": [row.to_dict() for row in self.rows],
            "isMatch": self.is_match,
            "firstMismatchKey": self.first_mismatch_key,
        }


def reconcile(shipment_items: Optional[Iterable[Any]], memo_items: Optional[Iterable[Any]]) -> ReconciliationResult:
    shipment_totals = summarize(shipment_items)
    memo_totals = summarize(memo_items)

    keys = list(shipment_totals)
    keys.extend(key for key in memo_totals if key not in shipment_totals)

    rows = [
        ReconciliationRow(
            key=key,
            shipment_qty=shipment_totals.get(key, 0),
            memo_qty=memo_totals.get(key, 0),
        )
        for key in keys
    ]
    return ReconciliationResult(rows=rows)
