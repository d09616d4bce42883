"""
Summary statistics recomputed from a record store's contents on every call.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Dict, Iterable, Optional, Type


@dataclass(frozen=True)
class AggregateSpec:
    """Which record attributes feed each statistic. None disables that statistic."""
    quantity_field: Optional[str] = None
    category_field: Optional[str] = None
    categories: Optional[Type[Enum]] = None
    date_field: Optional[str] = None
    amount_field: Optional[str] = None


@dataclass(frozen=True)
class Stats:
    record_count: int = 0
    total_quantity: int = 0
    category_counts: Dict[str, int] = field(default_factory=dict)
    current_period_count: int = 0
    current_period_quantity: int = 0
    total_amount: Decimal = Decimal("0")
    current_period_amount: Decimal = Decimal("0")

    def to_dict(self) -> Dict:
        return {
            "record_count": self.record_count,
            "total_quantity": self.total_quantity,
            "category_counts": dict(self.category_counts),
            "current_period_count": self.current_period_count,
            "current_period_quantity": self.current_period_quantity,
            "total_amount": str(self.total_amount),
            "current_period_amount": str(self.current_period_amount),
        }


def parse_date(value) -> Optional[date]:
    """Best-effort conversion of a stored date value. Unparsable values give None."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value).strip()).date()
    except ValueError:
        return None


def in_same_month(value, now: datetime) -> bool:
    parsed = parse_date(value)
    return parsed is not None and parsed.year == now.year and parsed.month == now.month


def summarize(records: Iterable, spec: AggregateSpec, now: datetime = None) -> Stats:
    """
    Compute stats over all records. Pure: same records and same "now" give equal Stats.

    Args:
        records: Current store contents
        spec: Attribute mapping for the domain
        now: Reference time for the current-period sums, read once per call
    """
    if now is None:
        now = datetime.now()

    counts = {member.value: 0 for member in spec.categories} if spec.categories else {}
    record_count = 0
    total_quantity = period_count = period_quantity = 0
    total_amount = period_amount = Decimal("0")

    for record in records:
        record_count += 1
        quantity = (getattr(record, spec.quantity_field) or 0) if spec.quantity_field else 0
        amount = (getattr(record, spec.amount_field) or Decimal("0")) if spec.amount_field else Decimal("0")
        total_quantity += quantity
        total_amount += amount

        if spec.category_field:
            category = getattr(record, spec.category_field)
            key = category.value if isinstance(category, Enum) else category
            # Values outside the closed set are not counted
            if key in counts:
                counts[key] += 1

        if spec.date_field and in_same_month(getattr(record, spec.date_field), now):
            period_count += 1
            period_quantity += quantity
            period_amount += amount

    return Stats(
        record_count=record_count,
        total_quantity=total_quantity,
        category_counts=counts,
        current_period_count=period_count,
        current_period_quantity=period_quantity,
        total_amount=total_amount,
        current_period_amount=period_amount,
    )
