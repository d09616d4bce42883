"""
Record types for the three admin domains: customers, inventory and sales.
"""

import uuid
from dataclasses import dataclass, asdict
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Any, Dict, Optional

from . import config


class Domain(str, Enum):
    CUSTOMERS = "customers"
    INVENTORY = "inventory"
    SALES = "sales"


class TrayType(str, Enum):
    """Closed set of tray categories counted in inventory stats."""
    FULL = "full"
    PARTIAL = "partial"


@dataclass(frozen=True)
class Record:
    id: str
    """Opaque unique identifier assigned at creation"""

    created_at: datetime
    """Creation timestamp, never changes"""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        data = asdict(self)
        for key, value in data.items():
            if isinstance(value, Enum):
                data[key] = value.value
            elif isinstance(value, Decimal):
                data[key] = str(value)
            elif isinstance(value, datetime):
                data[key] = value.isoformat()
        return data


@dataclass(frozen=True)
class Customer(Record):
    name: str
    phone: str
    location: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class InventoryItem(Record):
    supplier_name: str
    tray_type: TrayType
    trays: int
    quantity: int
    delivery_date: str


def sale_total(full_trays: int, pieces: int, price_per_tray: Decimal, price_per_piece: Decimal) -> Decimal:
    """Sale amount rounded to cents. Raises InvalidOperation when it exceeds decimal precision."""
    amount = full_trays * price_per_tray + pieces * price_per_piece
    return amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class Sale(Record):
    customer_name: str
    full_trays: int
    pieces: int
    price_per_tray: Decimal
    price_per_piece: Decimal
    sale_date: str
    delivery_date: Optional[str] = None
    notes: Optional[str] = None

    @property
    def total_amount(self) -> Decimal:
        return sale_total(self.full_trays, self.pieces, self.price_per_tray, self.price_per_piece)

    @property
    def eggs(self) -> int:
        return self.full_trays * config.EGGS_PER_TRAY + self.pieces

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["total_amount"] = str(self.total_amount)
        data["eggs"] = self.eggs
        return data


RECORD_TYPES = {
    Domain.CUSTOMERS: Customer,
    Domain.INVENTORY: InventoryItem,
    Domain.SALES: Sale,
}


def new_record(domain: Domain, draft: Dict[str, Any]) -> Record:
    """Build a record from a validated draft, stamping id and creation time."""
    record_type = RECORD_TYPES[domain]
    return record_type(id=str(uuid.uuid4()), created_at=datetime.now(), **draft)
