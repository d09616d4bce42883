"""
Per-domain definitions: form fields, stats mapping, table layout and messages.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import InvalidOperation
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .aggregator import AggregateSpec
from .errors import ValidationFailure
from .schema import Domain, TrayType, sale_total
from .validator import FieldKind, FieldSpec

# (label, attribute, display format) - formats are resolved in render.py
Column = Tuple[str, str, str]


@dataclass(frozen=True)
class DomainSpec:
    domain: Domain
    title: str
    noun: str
    fields: Sequence[FieldSpec]
    aggregate: AggregateSpec
    columns: Sequence[Column]
    detail: Sequence[Column]
    search_fields: Sequence[str] = ()
    date_defaults: Sequence[str] = ()
    callable_field: Optional[str] = None
    extra_check: Optional[Callable[[Dict[str, Any]], None]] = None
    stats_labels: Dict[str, str] = field(default_factory=dict)
    summary: Sequence[Column] = ()

    def get_field(self, name: str) -> FieldSpec:
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(name)

    def form_defaults(self, today: date = None) -> Dict[str, str]:
        """Blank create form, with date fields that default to today pre-filled."""
        today = today or date.today()
        defaults = {spec.name: "" for spec in self.fields}
        for name in self.date_defaults:
            defaults[name] = today.isoformat()
        for spec in self.fields:
            if spec.kind == FieldKind.CHOICE:
                defaults[spec.name] = next(iter(spec.choices)).value
        return defaults


def _check_sale(draft: Dict[str, Any]) -> None:
    if not draft["full_trays"] and not draft["pieces"]:
        raise ValidationFailure("full_trays", label="Full Trays or Pieces")
    try:
        sale_total(draft["full_trays"], draft["pieces"], draft["price_per_tray"], draft["price_per_piece"])
    except InvalidOperation:
        raise ValidationFailure("price_per_tray", "Sale total is too large", label="Total Amount")


CUSTOMERS = DomainSpec(
    domain=Domain.CUSTOMERS,
    title="Customers",
    noun="Customer",
    fields=(
        FieldSpec("name", "Customer Name"),
        FieldSpec("phone", "Phone Number"),
        FieldSpec("location", "Location", required=False),
        FieldSpec("notes", "Notes", required=False),
    ),
    aggregate=AggregateSpec(date_field="created_at"),
    columns=(
        ("Name", "name", "text"),
        ("Phone", "phone", "text"),
        ("Location", "location", "text"),
        ("Added On", "created_at", "date"),
    ),
    detail=(
        ("Customer Name", "name", "text"),
        ("Phone Number", "phone", "text"),
        ("Location", "location", "text"),
        ("Notes", "notes", "text"),
        ("Added On", "created_at", "date"),
    ),
    search_fields=("name", "phone"),
    callable_field="phone",
    summary=(
        ("Name", "name", "text"),
        ("Phone", "phone", "text"),
    ),
    stats_labels={
        "record_count": "Total Customers",
        "current_period_count": "New This Month",
    },
)

INVENTORY = DomainSpec(
    domain=Domain.INVENTORY,
    title="Inventory",
    noun="Inventory",
    fields=(
        FieldSpec("supplier_name", "Supplier Name"),
        FieldSpec("tray_type", "Tray Type", kind=FieldKind.CHOICE, choices=TrayType),
        FieldSpec("trays", "Trays", kind=FieldKind.INTEGER),
        FieldSpec("quantity", "Quantity (pieces)", kind=FieldKind.INTEGER),
        FieldSpec("delivery_date", "Delivery Date", kind=FieldKind.DATE),
    ),
    aggregate=AggregateSpec(
        quantity_field="quantity",
        category_field="tray_type",
        categories=TrayType,
        date_field="delivery_date",
    ),
    columns=(
        ("Supplier", "supplier_name", "text"),
        ("Tray Type", "tray_type", "choice"),
        ("Trays", "trays", "number"),
        ("Quantity", "quantity", "number"),
        ("Delivery Date", "delivery_date", "date"),
    ),
    detail=(
        ("Supplier Name", "supplier_name", "text"),
        ("Tray Type", "tray_type", "choice"),
        ("Trays", "trays", "number"),
        ("Quantity (pieces)", "quantity", "number"),
        ("Delivery Date", "delivery_date", "date"),
        ("Added On", "created_at", "date"),
    ),
    date_defaults=("delivery_date",),
    stats_labels={
        "total_quantity": "Total Eggs",
        "category_counts.full": "Full Trays",
        "category_counts.partial": "Partial Trays",
        "current_period_quantity": "This Month",
    },
)

SALES = DomainSpec(
    domain=Domain.SALES,
    title="Sales",
    noun="Sale",
    fields=(
        FieldSpec("customer_name", "Customer"),
        FieldSpec("full_trays", "Full Trays", kind=FieldKind.INTEGER, positive=False),
        FieldSpec("pieces", "Pieces", kind=FieldKind.INTEGER, positive=False),
        FieldSpec("price_per_tray", "Price per Tray", kind=FieldKind.DECIMAL),
        FieldSpec("price_per_piece", "Price per Piece", kind=FieldKind.DECIMAL),
        FieldSpec("sale_date", "Sale Date", kind=FieldKind.DATE),
        FieldSpec("delivery_date", "Delivery Date", kind=FieldKind.DATE, required=False),
        FieldSpec("notes", "Notes", required=False),
    ),
    aggregate=AggregateSpec(
        quantity_field="eggs",
        date_field="sale_date",
        amount_field="total_amount",
    ),
    columns=(
        ("Customer", "customer_name", "text"),
        ("Full Trays", "full_trays", "number"),
        ("Pieces", "pieces", "number"),
        ("Total", "total_amount", "money"),
        ("Sale Date", "sale_date", "date"),
    ),
    detail=(
        ("Customer", "customer_name", "text"),
        ("Full Trays", "full_trays", "number"),
        ("Pieces", "pieces", "number"),
        ("Price per Tray", "price_per_tray", "money"),
        ("Price per Piece", "price_per_piece", "money"),
        ("Total Amount", "total_amount", "money"),
        ("Sale Date", "sale_date", "date"),
        ("Delivery Date", "delivery_date", "date"),
        ("Notes", "notes", "text"),
    ),
    search_fields=("customer_name",),
    date_defaults=("sale_date",),
    extra_check=_check_sale,
    summary=(
        ("Customer", "customer_name", "text"),
        ("Full Trays", "full_trays", "number"),
        ("Pieces", "pieces", "number"),
        ("Total Amount", "total_amount", "money"),
        ("Sale Date", "sale_date", "date"),
    ),
    stats_labels={
        "record_count": "Total Sales",
        "total_amount": "Revenue",
        "current_period_amount": "Revenue This Month",
        "current_period_quantity": "Eggs Sold This Month",
    },
)

DOMAIN_SPECS: Dict[Domain, DomainSpec] = {
    Domain.CUSTOMERS: CUSTOMERS,
    Domain.INVENTORY: INVENTORY,
    Domain.SALES: SALES,
}


def get_domain_spec(domain) -> DomainSpec:
    return DOMAIN_SPECS[Domain(domain)]


def all_domain_specs() -> List[DomainSpec]:
    return list(DOMAIN_SPECS.values())
