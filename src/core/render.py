"""
Display formatting - table rows, detail views and stats labels as plain strings.
"""

from decimal import Decimal
from enum import Enum
from typing import Iterable, List, Sequence, Tuple

from . import config
from .aggregator import Stats, parse_date
from .domains import Column, DomainSpec


def fmt_date(value) -> str:
    """Display a date as dd/mm/yyyy; unparsable values are shown as entered."""
    parsed = parse_date(value)
    if parsed is None:
        return str(value) if value else ""
    return parsed.strftime(config.DATE_DISPLAY_FORMAT)


def fmt_money(value) -> str:
    if value is None:
        return ""
    return f"{config.CURRENCY} {Decimal(value):,.2f}"


def fmt_value(value, kind: str) -> str:
    if value is None:
        return ""
    if kind == "date":
        return fmt_date(value)
    if kind == "money":
        return fmt_money(value)
    if kind == "choice" and isinstance(value, Enum):
        return value.value.capitalize()
    return str(value)


def _cells(record, columns: Sequence[Column]) -> Tuple[str, ...]:
    return tuple(fmt_value(getattr(record, attr), kind) for _, attr, kind in columns)


def column_labels(spec: DomainSpec) -> List[str]:
    return [label for label, _, _ in spec.columns]


def render_rows(spec: DomainSpec, records: Iterable) -> List[Tuple[str, ...]]:
    """One tuple of display cells per record, in store order."""
    return [_cells(record, spec.columns) for record in records]


def render_detail(spec: DomainSpec, record) -> List[Tuple[str, str]]:
    """Label/value pairs for the read-only detail view."""
    return [(label, fmt_value(getattr(record, attr), kind)) for label, attr, kind in spec.detail]


def render_stats(spec: DomainSpec, stats: Stats) -> List[Tuple[str, str]]:
    """Label/value pairs for the stats cards shown above a table."""
    rendered = []
    for key, label in spec.stats_labels.items():
        if key.startswith("category_counts."):
            value = stats.category_counts.get(key.split(".", 1)[1], 0)
        else:
            value = getattr(stats, key)
        if key.endswith("amount"):
            rendered.append((label, fmt_money(value)))
        else:
            rendered.append((label, str(value)))
    return rendered


def filter_records(spec: DomainSpec, records: Iterable, query: str) -> List:
    """Case-insensitive substring search over the domain's searchable fields."""
    needle = (query or "").strip().lower()
    records = list(records)
    if not needle or not spec.search_fields:
        return records

    matches = []
    for record in records:
        haystack = [str(getattr(record, name) or "").lower() for name in spec.search_fields]
        if any(needle in text for text in haystack):
            matches.append(record)
    return matches


def tel_link(phone: str) -> str:
    return "tel:" + "".join(phone.split())

