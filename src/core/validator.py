"""
Create-form validation - turns raw form input into a typed record draft.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Sequence, Type

from .errors import ValidationFailure


class FieldKind(str, Enum):
    STRING = "string"
    INTEGER = "integer"
    DECIMAL = "decimal"
    DATE = "date"
    CHOICE = "choice"


@dataclass(frozen=True)
class FieldSpec:
    name: str
    label: str
    kind: FieldKind = FieldKind.STRING
    required: bool = True
    positive: bool = True  # numeric fields only; False allows zero
    choices: Optional[Type[Enum]] = None


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _parse_number(spec: FieldSpec, value: Any):
    if isinstance(value, bool):
        return None
    text = str(value).strip()
    try:
        if spec.kind == FieldKind.INTEGER:
            number = int(text)
        else:
            number = Decimal(text)
            if not number.is_finite():
                return None
    except (ValueError, InvalidOperation):
        return None

    if number < 0 or (spec.positive and number == 0):
        return None
    return number


def _parse_choice(spec: FieldSpec, value: Any):
    if isinstance(value, spec.choices):
        return value
    try:
        return spec.choices(str(value).strip().lower())
    except ValueError:
        return None


def validate_field(spec: FieldSpec, raw: Any):
    """Parse one field. Returns the typed value, or None when it is blank/invalid."""
    if _is_blank(raw):
        return None

    if spec.kind == FieldKind.STRING:
        return str(raw).strip()
    if spec.kind == FieldKind.DATE:
        return str(raw).strip()
    if spec.kind in (FieldKind.INTEGER, FieldKind.DECIMAL):
        return _parse_number(spec, raw)
    if spec.kind == FieldKind.CHOICE:
        return _parse_choice(spec, raw)
    raise ValueError(f"Unknown field kind: {spec.kind}")


def validate_form(raw: Mapping[str, Any], specs: Sequence[FieldSpec]) -> Dict[str, Any]:
    """
    Validate raw form input against declared fields.

    Fields are checked in declaration order and the first unmet requirement
    raises ValidationFailure. Optional fields that are blank or invalid are
    stored as None.

    Returns:
        Dict of field name to typed value, ready to build a record from
    """
    draft = {}
    for spec in specs:
        value = validate_field(spec, raw.get(spec.name))
        if value is None and spec.required:
            raise ValidationFailure(spec.name, label=spec.label)
        draft[spec.name] = value
    return draft
