"""
Request and response models for the admin JSON API.
"""

from pydantic import BaseModel, field_validator
from typing import Optional, List, Dict, Any

from ..core.router import Action, EventKind, ModalKind, Severity


class EventRequest(BaseModel):
    kind: EventKind = EventKind.CLICK
    action: Optional[Action] = None
    modal: Optional[ModalKind] = None
    backdrop: bool = False
    index: Optional[int] = None
    form: Dict[str, Any] = {}

    @field_validator('form')
    @classmethod
    def form_values_must_be_scalar(cls, v):
        for name, value in v.items():
            if isinstance(value, (dict, list)):
                raise ValueError(f'form field {name} must be a single value')
        return v


class OutcomeResponse(BaseModel):
    message: str
    severity: Severity


class TransientModalResponse(BaseModel):
    kind: ModalKind
    record_id: str
    index: int
    detail: List[List[str]]


class ModalStateResponse(BaseModel):
    create_open: bool
    draft: Dict[str, Any]
    transient: List[TransientModalResponse]


class EventResponse(BaseModel):
    outcome: Optional[OutcomeResponse] = None
    modals: ModalStateResponse


class RecordListResponse(BaseModel):
    items: List[Dict[str, Any]]
    rows: List[List[str]]
    columns: List[str]
    total: int


class StatsResponse(BaseModel):
    record_count: int
    total_quantity: int
    category_counts: Dict[str, int]
    current_period_count: int
    current_period_quantity: int
    total_amount: str
    current_period_amount: str
    display: List[List[str]]


class HealthResponse(BaseModel):
    status: str
    version: str
    record_counts: Dict[str, int]
