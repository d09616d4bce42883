"""
Event routing for one admin domain - maps typed UI events to store and modal operations.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from util.logging import logger

from .aggregator import Stats, summarize
from .domains import DomainSpec
from .errors import NotFound, ValidationFailure
from .render import filter_records, fmt_value, render_detail, render_rows, tel_link
from .schema import Record, new_record
from .store import RecordStore
from .validator import validate_form


class EventKind(str, Enum):
    CLICK = "click"
    SUBMIT = "submit"


class Action(str, Enum):
    OPEN_CREATE = "open-create-modal"
    CLOSE_MODAL = "close-modal"
    CANCEL = "cancel"
    VIEW = "view-record"
    REQUEST_DELETE = "request-delete"
    CONFIRM_DELETE = "confirm-delete"
    SUBMIT_CREATE = "submit-create-form"
    CALL = "call-record"


class ModalKind(str, Enum):
    CREATE = "create"  # structural: toggled, never destroyed
    VIEW = "view"      # transient
    DELETE = "delete"  # transient


class Severity(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


def resolve_action(markers: Iterable[Optional[str]]) -> Optional[Action]:
    """
    Find the action for an interaction.

    Args:
        markers: Action markers from the interacted element up through its
            ancestors; elements without a marker contribute None

    Returns:
        The nearest marker as an Action, or None if no element carries one.
        An unrecognized marker raises ValueError.
    """
    for marker in markers:
        if marker:
            return Action(marker)
    return None


@dataclass(frozen=True)
class UiEvent:
    kind: EventKind
    action: Optional[Action] = None
    modal: Optional[ModalKind] = None
    backdrop: bool = False
    index: Optional[int] = None
    form: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        # Closed enumerations are checked when the event is built
        object.__setattr__(self, "kind", EventKind(self.kind))
        if self.action is not None:
            object.__setattr__(self, "action", Action(self.action))
        if self.modal is not None:
            object.__setattr__(self, "modal", ModalKind(self.modal))

    @classmethod
    def click(cls, action, index: int = None, modal=None, form: Mapping[str, Any] = None) -> "UiEvent":
        return cls(EventKind.CLICK, action=action, index=index, modal=modal, form=dict(form or {}))

    @classmethod
    def submit(cls, form: Mapping[str, Any]) -> "UiEvent":
        return cls(EventKind.SUBMIT, action=Action.SUBMIT_CREATE, modal=ModalKind.CREATE, form=dict(form))

    @classmethod
    def backdrop_click(cls, modal) -> "UiEvent":
        return cls(EventKind.CLICK, modal=modal, backdrop=True)

    @classmethod
    def from_markers(cls, kind, markers: Iterable[Optional[str]], **kwargs) -> "UiEvent":
        return cls(kind, action=resolve_action(markers), **kwargs)


@dataclass(frozen=True)
class Outcome:
    """The single user-visible message an action produced."""
    message: str
    severity: Severity = Severity.SUCCESS


@dataclass(frozen=True)
class TransientModal:
    """A view or delete dialog built for one record and discarded on close."""
    kind: ModalKind
    record_id: str
    index: int
    record: Record
    detail: Tuple[Tuple[str, str], ...]


class EventRouter:
    """Dispatches UI events for one domain and tracks its modal state.

    The router owns the domain's RecordStore. After every store mutation it
    calls the subscribed listeners so views can re-render rows and stats.
    """

    def __init__(self, spec: DomainSpec, store: RecordStore = None, today: Callable[[], date] = None):
        self.spec = spec
        self.store = store if store is not None else RecordStore()
        self._today = today or date.today
        self.create_open = False
        self.draft: Dict[str, Any] = {}
        self._transient: Dict[ModalKind, TransientModal] = {}
        self._listeners: List[Callable[["EventRouter"], None]] = []
        self._handlers = {
            Action.OPEN_CREATE: self._open_create,
            Action.CLOSE_MODAL: self._close,
            Action.CANCEL: self._cancel,
            Action.VIEW: self._view,
            Action.REQUEST_DELETE: self._request_delete,
            Action.CONFIRM_DELETE: self._confirm_delete,
            Action.SUBMIT_CREATE: self._submit,
            Action.CALL: self._call,
        }

    @property
    def domain(self) -> str:
        return self.spec.domain.value

    def subscribe(self, listener: Callable[["EventRouter"], None]) -> None:
        self._listeners.append(listener)

    def dispatch(self, event: UiEvent) -> Optional[Outcome]:
        """Handle one event. Returns the outcome message for create/delete actions."""
        if event.backdrop:
            self.close_modal(event.modal or ModalKind.CREATE)
            return None

        action = event.action
        if event.kind == EventKind.SUBMIT:
            action = Action.SUBMIT_CREATE
        if action is None:
            return None

        return self._handlers[action](event)

    # Modal state

    def is_open(self, kind: ModalKind) -> bool:
        if ModalKind(kind) == ModalKind.CREATE:
            return self.create_open
        return ModalKind(kind) in self._transient

    def transient(self, kind: ModalKind) -> Optional[TransientModal]:
        return self._transient.get(ModalKind(kind))

    def open_modals(self) -> List[ModalKind]:
        return [kind for kind in ModalKind if self.is_open(kind)]

    def close_modal(self, kind: ModalKind) -> None:
        kind = ModalKind(kind)
        if kind == ModalKind.CREATE:
            if self.create_open:
                self.create_open = False
                logger.log_modal_transition(self.domain, kind.value, "closed")
            return

        modal = self._transient.pop(kind, None)
        if modal is not None:
            logger.log_modal_transition(self.domain, kind.value, "closed", modal.record_id)

    # Views

    def records(self, query: str = None) -> List[Record]:
        return filter_records(self.spec, self.store.all(), query)

    def rows(self, query: str = None) -> List[Tuple[str, ...]]:
        return render_rows(self.spec, self.records(query))

    def stats(self, now: datetime = None) -> Stats:
        return summarize(self.store.all(), self.spec.aggregate, now)

    # Handlers

    def _open_create(self, event: UiEvent) -> None:
        self.draft = self.spec.form_defaults(self._today())
        if not self.create_open:
            self.create_open = True
            logger.log_modal_transition(self.domain, ModalKind.CREATE.value, "opened")
        return None

    def _close(self, event: UiEvent) -> None:
        self.close_modal(event.modal or ModalKind.CREATE)
        return None

    def _cancel(self, event: UiEvent) -> None:
        self.close_modal(event.modal or ModalKind.CREATE)
        return None

    def _lookup(self, event: UiEvent) -> Optional[Record]:
        try:
            return self.store.get(event.index)
        except NotFound:
            logger.log_stale_reference(self.domain, event.action.value, event.index)
            return None

    def _open_transient(self, kind: ModalKind, event: UiEvent) -> None:
        record = self._lookup(event)
        if record is None:
            return None

        # Only one instance of each transient modal may exist
        self._transient.pop(kind, None)
        self._transient[kind] = TransientModal(
            kind=kind,
            record_id=record.id,
            index=event.index,
            record=record,
            detail=tuple(render_detail(self.spec, record)),
        )
        logger.log_modal_transition(self.domain, kind.value, "opened", record.id)
        return None

    def _view(self, event: UiEvent) -> None:
        return self._open_transient(ModalKind.VIEW, event)

    def _request_delete(self, event: UiEvent) -> None:
        return self._open_transient(ModalKind.DELETE, event)

    def _confirm_delete(self, event: UiEvent) -> Optional[Outcome]:
        pending = self._transient.get(ModalKind.DELETE)
        if pending is None:
            return None

        # Address by the id captured when the confirmation opened, not by position
        try:
            removed = self.store.remove(pending.record_id)
        except NotFound:
            logger.log_stale_reference(self.domain, Action.CONFIRM_DELETE.value, pending.record_id)
            self.close_modal(ModalKind.DELETE)
            return None

        logger.log_record_operation(self.domain, "delete", removed.id)
        self._changed()
        self.close_modal(ModalKind.DELETE)
        return Outcome(f"{self.spec.noun} deleted successfully!")

    def _submit(self, event: UiEvent) -> Optional[Outcome]:
        # Records are only created through an open create form
        if not self.create_open:
            logger.log_stale_reference(self.domain, Action.SUBMIT_CREATE.value, ModalKind.CREATE.value)
            return None

        self.draft = dict(event.form)
        try:
            values = self._validate(event.form)
        except ValidationFailure as failure:
            logger.log_validation_failure(self.domain, failure.field, failure.message)
            return Outcome(str(failure), Severity.ERROR)

        record = new_record(self.spec.domain, values)
        payload = record.to_dict()
        self.store.add(record)
        logger.log_record_operation(self.domain, "create", record.id, payload)
        self._changed()
        self.close_modal(ModalKind.CREATE)
        self.draft = {}
        return Outcome(self._created_message(record))

    def _call(self, event: UiEvent) -> Optional[Outcome]:
        if not self.spec.callable_field:
            return None
        record = self._lookup(event)
        if record is None:
            return None
        phone = getattr(record, self.spec.callable_field)
        return Outcome(f"Call {phone}? {tel_link(phone)}", Severity.INFO)

    # Helpers

    def _validate(self, form: Mapping[str, Any]) -> Dict[str, Any]:
        values = validate_form(form, self.spec.fields)
        if self.spec.extra_check is not None:
            self.spec.extra_check(values)
        return values

    def _created_message(self, record: Record) -> str:
        message = f"{self.spec.noun} added successfully!"
        lines = [f"{label}: {fmt_value(getattr(record, attr), kind)}" for label, attr, kind in self.spec.summary]
        if lines:
            message += "\n\n" + "\n".join(lines)
        return message

    def _changed(self) -> None:
        for listener in self._listeners:
            listener(self)
