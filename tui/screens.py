"""
Modal screens for the admin console: create form, record details and delete confirmation.
"""

from typing import Dict

from textual import events
from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Select, Static

from src.core.domains import DomainSpec
from src.core.router import Action, ModalKind, TransientModal, UiEvent
from src.core.validator import FieldKind


class AdminModal(ModalScreen):
    """Base for modals owned by a DomainPane.

    The screen never changes state itself; every interaction is turned into a
    UiEvent and handed to the owning pane, which pushes or dismisses screens
    to match the router's modal state.
    """

    kind = ModalKind.CREATE

    BINDINGS = [("escape", "close_modal", "Close")]

    def __init__(self, pane, spec: DomainSpec):
        super().__init__()
        self.pane = pane
        self.spec = spec

    def action_close_modal(self) -> None:
        self.pane.route(UiEvent.click(Action.CLOSE_MODAL, modal=self.kind))

    def on_click(self, event: events.Click) -> None:
        dialog = self.query_one(".dialog")
        if not dialog.region.contains(event.screen_x, event.screen_y):
            self.pane.route(UiEvent.backdrop_click(self.kind))

    def _dialog_header(self, icon: str, title: str) -> Horizontal:
        return Horizontal(
            Static(f"{icon} {title}", classes="modal-title"),
            Button("✖", id="close", classes="close-btn"),
            classes="modal-header",
        )


class CreateRecordScreen(AdminModal):
    """Structural create form, rebuilt from the router's draft each time it opens."""

    kind = ModalKind.CREATE

    def __init__(self, pane, spec: DomainSpec, draft: Dict[str, str]):
        super().__init__(pane, spec)
        self.draft = dict(draft)

    def compose(self) -> ComposeResult:
        widgets = [self._dialog_header("➕", f"Add {self.spec.noun}")]
        for field in self.spec.fields:
            label = f"{field.label} *" if field.required else field.label
            widgets.append(Label(label, classes="label"))
            value = self.draft.get(field.name) or ""
            if field.kind == FieldKind.CHOICE:
                options = [(member.value.capitalize(), member.value) for member in field.choices]
                widgets.append(Select(options, value=value or options[0][1], allow_blank=False, id=f"field-{field.name}"))
            else:
                widgets.append(Input(value=str(value), placeholder=field.label, id=f"field-{field.name}"))
        widgets.append(Horizontal(
            Button("Cancel", id="cancel"),
            Button(f"Save {self.spec.noun}", id="submit", variant="primary"),
            classes="form-actions",
        ))
        yield Container(*widgets, classes="dialog")

    def form_values(self) -> Dict[str, str]:
        values = {}
        for field in self.spec.fields:
            widget = self.query_one(f"#field-{field.name}")
            value = widget.value
            values[field.name] = value if isinstance(value, str) else ""
        return values

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id

        if button_id == "close":
            self.pane.route(UiEvent.click(Action.CLOSE_MODAL, modal=ModalKind.CREATE))
        elif button_id == "cancel":
            self.pane.route(UiEvent.click(Action.CANCEL, modal=ModalKind.CREATE))
        elif button_id == "submit":
            self.pane.route(UiEvent.submit(self.form_values()))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.pane.route(UiEvent.submit(self.form_values()))


class ViewRecordScreen(AdminModal):
    """Read-only details for one record."""

    kind = ModalKind.VIEW

    def __init__(self, pane, spec: DomainSpec, transient_modal: TransientModal):
        super().__init__(pane, spec)
        self.transient_modal = transient_modal

    def compose(self) -> ComposeResult:
        rows = [self._dialog_header("👁", f"{self.spec.noun} Details")]
        for label, value in self.transient_modal.detail:
            rows.append(Label(label, classes="label"))
            rows.append(Static(value or "-", classes="form-display"))
        yield Container(*rows, classes="dialog")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "close":
            self.action_close_modal()


class DeleteConfirmScreen(AdminModal):
    """Confirmation step before a record is removed."""

    kind = ModalKind.DELETE

    def __init__(self, pane, spec: DomainSpec, transient_modal: TransientModal):
        super().__init__(pane, spec)
        self.transient_modal = transient_modal

    def compose(self) -> ComposeResult:
        summary = "\n".join(f"{label}: {value}" for label, value in self.transient_modal.detail if value)
        yield Container(
            self._dialog_header("🗑", f"Delete {self.spec.noun}"),
            Static(f"Are you sure you want to delete this {self.spec.noun.lower()} record?"),
            Static(summary, classes="delete-item-info"),
            Horizontal(
                Button("Cancel", id="cancel"),
                Button("Delete", id="confirm", variant="error"),
                classes="form-actions",
            ),
            classes="dialog",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id

        if button_id in ("close", "cancel"):
            self.action_close_modal()
        elif button_id == "confirm":
            self.pane.route(UiEvent.click(Action.CONFIRM_DELETE, modal=ModalKind.DELETE))
