"""
Egg supply admin console - terminal front end for customers, inventory and sales.
"""

import sys
from typing import Dict, List, Optional

from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Header, Footer, Static, Button, Input, DataTable, TabbedContent, TabPane

from src.core import config
from src.core.admin import AdminConsole
from src.core.errors import NotFound
from src.core.render import column_labels, render_rows, render_stats
from src.core.router import Action, EventRouter, ModalKind, Outcome, Severity, UiEvent
from src.core.schema import Domain
from util.logging import logger
from .screens import AdminModal, CreateRecordScreen, DeleteConfirmScreen, ViewRecordScreen

NOTIFY_SEVERITY = {
    Severity.SUCCESS: "information",
    Severity.INFO: "information",
    Severity.ERROR: "error",
}


class DomainPane(Vertical):
    """Stats, table and actions for one domain."""

    BINDINGS = [
        ("a", "add", "Add"),
        ("v", "view", "View"),
        ("d", "delete", "Delete"),
    ]

    def __init__(self, router: EventRouter):
        super().__init__(id=f"pane-{router.domain}")
        self.router = router
        self.spec = router.spec
        self.query_text = ""
        self._row_ids: List[str] = []
        self._modal_screens: Dict[ModalKind, AdminModal] = {}
        router.subscribe(lambda _router: self.refresh_view())

    def compose(self) -> ComposeResult:
        domain = self.router.domain
        yield Static("", id=f"stats-{domain}", classes="stats")
        if self.spec.search_fields:
            yield Input(placeholder=f"Search {self.spec.title.lower()}...", id=f"search-{domain}", classes="search")
        yield DataTable(id=f"table-{domain}", cursor_type="row", zebra_stripes=True)
        yield Horizontal(
            Button(f"➕ Add {self.spec.noun}", id="add", variant="primary"),
            Button("👁 View", id="view"),
            Button("🗑 Delete", id="delete", variant="error"),
            classes="actions",
        )

    def on_mount(self) -> None:
        self.query_one(DataTable).add_columns(*column_labels(self.spec))
        self.refresh_view()

    def refresh_view(self) -> None:
        """Re-render rows and stats from the current store contents."""
        if not self.is_mounted:
            return
        records = self.router.records(self.query_text)
        table = self.query_one(DataTable)
        table.clear()
        self._row_ids = [record.id for record in records]
        for record, row in zip(records, render_rows(self.spec, records)):
            table.add_row(*row, key=record.id)

        stats = render_stats(self.spec, self.router.stats())
        self.query_one(".stats", Static).update("   ".join(f"{label}: {value}" for label, value in stats))

    def selected_index(self) -> Optional[int]:
        """Store position of the highlighted row, or None when the table is empty."""
        table = self.query_one(DataTable)
        if not self._row_ids or table.cursor_row is None or table.cursor_row >= len(self._row_ids):
            return None
        try:
            return self.router.store.index_of(self._row_ids[table.cursor_row])
        except NotFound:
            return None

    def route(self, event: UiEvent) -> Optional[Outcome]:
        """Route one event, then bring the screen stack in line with the modal state."""
        outcome = self.router.dispatch(event)
        self.sync_modals()
        if outcome is not None:
            self.app.notify(
                outcome.message,
                title=self.spec.title,
                severity=NOTIFY_SEVERITY[outcome.severity],
            )
        return outcome

    def sync_modals(self) -> None:
        # Close first so a replacement never stacks on top of a stale screen
        for kind in reversed(list(ModalKind)):
            screen = self._modal_screens.get(kind)
            if screen is None:
                continue
            modal = self.router.transient(kind)
            stale = kind != ModalKind.CREATE and modal is not None and screen.transient_modal is not modal
            if not self.router.is_open(kind) or stale:
                del self._modal_screens[kind]
                if self.app.screen is screen:
                    self.app.pop_screen()
                else:
                    logger.warning(f"{self.router.domain} {kind.value} modal was not on top of the screen stack")

        for kind in ModalKind:
            if self.router.is_open(kind) and kind not in self._modal_screens:
                screen = self._build_screen(kind)
                self._modal_screens[kind] = screen
                self.app.push_screen(screen)

    def _build_screen(self, kind: ModalKind) -> AdminModal:
        if kind == ModalKind.CREATE:
            return CreateRecordScreen(self, self.spec, self.router.draft)
        if kind == ModalKind.VIEW:
            return ViewRecordScreen(self, self.spec, self.router.transient(kind))
        return DeleteConfirmScreen(self, self.spec, self.router.transient(kind))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id

        if button_id == "add":
            self.action_add()
        elif button_id == "view":
            self.action_view()
        elif button_id == "delete":
            self.action_delete()

    def on_input_changed(self, event: Input.Changed) -> None:
        self.query_text = event.value
        self.refresh_view()

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        self.action_view()

    def action_add(self) -> None:
        self.route(UiEvent.click(Action.OPEN_CREATE))

    def action_view(self) -> None:
        self.route(UiEvent.click(Action.VIEW, index=self.selected_index()))

    def action_delete(self) -> None:
        self.route(UiEvent.click(Action.REQUEST_DELETE, index=self.selected_index()))


class CallablePane(DomainPane):
    """Domain pane whose records carry a phone number that can be called."""

    BINDINGS = [("c", "call", "Call")]

    def action_call(self) -> None:
        self.route(UiEvent.click(Action.CALL, index=self.selected_index()))


class AdminApp(App):
    """Egg Supply Admin TUI Application."""

    CSS = """
    .stats {
        background: darkblue;
        border: solid cyan;
        padding: 0 1;
        margin-bottom: 1;
    }

    .search {
        margin-bottom: 1;
    }

    .actions, .form-actions {
        height: auto;
        margin-top: 1;
    }

    AdminModal {
        align: center middle;
    }

    .dialog {
        width: 64;
        height: auto;
        max-height: 90%;
        border: solid white;
        background: $surface;
        padding: 1 2;
    }

    .modal-header {
        height: auto;
        margin-bottom: 1;
    }

    .modal-title {
        text-style: bold;
        width: 1fr;
        color: cyan;
    }

    .label {
        margin-top: 1;
    }

    .form-display {
        color: gray;
    }

    .delete-item-info {
        margin-top: 1;
        padding: 1;
        border: solid red;
    }
    """

    TITLE = "Egg Supply Admin"

    BINDINGS = [("q", "quit", "Quit")]

    def __init__(self, admin: AdminConsole = None):
        super().__init__()
        self.admin = admin if admin is not None else AdminConsole()
        self.panes: Dict[Domain, DomainPane] = {
            domain: (CallablePane if router.spec.callable_field else DomainPane)(router)
            for domain, router in self.admin.routers.items()
        }

    def compose(self) -> ComposeResult:
        yield Header()
        with TabbedContent():
            for domain, pane in self.panes.items():
                with TabPane(pane.spec.title, id=f"tab-{domain.value}"):
                    yield pane
        yield Footer()

    def on_mount(self) -> None:
        """Initialize console on startup."""
        logger.info("Egg supply admin console started")


def main():
    """Admin console entry point."""
    try:
        issues = config.validate_admin_config()
        if issues:
            for issue in issues:
                print(f"❌ Configuration error: {issue}")
            sys.exit(1)

        print("🚀 Starting Egg Supply Admin...")
        AdminApp().run()

    except KeyboardInterrupt:
        print("\nℹ️  Admin console interrupted by user")
        logger.info("Admin console exited via keyboard interrupt")


if __name__ == "__main__":
    main()
