"""
Event router tests - modal state machine, create/delete flows and outcome messages.
"""

import pytest
from datetime import date

from src.core.admin import AdminConsole
from src.core.domains import CUSTOMERS, INVENTORY, SALES
from src.core.router import (
    Action,
    EventKind,
    EventRouter,
    ModalKind,
    Severity,
    UiEvent,
    resolve_action,
)

TODAY = date(2026, 10, 19)


def inventory_form(supplier: str = "Kienyeji Farm", quantity: str = "30", tray_type: str = "full"):
    return {
        "supplier_name": supplier,
        "tray_type": tray_type,
        "trays": "1",
        "quantity": quantity,
        "delivery_date": "2026-10-19",
    }


def create(router, form):
    """Open the create form and submit it, as the UI does."""
    router.dispatch(UiEvent.click(Action.OPEN_CREATE))
    return router.dispatch(UiEvent.submit(form))


@pytest.fixture
def inventory():
    return EventRouter(INVENTORY, today=lambda: TODAY)


@pytest.fixture
def stocked(inventory):
    """Inventory router holding four records named s0..s3."""
    for i in range(4):
        create(inventory, inventory_form(supplier=f"s{i}"))
    return inventory


class TestActionResolution:
    """Test marker lookup and closed enumerations."""

    def test_nearest_marker_wins(self):
        assert resolve_action([None, "view-record", "request-delete"]) is Action.VIEW

    def test_no_marker_resolves_to_none(self):
        assert resolve_action([None, "", None]) is None

    def test_unknown_marker_rejected(self):
        with pytest.raises(ValueError):
            resolve_action(["edit-record"])

    def test_event_enums_checked_at_construction(self):
        event = UiEvent("click", action="confirm-delete", modal="delete")
        assert event.kind is EventKind.CLICK
        assert event.action is Action.CONFIRM_DELETE
        assert event.modal is ModalKind.DELETE

        with pytest.raises(ValueError):
            UiEvent("hover")
        with pytest.raises(ValueError):
            UiEvent.click("launch-rocket")

    def test_from_markers(self):
        event = UiEvent.from_markers(EventKind.CLICK, [None, "open-create-modal"])
        assert event.action is Action.OPEN_CREATE


class TestCreateModal:
    """Test the structural create modal."""

    def test_open_then_cancel_leaves_store_unchanged(self, inventory):
        assert inventory.dispatch(UiEvent.click(Action.OPEN_CREATE)) is None
        assert inventory.is_open(ModalKind.CREATE)

        assert inventory.dispatch(UiEvent.click(Action.CANCEL)) is None

        assert not inventory.is_open(ModalKind.CREATE)
        assert len(inventory.store) == 0

    def test_open_prefills_dates_and_resets_form(self, inventory):
        inventory.dispatch(UiEvent.click(Action.OPEN_CREATE))
        inventory.dispatch(UiEvent.submit(inventory_form(supplier="")))
        assert inventory.draft["supplier_name"] == ""

        inventory.dispatch(UiEvent.click(Action.CLOSE_MODAL))
        inventory.dispatch(UiEvent.click(Action.OPEN_CREATE))

        assert inventory.draft["delivery_date"] == "2026-10-19"
        assert inventory.draft["tray_type"] == "full"
        assert inventory.draft["supplier_name"] == ""

    def test_backdrop_click_closes(self, inventory):
        inventory.dispatch(UiEvent.click(Action.OPEN_CREATE))
        inventory.dispatch(UiEvent.backdrop_click(ModalKind.CREATE))

        assert inventory.open_modals() == []

    def test_successful_submit_closes_modal_with_one_message(self, inventory):
        inventory.dispatch(UiEvent.click(Action.OPEN_CREATE))

        outcome = inventory.dispatch(UiEvent.submit(inventory_form()))

        assert outcome.severity is Severity.SUCCESS
        assert outcome.message == "Inventory added successfully!"
        assert not inventory.is_open(ModalKind.CREATE)
        assert len(inventory.store) == 1
        assert inventory.draft == {}

    def test_invalid_submit_keeps_modal_open(self, inventory):
        inventory.dispatch(UiEvent.click(Action.OPEN_CREATE))

        outcome = inventory.dispatch(UiEvent.submit(inventory_form(quantity="0")))

        assert outcome.severity is Severity.ERROR
        assert outcome.message == "Please fill in all required fields (Quantity (pieces))"
        assert inventory.is_open(ModalKind.CREATE)
        assert len(inventory.store) == 0

    def test_submit_action_click_behaves_like_submit(self, inventory):
        inventory.dispatch(UiEvent.click(Action.OPEN_CREATE))

        outcome = inventory.dispatch(UiEvent.click(Action.SUBMIT_CREATE, form=inventory_form()))

        assert outcome.severity is Severity.SUCCESS
        assert len(inventory.store) == 1

    def test_submit_while_closed_is_ignored(self, inventory):
        assert inventory.dispatch(UiEvent.submit(inventory_form())) is None
        assert len(inventory.store) == 0
        assert inventory.draft == {}

    def test_submit_after_cancel_is_ignored(self, inventory):
        inventory.dispatch(UiEvent.click(Action.OPEN_CREATE))
        inventory.dispatch(UiEvent.click(Action.CANCEL))

        assert inventory.dispatch(UiEvent.submit(inventory_form())) is None
        assert len(inventory.store) == 0

    def test_listeners_notified_only_on_mutation(self, inventory):
        calls = []
        inventory.subscribe(lambda router: calls.append(len(router.store)))

        inventory.dispatch(UiEvent.click(Action.OPEN_CREATE))
        inventory.dispatch(UiEvent.submit(inventory_form(quantity="x")))
        inventory.dispatch(UiEvent.submit(inventory_form()))

        assert calls == [1]


class TestTransientModals:
    """Test view and delete-confirmation modals."""

    def test_view_captures_record_snapshot(self, stocked):
        stocked.dispatch(UiEvent.click(Action.VIEW, index=1))

        modal = stocked.transient(ModalKind.VIEW)
        assert modal.record.supplier_name == "s1"
        assert ("Supplier Name", "s1") in modal.detail
        assert ("Delivery Date", "19/10/2026") in modal.detail

    def test_opening_again_replaces_existing_instance(self, stocked):
        stocked.dispatch(UiEvent.click(Action.VIEW, index=0))
        first = stocked.transient(ModalKind.VIEW)
        stocked.dispatch(UiEvent.click(Action.VIEW, index=2))

        second = stocked.transient(ModalKind.VIEW)
        assert second is not first
        assert second.record.supplier_name == "s2"

    def test_close_modal_targets_containing_modal(self, stocked):
        stocked.dispatch(UiEvent.click(Action.OPEN_CREATE))
        stocked.dispatch(UiEvent.click(Action.VIEW, index=0))

        stocked.dispatch(UiEvent.click(Action.CLOSE_MODAL, modal=ModalKind.VIEW))

        assert stocked.open_modals() == [ModalKind.CREATE]

    def test_closed_transient_does_not_leak_into_next_open(self, stocked):
        stocked.dispatch(UiEvent.click(Action.REQUEST_DELETE, index=0))
        stocked.dispatch(UiEvent.backdrop_click(ModalKind.DELETE))
        assert stocked.transient(ModalKind.DELETE) is None

        stocked.dispatch(UiEvent.click(Action.REQUEST_DELETE, index=3))
        assert stocked.transient(ModalKind.DELETE).record.supplier_name == "s3"

    @pytest.mark.parametrize("index", [None, -1, 4, 99])
    def test_stale_index_is_ignored(self, stocked, index):
        assert stocked.dispatch(UiEvent.click(Action.VIEW, index=index)) is None
        assert stocked.dispatch(UiEvent.click(Action.REQUEST_DELETE, index=index)) is None
        assert stocked.open_modals() == []


class TestDeleteFlow:
    """Test confirmed deletion."""

    def test_confirm_delete_removes_record(self, stocked):
        stocked.dispatch(UiEvent.click(Action.REQUEST_DELETE, index=1))

        outcome = stocked.dispatch(UiEvent.click(Action.CONFIRM_DELETE, modal=ModalKind.DELETE))

        assert outcome.message == "Inventory deleted successfully!"
        assert [r.supplier_name for r in stocked.store.all()] == ["s0", "s2", "s3"]
        assert not stocked.is_open(ModalKind.DELETE)

    def test_confirm_without_pending_request_is_ignored(self, stocked):
        assert stocked.dispatch(UiEvent.click(Action.CONFIRM_DELETE)) is None
        assert len(stocked.store) == 4

    def test_confirm_deletes_originally_requested_record_after_add(self, stocked):
        stocked.dispatch(UiEvent.click(Action.REQUEST_DELETE, index=2))
        create(stocked, inventory_form(supplier="late arrival"))

        stocked.dispatch(UiEvent.click(Action.CONFIRM_DELETE, modal=ModalKind.DELETE))

        assert [r.supplier_name for r in stocked.store.all()] == ["s0", "s1", "s3", "late arrival"]

    def test_confirm_deletes_originally_requested_record_after_shift(self, stocked):
        stocked.dispatch(UiEvent.click(Action.REQUEST_DELETE, index=2))
        stocked.store.remove_at(0)

        stocked.dispatch(UiEvent.click(Action.CONFIRM_DELETE, modal=ModalKind.DELETE))

        assert [r.supplier_name for r in stocked.store.all()] == ["s1", "s3"]

    def test_confirm_for_vanished_record_is_silent_noop(self, stocked):
        stocked.dispatch(UiEvent.click(Action.REQUEST_DELETE, index=0))
        stocked.store.remove_at(0)

        outcome = stocked.dispatch(UiEvent.click(Action.CONFIRM_DELETE, modal=ModalKind.DELETE))

        assert outcome is None
        assert len(stocked.store) == 3
        assert not stocked.is_open(ModalKind.DELETE)


class TestDomainFlows:
    """Test customer and sales specifics."""

    def test_customer_created_message_lists_name_and_phone(self):
        router = EventRouter(CUSTOMERS)

        outcome = create(router, {"name": "Amina", "phone": "0712 345 678"})

        assert outcome.message == "Customer added successfully!\n\nName: Amina\nPhone: 0712 345 678"

    def test_customer_call_yields_tel_link(self):
        router = EventRouter(CUSTOMERS)
        create(router, {"name": "Amina", "phone": "0712 345 678"})

        outcome = router.dispatch(UiEvent.click(Action.CALL, index=0))

        assert outcome.severity is Severity.INFO
        assert outcome.message.endswith("tel:0712345678")

    def test_call_ignored_for_domains_without_phone(self, stocked):
        assert stocked.dispatch(UiEvent.click(Action.CALL, index=0)) is None

    def test_customer_search(self):
        router = EventRouter(CUSTOMERS)
        create(router, {"name": "Amina Wanjiru", "phone": "0712000111"})
        create(router, {"name": "Brian Otieno", "phone": "0733000222"})

        assert [c.name for c in router.records("wANJ")] == ["Amina Wanjiru"]
        assert [c.name for c in router.records("0733")] == ["Brian Otieno"]
        assert len(router.rows("")) == 2

    def test_sale_total_in_created_message(self):
        router = EventRouter(SALES, today=lambda: TODAY)
        router.dispatch(UiEvent.click(Action.OPEN_CREATE))
        form = dict(router.draft)
        form.update({
            "customer_name": "Hotel Baraka",
            "full_trays": "2",
            "pieces": "5",
            "price_per_tray": "450",
            "price_per_piece": "16",
        })

        outcome = router.dispatch(UiEvent.submit(form))

        assert outcome.severity is Severity.SUCCESS
        assert "Total Amount: KSh 980.00" in outcome.message
        assert "Sale Date: 19/10/2026" in outcome.message
        assert router.store.get(0).eggs == 65

    def test_sale_without_items_rejected(self):
        router = EventRouter(SALES)

        outcome = create(router, {
            "customer_name": "Hotel Baraka",
            "full_trays": "0",
            "pieces": "0",
            "price_per_tray": "450",
            "price_per_piece": "16",
            "sale_date": "2026-10-19",
        })

        assert outcome.severity is Severity.ERROR
        assert "Full Trays or Pieces" in outcome.message
        assert len(router.store) == 0

    @pytest.mark.parametrize("price", ["123456789012345678901234567", "1E+30"])
    def test_sale_total_beyond_precision_rejected(self, price):
        router = EventRouter(SALES)

        outcome = create(router, {
            "customer_name": "Hotel Baraka",
            "full_trays": "2",
            "pieces": "0",
            "price_per_tray": price,
            "price_per_piece": "16",
            "sale_date": "2026-10-19",
        })

        assert outcome.severity is Severity.ERROR
        assert outcome.message == "Sale total is too large (Total Amount)"
        assert router.is_open(ModalKind.CREATE)
        assert len(router.store) == 0
        assert router.stats().record_count == 0


class TestAdminConsole:
    """Test the composed console."""

    def test_domains_have_independent_stores(self):
        console = AdminConsole(today=lambda: TODAY)
        console.dispatch("inventory", UiEvent.click(Action.OPEN_CREATE))
        console.dispatch("inventory", UiEvent.submit(inventory_form()))

        assert console.record_counts() == {"customers": 0, "inventory": 1, "sales": 0}
        assert console.router("customers").store is not console.router("inventory").store

    def test_stats_scenario(self):
        console = AdminConsole()
        router = console.router("inventory")
        today = date.today().isoformat()
        create(router, dict(inventory_form(quantity="30"), delivery_date=today))
        create(router, dict(inventory_form(quantity="12", tray_type="partial"), delivery_date="2001-01-01"))

        stats = router.stats()

        assert stats.total_quantity == 42
        assert stats.category_counts == {"full": 1, "partial": 1}
        assert stats.current_period_quantity == 30
