"""Tests for the comparison workflow."""

import pytest

from smoothie_builder.domain.selection import Selection
from smoothie_builder.services.comparison import ComparisonController, ComparisonState
from smoothie_builder.services.selection_store import SelectionStore


@pytest.fixture
def controller(store: SelectionStore) -> ComparisonController:
    return ComparisonController(store)


def test_starts_in_single_state(controller: ComparisonController) -> None:
    assert controller.state is ComparisonState.SINGLE
    assert controller.snapshot is None
    assert controller.difference() is None


def test_lock_captures_and_clears_live_selection(
    controller: ComparisonController, store: SelectionStore
) -> None:
    store.set_base("almond-milk")
    store.set_protein("platinum-isolate")

    snapshot = controller.lock_and_compare()

    assert controller.state is ComparisonState.COMPARING
    assert snapshot.selection == Selection(
        base_id="almond-milk", protein_id="platinum-isolate"
    )
    assert snapshot.totals.kcal == pytest.approx(137.2)
    assert store.selection == Selection()


def test_difference_tracks_live_selection(
    controller: ComparisonController, store: SelectionStore
) -> None:
    store.set_base("almond-milk")
    store.set_protein("platinum-isolate")
    controller.lock_and_compare()

    assert controller.difference() == 137

    store.toggle_pack("gorilla")
    assert controller.difference() == 106


def test_snapshot_is_not_affected_by_live_edits(
    controller: ComparisonController, store: SelectionStore
) -> None:
    store.toggle_pack("king-kong")
    snapshot = controller.lock_and_compare()
    frozen_totals = snapshot.totals

    store.toggle_pack("king-kong")
    store.toggle_add_on("pb-60")
    store.set_base("fresh-milk")

    assert controller.snapshot is snapshot
    assert controller.snapshot.totals == frozen_totals
    assert controller.snapshot.selection == Selection(fruit_pack_id="king-kong")


def test_clear_compare_keeps_live_selection(
    controller: ComparisonController, store: SelectionStore
) -> None:
    store.set_base("coconut-water")
    controller.lock_and_compare()
    store.toggle_pack("bpm")

    selection = controller.clear_compare()

    assert controller.state is ComparisonState.SINGLE
    assert controller.snapshot is None
    assert selection == Selection(fruit_pack_id="bpm")


def test_locking_again_replaces_snapshot(
    controller: ComparisonController, store: SelectionStore
) -> None:
    store.set_base("coconut-water")
    controller.lock_and_compare()
    store.set_base("oat-milk")

    snapshot = controller.lock_and_compare()

    assert snapshot.selection == Selection(base_id="oat-milk")
    assert controller.state is ComparisonState.COMPARING
