"""Tests for container wiring."""

from smoothie_builder.config import Settings
from smoothie_builder.containers import build_container
from smoothie_builder.domain.selection import Selection
from smoothie_builder.services.aggregator import ProteinMultiplierMode
from smoothie_builder.services.persistence import SELECTION_KEY
from smoothie_builder.services.storage import InMemoryKeyValueStore


def test_build_container_creates_services(settings: Settings) -> None:
    container = build_container(settings)

    assert container.selection_store.selection == Selection()
    assert container.comparison.store is container.selection_store
    assert container.catalog.pack("gorilla") is not None


def test_build_container_restores_persisted_selection(settings: Settings) -> None:
    store = InMemoryKeyValueStore(
        {SELECTION_KEY: '{"base": "oat-milk", "selectedAddOns": ["chia", "chia"]}'}
    )

    container = build_container(settings, store=store)

    assert container.selection_store.selection == Selection(
        base_id="oat-milk", add_on_ids=("chia",)
    )


def test_build_container_records_unknown_references(settings: Settings) -> None:
    store = InMemoryKeyValueStore({SELECTION_KEY: '{"protein": "retired-scoop"}'})
    container = build_container(settings, store=store)

    totals = container.selection_store.totals()

    assert totals.kcal == 0
    assert [ref.ref_id for ref in container.unknown_references] == ["retired-scoop"]


def test_build_container_applies_protein_policy(tmp_path) -> None:
    settings = Settings(
        state_path=tmp_path / "state.json",
        protein_multiplier_mode=ProteinMultiplierMode.SCALE_PROTEIN,
    )

    container = build_container(settings)

    assert (
        container.aggregator.protein_multiplier_mode
        is ProteinMultiplierMode.SCALE_PROTEIN
    )
