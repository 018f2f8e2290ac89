"""Shared test fixtures."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from smoothie_builder.adapters.json_catalog_loader import load_catalog
from smoothie_builder.config import Settings
from smoothie_builder.containers import AppContainer, build_container
from smoothie_builder.domain.catalog import (
    AddOn,
    Catalog,
    ExtraIngredient,
    FruitPack,
    Ingredient,
    PackItem,
)
from smoothie_builder.domain.errors import UnknownReference
from smoothie_builder.services.aggregator import NutritionAggregator
from smoothie_builder.services.selection_store import SelectionStore
from smoothie_builder.services.storage import InMemoryKeyValueStore


@dataclass
class RecordingHook:
    """Collects unknown references reported by the aggregator."""

    references: list[UnknownReference] = field(default_factory=list)

    def __call__(self, reference: UnknownReference) -> None:
        self.references.append(reference)


def make_catalog(  # noqa: PLR0913
    *,
    fruits: tuple[Ingredient, ...] | None = None,
    bases: tuple[Ingredient, ...] | None = None,
    proteins: tuple[Ingredient, ...] | None = None,
    add_ons: tuple[AddOn, ...] | None = None,
    packs: tuple[FruitPack, ...] | None = None,
) -> Catalog:
    """Build a small catalog, overriding any category."""
    return Catalog(
        fruits=fruits
        if fruits is not None
        else (Ingredient("apple", "Apple", 0.3, 14.0, 0.2, 52, "#f00"),),
        bases=bases
        if bases is not None
        else (Ingredient("water", "Water", 0.0, 0.0, 0.0, 0, "#fff"),),
        proteins=proteins
        if proteins is not None
        else (Ingredient("whey", "Whey", 25.0, 2.0, 1.0, 120, "#eee"),),
        add_ons=add_ons
        if add_ons is not None
        else (AddOn("seeds", "Seeds", "4 g", 0.5, 1.0, 1.5, 20, "#222"),),
        packs=packs
        if packs is not None
        else (
            FruitPack(
                id="apple-pack",
                name="Apple Pack",
                description="Apple",
                items=(PackItem("apple", 200),),
                extras=(ExtraIngredient("Honey", 1, 0.0, 1.0, 0.0, 4),),
            ),
        ),
    )


@pytest.fixture(scope="session")
def catalog() -> Catalog:
    return load_catalog()


@pytest.fixture
def hook() -> RecordingHook:
    return RecordingHook()


@pytest.fixture
def aggregator(catalog: Catalog, hook: RecordingHook) -> NutritionAggregator:
    return NutritionAggregator(catalog=catalog, on_unknown_reference=hook)


@pytest.fixture
def store(aggregator: NutritionAggregator) -> SelectionStore:
    return SelectionStore(aggregator)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(state_path=tmp_path / "state.json")


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def container(settings: Settings, kv_store: InMemoryKeyValueStore) -> AppContainer:
    return build_container(settings, store=kv_store)


@pytest.fixture
def app_logs(
    caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
) -> pytest.LogCaptureFixture:
    """Capture application WARNING records even after configure_logging ran."""
    monkeypatch.setattr(logging.getLogger("smoothie_builder"), "propagate", True)
    caplog.set_level(logging.WARNING, logger="smoothie_builder")
    return caplog
