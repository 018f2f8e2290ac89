"""Dependency container wiring for the application."""

import logging
from collections import deque
from dataclasses import dataclass

from smoothie_builder.adapters.json_catalog_loader import load_catalog
from smoothie_builder.adapters.json_file_store import JsonFileKeyValueStore
from smoothie_builder.config import Settings
from smoothie_builder.domain.catalog import Catalog
from smoothie_builder.domain.errors import UnknownReference
from smoothie_builder.services.aggregator import NutritionAggregator
from smoothie_builder.services.comparison import ComparisonController
from smoothie_builder.services.persistence import SelectionPersistenceService
from smoothie_builder.services.selection_store import SelectionStore
from smoothie_builder.services.storage import KeyValueStore

_UNKNOWN_REFERENCE_HISTORY = 100

_logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    catalog: Catalog
    aggregator: NutritionAggregator
    selection_store: SelectionStore
    comparison: ComparisonController
    persistence: SelectionPersistenceService
    unknown_references: deque[UnknownReference]


def build_container(
    settings: Settings | None = None, store: KeyValueStore | None = None
) -> AppContainer:
    """Create the default dependency container and restore the saved selection."""
    resolved_settings = settings or Settings()
    catalog = load_catalog(resolved_settings.catalog_path)
    unknown_references: deque[UnknownReference] = deque(
        maxlen=_UNKNOWN_REFERENCE_HISTORY
    )
    aggregator = NutritionAggregator(
        catalog=catalog,
        protein_multiplier_mode=resolved_settings.protein_multiplier_mode,
        on_unknown_reference=unknown_references.append,
    )
    persistence = SelectionPersistenceService(
        store or JsonFileKeyValueStore(resolved_settings.state_path)
    )
    selection_store = SelectionStore(aggregator)
    selection_store.replace(persistence.load())
    if not selection_store.selection.is_empty:
        _logger.info("Restored persisted selection")
    comparison = ComparisonController(selection_store)
    return AppContainer(
        settings=resolved_settings,
        catalog=catalog,
        aggregator=aggregator,
        selection_store=selection_store,
        comparison=comparison,
        persistence=persistence,
        unknown_references=unknown_references,
    )
