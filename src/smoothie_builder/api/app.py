"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict

from fastapi import FastAPI, Request

from smoothie_builder.api.models import ChoiceRequest, SelectionPayload
from smoothie_builder.app_logging import configure_logging
from smoothie_builder.containers import AppContainer
from smoothie_builder.domain.catalog import Catalog
from smoothie_builder.domain.nutrition import NutritionTotals
from smoothie_builder.domain.selection import Selection
from smoothie_builder.services.persistence import to_payload, to_selection
from smoothie_builder.services.summary import (
    ArchiveEntry,
    format_value,
    nutrition_archive,
    summarize,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Smoothie builder ready: environment=%s packs=%s",
            container.settings.environment,
            len(container.catalog.packs),
        )
        yield
        try:
            state_container: AppContainer = app.state.container
            state_container.persistence.save(state_container.selection_store.selection)
        except OSError:
            logger.exception("Failed to persist selection on shutdown")

    app = FastAPI(title="Smoothie Builder", lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/catalog")
    async def catalog(request: Request) -> dict[str, object]:
        """Return every selectable catalog record."""
        state_container: AppContainer = request.app.state.container
        return _serialize_catalog(state_container.catalog)

    @app.get("/archive")
    async def archive(request: Request) -> dict[str, object]:
        """Return reference nutrition for every pack, base, protein and add-on."""
        state_container: AppContainer = request.app.state.container
        tables = nutrition_archive(state_container.catalog)
        return {
            "packs": [_serialize_archive_entry(entry) for entry in tables.packs],
            "bases": [_serialize_archive_entry(entry) for entry in tables.bases],
            "proteins": [_serialize_archive_entry(entry) for entry in tables.proteins],
            "add_ons": [_serialize_archive_entry(entry) for entry in tables.add_ons],
        }

    @app.get("/selection")
    async def get_selection(request: Request) -> dict[str, object]:
        """Return the live selection with totals and display summary."""
        return _selection_view(request.app.state.container)

    @app.put("/selection")
    async def put_selection(
        payload: SelectionPayload, request: Request
    ) -> dict[str, object]:
        """Replace the live selection."""
        state_container: AppContainer = request.app.state.container
        state_container.selection_store.replace(to_selection(payload))
        return _commit(state_container)

    @app.delete("/selection")
    async def reset_selection(request: Request) -> dict[str, object]:
        """Clear every field of the live selection."""
        state_container: AppContainer = request.app.state.container
        state_container.selection_store.reset_all()
        return _commit(state_container)

    @app.post("/selection/base")
    async def set_base(choice: ChoiceRequest, request: Request) -> dict[str, object]:
        """Select, reselect or clear the base."""
        state_container: AppContainer = request.app.state.container
        state_container.selection_store.set_base(choice.id)
        return _commit(state_container)

    @app.post("/selection/protein")
    async def set_protein(choice: ChoiceRequest, request: Request) -> dict[str, object]:
        """Select, reselect or clear the protein."""
        state_container: AppContainer = request.app.state.container
        state_container.selection_store.set_protein(choice.id)
        return _commit(state_container)

    @app.post("/selection/pack/{pack_id}")
    async def toggle_pack(pack_id: str, request: Request) -> dict[str, object]:
        """Toggle a fruit pack."""
        state_container: AppContainer = request.app.state.container
        state_container.selection_store.toggle_pack(pack_id)
        return _commit(state_container)

    @app.post("/selection/add-ons/{add_on_id}")
    async def toggle_add_on(add_on_id: str, request: Request) -> dict[str, object]:
        """Toggle an add-on."""
        state_container: AppContainer = request.app.state.container
        state_container.selection_store.toggle_add_on(add_on_id)
        return _commit(state_container)

    @app.delete("/selection/add-ons")
    async def reset_add_ons(request: Request) -> dict[str, object]:
        """Clear the add-ons only."""
        state_container: AppContainer = request.app.state.container
        state_container.selection_store.reset_add_ons()
        return _commit(state_container)

    @app.get("/compare")
    async def get_compare(request: Request) -> dict[str, object]:
        """Return the comparison state, snapshot and live difference."""
        return _compare_view(request.app.state.container)

    @app.post("/compare/lock")
    async def lock_compare(request: Request) -> dict[str, object]:
        """Lock the live selection as snapshot A and start a fresh one."""
        state_container: AppContainer = request.app.state.container
        state_container.comparison.lock_and_compare()
        state_container.persistence.save(state_container.selection_store.selection)
        return _compare_view(state_container)

    @app.delete("/compare")
    async def clear_compare(request: Request) -> dict[str, object]:
        """Leave comparison mode keeping the live selection."""
        state_container: AppContainer = request.app.state.container
        state_container.comparison.clear_compare()
        return _compare_view(state_container)

    @app.get("/diagnostics/unknown-references")
    async def unknown_references(request: Request) -> dict[str, object]:
        """Return recent identifiers that failed to resolve in the catalog."""
        state_container: AppContainer = request.app.state.container
        return {
            "unknown_references": [
                asdict(reference) for reference in state_container.unknown_references
            ]
        }

    return app


def _commit(container: AppContainer) -> dict[str, object]:
    container.persistence.save(container.selection_store.selection)
    return _selection_view(container)


def _selection_view(container: AppContainer) -> dict[str, object]:
    selection = container.selection_store.selection
    totals = container.selection_store.totals()
    return _serialize_selection(selection, totals, container.catalog)


def _compare_view(container: AppContainer) -> dict[str, object]:
    comparison = container.comparison
    snapshot = comparison.snapshot
    return {
        "state": comparison.state.value,
        "snapshot": (
            _serialize_selection(snapshot.selection, snapshot.totals, container.catalog)
            if snapshot
            else None
        ),
        "current": _selection_view(container),
        "kcal_difference": comparison.difference(),
    }


def _serialize_selection(
    selection: Selection, totals: NutritionTotals, catalog: Catalog
) -> dict[str, object]:
    summary = summarize(selection, totals, catalog)
    return {
        "selection": to_payload(selection).model_dump(by_alias=True),
        "totals": _serialize_totals(totals),
        "display": {
            "protein": format_value(totals.protein),
            "carbs": format_value(totals.carbs),
            "fat": format_value(totals.fat),
            "kcal": format_value(totals.kcal),
        },
        "summary": {
            "pack": summary.pack_name,
            "base": summary.base_name,
            "protein": summary.protein_name,
            "add_ons": summary.add_on_names,
            "locked_extras": summary.locked_extras,
            "double_protein": summary.double_protein,
            "cup": {
                "base_color": summary.base_color,
                "fruit_colors": summary.fruit_colors,
            },
        },
    }


def _serialize_totals(totals: NutritionTotals) -> dict[str, float]:
    return asdict(totals)


def _serialize_archive_entry(entry: ArchiveEntry) -> dict[str, object]:
    return {
        "id": entry.id,
        "name": entry.name,
        "detail": entry.detail,
        "totals": _serialize_totals(entry.totals),
    }


def _serialize_catalog(catalog: Catalog) -> dict[str, object]:
    return {
        "fruits": [asdict(fruit) for fruit in catalog.fruits],
        "bases": [asdict(base) for base in catalog.bases],
        "proteins": [asdict(protein) for protein in catalog.proteins],
        "add_ons": [asdict(add_on) for add_on in catalog.add_ons],
        "packs": [asdict(pack) for pack in catalog.packs],
    }
