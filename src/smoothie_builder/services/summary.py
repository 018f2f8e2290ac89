"""Read models describing a selection and the catalog for display."""

from dataclasses import dataclass

from smoothie_builder.domain.catalog import Catalog, ExtraIngredient
from smoothie_builder.domain.nutrition import NutritionTotals
from smoothie_builder.domain.selection import Selection
from smoothie_builder.services.aggregator import pack_totals

NONE_SELECTED = "None Selected"
EMPTY_BASE_COLOR = "#f1f1f1"
UNKNOWN_FRUIT_COLOR = "#eee"


@dataclass(frozen=True)
class SelectionSummary:
    """Display names, locked extras and cup colours for a selection."""

    pack_name: str
    base_name: str
    protein_name: str
    add_on_names: list[str]
    locked_extras: list[str]
    double_protein: bool
    base_color: str
    fruit_colors: list[str]
    totals: NutritionTotals


@dataclass(frozen=True)
class ArchiveEntry:
    """Reference nutrition for one catalog record."""

    id: str
    name: str
    totals: NutritionTotals
    detail: str | None = None


@dataclass(frozen=True)
class NutritionArchive:
    """Reference tables for every selectable category."""

    packs: list[ArchiveEntry]
    bases: list[ArchiveEntry]
    proteins: list[ArchiveEntry]
    add_ons: list[ArchiveEntry]


def summarize(
    selection: Selection, totals: NutritionTotals, catalog: Catalog
) -> SelectionSummary:
    """Describe a selection; unknown ids read as not selected."""
    pack = catalog.pack(selection.fruit_pack_id) if selection.fruit_pack_id else None
    base = catalog.base(selection.base_id) if selection.base_id else None
    protein = catalog.protein(selection.protein_id) if selection.protein_id else None

    add_on_names = []
    for add_on_id in selection.add_on_ids:
        add_on = catalog.add_on(add_on_id)
        if add_on is not None:
            add_on_names.append(add_on.name)

    fruit_colors = []
    if pack is not None:
        for item in pack.items:
            fruit = catalog.fruit(item.fruit_id)
            fruit_colors.append(fruit.color if fruit else UNKNOWN_FRUIT_COLOR)

    return SelectionSummary(
        pack_name=pack.name if pack else NONE_SELECTED,
        base_name=base.name if base else NONE_SELECTED,
        protein_name=protein.name if protein else NONE_SELECTED,
        add_on_names=add_on_names,
        locked_extras=[extra.name for extra in pack.extras] if pack else [],
        double_protein=pack is not None and pack.protein_multiplier == 2,
        base_color=base.color if base else EMPTY_BASE_COLOR,
        fruit_colors=fruit_colors,
        totals=totals,
    )


def nutrition_archive(catalog: Catalog) -> NutritionArchive:
    """Build the per-category reference tables."""
    return NutritionArchive(
        packs=[
            ArchiveEntry(
                id=pack.id,
                name=pack.name,
                totals=pack_totals(catalog, pack.id),
                detail=_extras_label(pack.extras),
            )
            for pack in catalog.packs
        ],
        bases=[
            ArchiveEntry(
                id=base.id, name=base.name, totals=base.per_100(), detail="100 ml"
            )
            for base in catalog.bases
        ],
        proteins=[
            ArchiveEntry(id=protein.id, name=protein.name, totals=protein.per_100())
            for protein in catalog.proteins
        ],
        add_ons=[
            ArchiveEntry(
                id=add_on.id,
                name=add_on.name,
                totals=add_on.serving(),
                detail=add_on.serving_label,
            )
            for add_on in catalog.add_ons
        ],
    )


def format_value(value: float) -> str:
    """Format a nutrient amount with one decimal, dropping a trailing ``.0``."""
    text = f"{value:.1f}"
    if text.endswith(".0"):
        text = text[:-2]
    if text == "-0":
        return "0"
    return text


def _extras_label(extras: tuple[ExtraIngredient, ...]) -> str | None:
    if not extras:
        return None
    return "+ " + ", ".join(extra.name for extra in extras)
