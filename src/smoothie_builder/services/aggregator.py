"""Nutrition aggregation for smoothie selections.

``calculate_totals`` is the pure core: the same selection and catalog always
produce the same totals. Identifiers that do not resolve contribute nothing;
they are logged and passed to an optional hook so stale persisted state can be
spotted without failing the calculation.
"""

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from smoothie_builder.domain.catalog import Catalog, CatalogCategory, FruitPack
from smoothie_builder.domain.errors import UnknownReference
from smoothie_builder.domain.nutrition import ZERO_TOTALS, NutritionTotals
from smoothie_builder.domain.selection import Selection

_logger = logging.getLogger(__name__)

UnknownReferenceHook = Callable[[UnknownReference], None]


class ProteinMultiplierMode(str, Enum):
    """How a pack's protein multiplier affects the protein contribution."""

    INFORMATIONAL = "informational"
    SCALE_PROTEIN = "scale_protein"


def calculate_totals(
    selection: Selection,
    catalog: Catalog,
    *,
    protein_multiplier_mode: ProteinMultiplierMode = (
        ProteinMultiplierMode.INFORMATIONAL
    ),
    on_unknown_reference: UnknownReferenceHook | None = None,
) -> NutritionTotals:
    """Fold a selection and the catalog into nutrition totals."""

    def report(
        category: CatalogCategory, ref_id: str, context: str | None = None
    ) -> None:
        reference = UnknownReference(category.value, ref_id, context)
        _logger.warning(
            "Unknown %s reference %r%s",
            category.value,
            ref_id,
            f" in {context}" if context else "",
        )
        if on_unknown_reference is not None:
            on_unknown_reference(reference)

    total = ZERO_TOTALS

    if selection.base_id is not None:
        base = catalog.base(selection.base_id)
        if base is None:
            report(CatalogCategory.BASE, selection.base_id)
        else:
            total = total.plus(base.per_100())

    if selection.protein_id is not None:
        protein = catalog.protein(selection.protein_id)
        if protein is None:
            report(CatalogCategory.PROTEIN, selection.protein_id)
        else:
            factor = _protein_factor(selection, catalog, protein_multiplier_mode)
            total = total.plus(protein.per_100().scaled(factor))

    if selection.fruit_pack_id is not None:
        pack = catalog.pack(selection.fruit_pack_id)
        if pack is None:
            report(CatalogCategory.PACK, selection.fruit_pack_id)
        else:
            total = total.plus(_pack_contribution(pack, catalog, report))

    for add_on_id in selection.add_on_ids:
        add_on = catalog.add_on(add_on_id)
        if add_on is None:
            report(CatalogCategory.ADD_ON, add_on_id)
            continue
        total = total.plus(add_on.serving())

    return total


def pack_totals(catalog: Catalog, pack_id: str) -> NutritionTotals:
    """Return fruit plus mandatory extras for one pack, zero when unknown."""
    pack = catalog.pack(pack_id)
    if pack is None:
        return ZERO_TOTALS
    return _pack_contribution(pack, catalog, None)


def kcal_difference(first: NutritionTotals, second: NutritionTotals) -> int:
    """Return the absolute energy difference rounded to whole kcal."""
    return abs(math.floor(second.kcal - first.kcal + 0.5))


def _pack_contribution(
    pack: FruitPack,
    catalog: Catalog,
    report: Callable[[CatalogCategory, str, str | None], None] | None,
) -> NutritionTotals:
    total = ZERO_TOTALS
    for item in pack.items:
        fruit = catalog.fruit(item.fruit_id)
        if fruit is None:
            if report is not None:
                report(CatalogCategory.FRUIT, item.fruit_id, f"pack '{pack.id}'")
            continue
        total = total.plus(fruit.per_100().scaled(item.weight_grams / 100.0))
    for extra in pack.extras:
        total = total.plus(extra.serving())
    return total


def _protein_factor(
    selection: Selection, catalog: Catalog, mode: ProteinMultiplierMode
) -> float:
    if mode is not ProteinMultiplierMode.SCALE_PROTEIN:
        return 1.0
    if selection.fruit_pack_id is None:
        return 1.0
    pack = catalog.pack(selection.fruit_pack_id)
    if pack is None:
        return 1.0
    return float(pack.protein_multiplier)


@dataclass(frozen=True)
class NutritionAggregator:
    """Aggregator bound to a catalog and a protein multiplier policy."""

    catalog: Catalog
    protein_multiplier_mode: ProteinMultiplierMode = ProteinMultiplierMode.INFORMATIONAL
    on_unknown_reference: UnknownReferenceHook | None = None

    def aggregate(self, selection: Selection) -> NutritionTotals:
        """Compute totals for a selection."""
        return calculate_totals(
            selection,
            self.catalog,
            protein_multiplier_mode=self.protein_multiplier_mode,
            on_unknown_reference=self.on_unknown_reference,
        )

    def pack_totals(self, pack_id: str) -> NutritionTotals:
        """Compute fruit plus extras for a single pack."""
        return pack_totals(self.catalog, pack_id)
