"""Domain models for smoothie selections and comparison snapshots."""

from dataclasses import dataclass

from smoothie_builder.domain.nutrition import NutritionTotals


@dataclass(frozen=True)
class Selection:
    """The user's current choice in each ingredient category.

    Any field may be unset. ``add_on_ids`` is duplicate-free and keeps the
    order in which add-ons were chosen.
    """

    base_id: str | None = None
    fruit_pack_id: str | None = None
    protein_id: str | None = None
    add_on_ids: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        """Return True when nothing is selected."""
        return (
            self.base_id is None
            and self.fruit_pack_id is None
            and self.protein_id is None
            and not self.add_on_ids
        )


@dataclass(frozen=True)
class Snapshot:
    """A selection and its totals, frozen when a comparison is locked."""

    selection: Selection
    totals: NutritionTotals
