"""Mutable holder of the live smoothie selection."""

from dataclasses import dataclass, field, replace

from smoothie_builder.domain.nutrition import NutritionTotals
from smoothie_builder.domain.selection import Selection
from smoothie_builder.services.aggregator import NutritionAggregator


@dataclass
class SelectionStore:
    """Owns the current selection and derives totals on every read."""

    aggregator: NutritionAggregator
    selection: Selection = field(default_factory=Selection)

    def set_base(self, base_id: str | None) -> Selection:
        """Select a base; choosing the current base again deselects it."""
        self.selection = replace(
            self.selection, base_id=_reselect(self.selection.base_id, base_id)
        )
        return self.selection

    def set_protein(self, protein_id: str | None) -> Selection:
        """Select a protein; choosing the current protein again deselects it."""
        self.selection = replace(
            self.selection,
            protein_id=_reselect(self.selection.protein_id, protein_id),
        )
        return self.selection

    def toggle_pack(self, pack_id: str) -> Selection:
        """Select a pack, or clear it when it is already selected."""
        self.selection = replace(
            self.selection,
            fruit_pack_id=_reselect(self.selection.fruit_pack_id, pack_id),
        )
        return self.selection

    def toggle_add_on(self, add_on_id: str) -> Selection:
        """Add an add-on when absent, remove it when present."""
        current = self.selection.add_on_ids
        if add_on_id in current:
            updated = tuple(item for item in current if item != add_on_id)
        else:
            updated = (*current, add_on_id)
        self.selection = replace(self.selection, add_on_ids=updated)
        return self.selection

    def reset_add_ons(self) -> Selection:
        """Clear the add-ons only."""
        self.selection = replace(self.selection, add_on_ids=())
        return self.selection

    def reset_all(self) -> Selection:
        """Clear every field."""
        self.selection = Selection()
        return self.selection

    def replace(self, selection: Selection) -> Selection:
        """Swap in a whole selection, dropping duplicate add-ons."""
        self.selection = replace(
            selection, add_on_ids=tuple(dict.fromkeys(selection.add_on_ids))
        )
        return self.selection

    def totals(self) -> NutritionTotals:
        """Return totals for the current selection."""
        return self.aggregator.aggregate(self.selection)


def _reselect(current: str | None, requested: str | None) -> str | None:
    if requested is None or requested == current:
        return None
    return requested
