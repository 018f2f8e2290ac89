"""Two-slot comparison workflow."""

import logging
from dataclasses import dataclass
from enum import Enum

from smoothie_builder.domain.selection import Selection, Snapshot
from smoothie_builder.services.aggregator import kcal_difference
from smoothie_builder.services.selection_store import SelectionStore

_logger = logging.getLogger(__name__)


class ComparisonState(str, Enum):
    """Comparison workflow states."""

    SINGLE = "single"
    COMPARING = "comparing"


@dataclass
class ComparisonController:
    """Locks one selection as snapshot A and compares it with the live one."""

    store: SelectionStore
    snapshot: Snapshot | None = None

    @property
    def state(self) -> ComparisonState:
        """Return the current workflow state."""
        if self.snapshot is None:
            return ComparisonState.SINGLE
        return ComparisonState.COMPARING

    def lock_and_compare(self) -> Snapshot:
        """Freeze the live selection and its totals, then clear the live one.

        Locking again while comparing replaces the previous snapshot.
        """
        self.snapshot = Snapshot(
            selection=self.store.selection,
            totals=self.store.totals(),
        )
        self.store.reset_all()
        _logger.info("Locked comparison snapshot: kcal=%.1f", self.snapshot.totals.kcal)
        return self.snapshot

    def clear_compare(self) -> Selection:
        """Discard the snapshot and keep the live selection."""
        self.snapshot = None
        return self.store.selection

    def difference(self) -> int | None:
        """Return the live kcal difference, or None outside comparison."""
        if self.snapshot is None:
            return None
        return kcal_difference(self.snapshot.totals, self.store.totals())
