"""Persistence of the live selection through a key-value store."""

import logging
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from smoothie_builder.domain.errors import MalformedSelectionError
from smoothie_builder.domain.selection import Selection
from smoothie_builder.services.storage import KeyValueStore

SELECTION_KEY = "smokeys_pro_v5_updated"

_logger = logging.getLogger(__name__)


class PersistedSelection(BaseModel):
    """Serialized selection layout shared with the presentation layer."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    base: str | None = None
    fruit_pack_id: str | None = Field(default=None, alias="fruitPackId")
    protein: str | None = None
    selected_add_ons: list[str] | None = Field(default=None, alias="selectedAddOns")


def decode_selection(raw: str | bytes) -> Selection:
    """Parse a persisted selection, treating absent or null fields as unset.

    Raises:
        MalformedSelectionError: If the payload is not a selection object.
    """
    try:
        payload = PersistedSelection.model_validate_json(raw)
    except ValidationError as exc:
        raise MalformedSelectionError(str(exc)) from exc
    return to_selection(payload)


def to_selection(payload: PersistedSelection) -> Selection:
    """Convert the serialized layout to a domain selection."""
    return Selection(
        base_id=payload.base,
        fruit_pack_id=payload.fruit_pack_id,
        protein_id=payload.protein,
        add_on_ids=tuple(dict.fromkeys(payload.selected_add_ons or [])),
    )


def to_payload(selection: Selection) -> PersistedSelection:
    """Convert a domain selection to the serialized layout."""
    return PersistedSelection(
        base=selection.base_id,
        fruit_pack_id=selection.fruit_pack_id,
        protein=selection.protein_id,
        selected_add_ons=list(selection.add_on_ids),
    )


def encode_selection(selection: Selection) -> str:
    """Serialize a selection with the persisted field names."""
    return to_payload(selection).model_dump_json(by_alias=True)


@dataclass
class SelectionPersistenceService:
    """Loads and saves the live selection."""

    store: KeyValueStore
    key: str = SELECTION_KEY

    def load(self) -> Selection:
        """Return the stored selection, or an empty one when missing or malformed."""
        raw = self.store.get(self.key)
        if raw is None:
            return Selection()
        try:
            return decode_selection(raw)
        except MalformedSelectionError as exc:
            _logger.warning("Discarding malformed persisted selection: %s", exc)
            return Selection()

    def save(self, selection: Selection) -> None:
        """Persist a selection, replacing the stored one."""
        self.store.set(self.key, encode_selection(selection))
