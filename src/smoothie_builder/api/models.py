"""Pydantic models for selection API payloads."""

from pydantic import BaseModel

from smoothie_builder.services.persistence import PersistedSelection


class ChoiceRequest(BaseModel):
    """Select an option by id, or clear it with null."""

    id: str | None = None


class SelectionPayload(PersistedSelection):
    """Whole-selection payload using the persisted field names."""
