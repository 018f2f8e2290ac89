"""Error types shared by the catalog, aggregator and persistence layers."""

from dataclasses import dataclass


class CatalogIntegrityError(ValueError):
    """Raised when catalog data fails validation at load time."""

    def __init__(self, problems: list[str]) -> None:
        self.problems = problems
        super().__init__("Invalid catalog: " + "; ".join(problems))


class MalformedSelectionError(ValueError):
    """Raised when a persisted selection payload has the wrong shape."""


@dataclass(frozen=True)
class UnknownReference:
    """An identifier that did not resolve in the catalog."""

    category: str
    ref_id: str
    context: str | None = None
