"""Load the ingredient catalog from a JSON document."""

import logging
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from smoothie_builder.domain.catalog import (
    AddOn,
    Catalog,
    ExtraIngredient,
    FruitPack,
    Ingredient,
    PackItem,
)
from smoothie_builder.domain.errors import CatalogIntegrityError

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parents[1] / "data" / "catalog.json"

_logger = logging.getLogger(__name__)


class IngredientModel(BaseModel):
    """Catalog file entry for a fruit, base or protein."""

    id: str
    name: str
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)
    kcal: float = Field(ge=0)
    color: str
    emoji: str | None = None


class AddOnModel(BaseModel):
    """Catalog file entry for an add-on."""

    id: str
    name: str
    serving_label: str
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)
    kcal: float = Field(ge=0)
    color: str


class ExtraModel(BaseModel):
    """Catalog file entry for a mandatory pack extra."""

    name: str
    weight_grams: float = Field(gt=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)
    kcal: float = Field(ge=0)


class PackItemModel(BaseModel):
    """Catalog file entry for one fruit in a pack."""

    fruit_id: str
    weight_grams: float


class PackModel(BaseModel):
    """Catalog file entry for a fruit pack."""

    id: str
    name: str
    description: str = ""
    tag: str | None = None
    protein_multiplier: int = 1
    items: list[PackItemModel]
    extras: list[str] = Field(default_factory=list)


class CatalogDocument(BaseModel):
    """Top-level catalog file layout."""

    fruits: list[IngredientModel]
    bases: list[IngredientModel]
    proteins: list[IngredientModel]
    add_ons: list[AddOnModel]
    extras: dict[str, ExtraModel] = Field(default_factory=dict)
    packs: list[PackModel]


def load_catalog(path: Path | str | None = None) -> Catalog:
    """Read, convert and validate a catalog file.

    Raises:
        CatalogIntegrityError: If the file is unreadable, has the wrong
            shape or fails the catalog integrity checks.
    """
    resolved = Path(path) if path else DEFAULT_CATALOG_PATH
    try:
        raw = resolved.read_text(encoding="utf-8")
    except OSError as exc:
        raise CatalogIntegrityError([f"cannot read {resolved}: {exc}"]) from exc
    catalog = parse_catalog(raw)
    _logger.info(
        "Loaded catalog from %s: packs=%s bases=%s proteins=%s add_ons=%s",
        resolved,
        len(catalog.packs),
        len(catalog.bases),
        len(catalog.proteins),
        len(catalog.add_ons),
    )
    return catalog


def parse_catalog(raw: str) -> Catalog:
    """Convert a catalog JSON string into a validated Catalog."""
    try:
        document = CatalogDocument.model_validate_json(raw)
    except ValidationError as exc:
        raise CatalogIntegrityError(
            [f"{_location(error['loc'])}: {error['msg']}" for error in exc.errors()]
        ) from exc

    problems: list[str] = []
    packs = [_to_pack(pack, document.extras, problems) for pack in document.packs]
    if problems:
        raise CatalogIntegrityError(problems)

    catalog = Catalog(
        fruits=tuple(_to_ingredient(entry) for entry in document.fruits),
        bases=tuple(_to_ingredient(entry) for entry in document.bases),
        proteins=tuple(_to_ingredient(entry) for entry in document.proteins),
        add_ons=tuple(
            AddOn(
                id=entry.id,
                name=entry.name,
                serving_label=entry.serving_label,
                protein=entry.protein,
                carbs=entry.carbs,
                fat=entry.fat,
                kcal=entry.kcal,
                color=entry.color,
            )
            for entry in document.add_ons
        ),
        packs=tuple(packs),
    )
    catalog.validate()
    return catalog


def _to_ingredient(entry: IngredientModel) -> Ingredient:
    return Ingredient(
        id=entry.id,
        name=entry.name,
        protein=entry.protein,
        carbs=entry.carbs,
        fat=entry.fat,
        kcal=entry.kcal,
        color=entry.color,
        emoji=entry.emoji,
    )


def _to_pack(
    pack: PackModel, extras: dict[str, ExtraModel], problems: list[str]
) -> FruitPack:
    resolved_extras: list[ExtraIngredient] = []
    for key in pack.extras:
        extra = extras.get(key)
        if extra is None:
            problems.append(f"pack '{pack.id}' references unknown extra '{key}'")
            continue
        resolved_extras.append(
            ExtraIngredient(
                name=extra.name,
                weight_grams=extra.weight_grams,
                protein=extra.protein,
                carbs=extra.carbs,
                fat=extra.fat,
                kcal=extra.kcal,
            )
        )
    return FruitPack(
        id=pack.id,
        name=pack.name,
        description=pack.description,
        items=tuple(
            PackItem(fruit_id=item.fruit_id, weight_grams=item.weight_grams)
            for item in pack.items
        ),
        extras=tuple(resolved_extras),
        protein_multiplier=pack.protein_multiplier,
        tag=pack.tag,
    )


def _location(loc: tuple[object, ...]) -> str:
    return ".".join(str(part) for part in loc) or "document"
