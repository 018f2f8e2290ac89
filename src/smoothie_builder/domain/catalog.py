"""Domain models for the static ingredient catalog."""

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from smoothie_builder.domain.errors import CatalogIntegrityError
from smoothie_builder.domain.nutrition import NutritionTotals

ALLOWED_PROTEIN_MULTIPLIERS = (1, 2)


class CatalogCategory(str, Enum):
    """Lookup categories exposed by the catalog."""

    FRUIT = "fruit"
    BASE = "base"
    PROTEIN = "protein"
    ADD_ON = "add_on"
    PACK = "pack"


@dataclass(frozen=True)
class Ingredient:
    """Fruit, base or protein with nutrition per 100 g/ml."""

    id: str
    name: str
    protein: float
    carbs: float
    fat: float
    kcal: float
    color: str
    emoji: str | None = None

    def per_100(self) -> NutritionTotals:
        """Return the nutrition of one 100-unit reference serving."""
        return NutritionTotals(self.protein, self.carbs, self.fat, self.kcal)


@dataclass(frozen=True)
class AddOn:
    """Optional booster with nutrition already scaled to its serving."""

    id: str
    name: str
    serving_label: str
    protein: float
    carbs: float
    fat: float
    kcal: float
    color: str

    def serving(self) -> NutritionTotals:
        """Return the nutrition of the fixed serving."""
        return NutritionTotals(self.protein, self.carbs, self.fat, self.kcal)


@dataclass(frozen=True)
class PackItem:
    """One fruit component of a pack at its serving weight."""

    fruit_id: str
    weight_grams: float


@dataclass(frozen=True)
class ExtraIngredient:
    """Mandatory bonus ingredient bundled into a pack, in absolute units."""

    name: str
    weight_grams: float
    protein: float
    carbs: float
    fat: float
    kcal: float

    def serving(self) -> NutritionTotals:
        """Return the absolute nutrition contribution."""
        return NutritionTotals(self.protein, self.carbs, self.fat, self.kcal)


@dataclass(frozen=True)
class FruitPack:
    """Preset bundle of fruits plus its non-removable extras."""

    id: str
    name: str
    description: str
    items: tuple[PackItem, ...]
    extras: tuple[ExtraIngredient, ...] = ()
    protein_multiplier: int = 1
    tag: str | None = None


@dataclass(frozen=True)
class Catalog:
    """Immutable reference data keyed by stable identifiers."""

    fruits: tuple[Ingredient, ...]
    bases: tuple[Ingredient, ...]
    proteins: tuple[Ingredient, ...]
    add_ons: tuple[AddOn, ...]
    packs: tuple[FruitPack, ...]
    _index: dict[CatalogCategory, dict[str, object]] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        index = {
            category: {record.id: record for record in self.records(category)}
            for category in CatalogCategory
        }
        object.__setattr__(self, "_index", index)

    def records(
        self, category: CatalogCategory
    ) -> tuple[Ingredient, ...] | tuple[AddOn, ...] | tuple[FruitPack, ...]:
        """Return the ordered records of a category."""
        return {
            CatalogCategory.FRUIT: self.fruits,
            CatalogCategory.BASE: self.bases,
            CatalogCategory.PROTEIN: self.proteins,
            CatalogCategory.ADD_ON: self.add_ons,
            CatalogCategory.PACK: self.packs,
        }[category]

    def lookup(
        self, category: CatalogCategory, record_id: str
    ) -> Ingredient | AddOn | FruitPack | None:
        """Return the record with the given id, or None when absent."""
        return self._index[category].get(record_id)  # type: ignore[return-value]

    def fruit(self, fruit_id: str) -> Ingredient | None:
        """Return a fruit by id."""
        return self._index[CatalogCategory.FRUIT].get(fruit_id)  # type: ignore[return-value]

    def base(self, base_id: str) -> Ingredient | None:
        """Return a base by id."""
        return self._index[CatalogCategory.BASE].get(base_id)  # type: ignore[return-value]

    def protein(self, protein_id: str) -> Ingredient | None:
        """Return a protein by id."""
        return self._index[CatalogCategory.PROTEIN].get(protein_id)  # type: ignore[return-value]

    def add_on(self, add_on_id: str) -> AddOn | None:
        """Return an add-on by id."""
        return self._index[CatalogCategory.ADD_ON].get(add_on_id)  # type: ignore[return-value]

    def pack(self, pack_id: str) -> FruitPack | None:
        """Return a fruit pack by id."""
        return self._index[CatalogCategory.PACK].get(pack_id)  # type: ignore[return-value]

    def extras_for(self, pack_id: str) -> tuple[ExtraIngredient, ...]:
        """Return the mandatory extras of a pack, empty when none."""
        pack = self.pack(pack_id)
        if pack is None:
            return ()
        return pack.extras

    def validate(self) -> None:
        """Check catalog integrity, raising CatalogIntegrityError on problems."""
        problems: list[str] = []
        for category in CatalogCategory:
            ids = [record.id for record in self.records(category)]
            for record_id, count in Counter(ids).items():
                if count > 1:
                    problems.append(f"duplicate {category.value} id '{record_id}'")

        for ingredient in (*self.fruits, *self.bases, *self.proteins):
            problems.extend(_negative_values(ingredient.id, ingredient.per_100()))
        for add_on in self.add_ons:
            problems.extend(_negative_values(add_on.id, add_on.serving()))

        for pack in self.packs:
            if pack.protein_multiplier not in ALLOWED_PROTEIN_MULTIPLIERS:
                problems.append(
                    f"pack '{pack.id}' has protein multiplier "
                    f"{pack.protein_multiplier}"
                )
            for item in pack.items:
                if self.fruit(item.fruit_id) is None:
                    problems.append(
                        f"pack '{pack.id}' references unknown fruit "
                        f"'{item.fruit_id}'"
                    )
                if item.weight_grams <= 0:
                    problems.append(
                        f"pack '{pack.id}' has non-positive weight for "
                        f"'{item.fruit_id}'"
                    )
            for extra in pack.extras:
                problems.extend(
                    _negative_values(f"{pack.id}/{extra.name}", extra.serving())
                )

        if problems:
            raise CatalogIntegrityError(problems)


def _negative_values(label: str, totals: NutritionTotals) -> Iterable[str]:
    for nutrient in ("protein", "carbs", "fat", "kcal"):
        if getattr(totals, nutrient) < 0:
            yield f"'{label}' has negative {nutrient}"
