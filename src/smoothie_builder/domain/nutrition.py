"""Nutrition domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NutritionTotals:
    """Aggregate protein, carbs, fat (grams) and energy (kcal)."""

    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    kcal: float = 0.0

    def plus(self, other: "NutritionTotals") -> "NutritionTotals":
        """Return the nutrient-wise sum of two totals."""
        return NutritionTotals(
            protein=self.protein + other.protein,
            carbs=self.carbs + other.carbs,
            fat=self.fat + other.fat,
            kcal=self.kcal + other.kcal,
        )

    def scaled(self, factor: float) -> "NutritionTotals":
        """Return totals multiplied by a factor."""
        return NutritionTotals(
            protein=self.protein * factor,
            carbs=self.carbs * factor,
            fat=self.fat * factor,
            kcal=self.kcal * factor,
        )


ZERO_TOTALS = NutritionTotals()
