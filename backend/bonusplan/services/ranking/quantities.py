import math
from typing import Sequence

from bonusplan.schemas.catalog import Meal, Product, WeekDay


def portion_multiplier(day: WeekDay, meal: Meal, leftover_mode_active: bool) -> int:
    """Whole number of meal batches needed for the day.

    Outside leftover mode the meal is cooked for its own headcount, so the
    multiplier is 1.
    """
    if leftover_mode_active:
        headcount = day.number_of_people + day.number_of_people_leftovers
    else:
        headcount = meal.number_of_people
    return math.ceil(headcount / meal.number_of_people)


def resolve_ingredients(
    day: WeekDay,
    meal: Meal,
    ingredients: Sequence[Product],
    leftover_mode_active: bool,
) -> list[Product]:
    """Return copies of ``ingredients`` with quantities scaled for ``day``."""
    multiplier = portion_multiplier(day, meal, leftover_mode_active)
    return [
        p.model_copy(update={"quantity": p.quantity * multiplier})
        for p in ingredients
    ]
