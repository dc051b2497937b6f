"""Meal selection: feasibility rules, quantity scaling and the week ranking."""

from bonusplan.services.ranking.constraints import (
    has_unmet_discount_requirement,
    is_discount_requirement_satisfied,
    is_leftover_valid,
    is_preparation_time_valid,
    is_shelf_life_valid,
)
from bonusplan.services.ranking.engine import match_meals, rank_meals, sort_week_by_preparation_time
from bonusplan.services.ranking.quantities import resolve_ingredients
from bonusplan.services.ranking.shopping_list import build_shopping_list_reference

__all__ = [
    "build_shopping_list_reference",
    "has_unmet_discount_requirement",
    "is_discount_requirement_satisfied",
    "is_leftover_valid",
    "is_preparation_time_valid",
    "is_shelf_life_valid",
    "match_meals",
    "rank_meals",
    "resolve_ingredients",
    "sort_week_by_preparation_time",
]
