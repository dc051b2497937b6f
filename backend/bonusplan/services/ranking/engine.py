"""Pick one meal per day, preferring meals whose products are on bonus.

Two variants:

* ``rank_meals`` (default): skips meals without products, never repeats a
  meal within the week, and picks at random among all feasible meals when
  none of them uses a bonus product.
* ``match_meals`` (strict, older behaviour): no de-duplication and no
  randomness; the first meal by score wins. Returns one entry per day in
  week order.

Days are processed in the order given. Callers who want the most
constrained days first can pass the week through
``sort_week_by_preparation_time``.
"""
import random
from collections import defaultdict
from collections.abc import Collection, Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from bonusplan.logging import get_logger
from bonusplan.schemas.catalog import Meal, Product, WeekDay
from bonusplan.schemas.plan import Plan, PlannedMeal
from bonusplan.services.catalog.adapter import parse_meals, parse_products, parse_week
from bonusplan.services.ranking.constraints import (
    has_ingredients,
    is_discount_requirement_satisfied,
    is_leftover_valid,
    is_not_planned,
    is_preparation_time_valid,
    is_shelf_life_valid,
)
from bonusplan.services.ranking.quantities import resolve_ingredients
from bonusplan.services.ranking.shopping_list import SHOPPING_LIST_URL, build_shopping_list_reference

logger = get_logger(__name__)

MealRows = Iterable[Meal | Mapping[str, Any]]
ProductRows = Iterable[Product | Mapping[str, Any]]
WeekRows = Iterable[WeekDay | Mapping[str, Any]]


@dataclass(frozen=True)
class Candidate:
    meal: Meal
    ingredients: tuple[Product, ...]


def pair_candidates(meals: Sequence[Meal], products: Sequence[Product]) -> list[Candidate]:
    """Attach each meal's products; longest preparation time first (stable)."""
    by_meal: dict[str, list[Product]] = defaultdict(list)
    for p in products:
        by_meal[p.meal].append(p)
    candidates = [Candidate(m, tuple(by_meal.get(m.slug, ()))) for m in meals]
    return sorted(candidates, key=lambda c: c.meal.preparation_time_minutes, reverse=True)


def sort_week_by_preparation_time(week_days: WeekRows) -> list[WeekDay]:
    """Days with the least preparation time first. Returns a new list."""
    return sorted(parse_week(week_days), key=lambda d: d.max_preparation_time)


def _annotate(
    meal: Meal,
    required: list[Product],
    discount_set: Collection[str],
    shopping_list_url: str,
) -> PlannedMeal:
    discounted = [p for p in required if p.id in discount_set]
    return PlannedMeal(
        **meal.model_dump(),
        products_required=required,
        products_discounted=discounted,
        shopping_list=build_shopping_list_reference(required, shopping_list_url),
        score=len(discounted),
    )


def feasible_meals(
    day: WeekDay,
    candidates: Sequence[Candidate],
    discount_set: Collection[str],
    planned_slugs: Optional[Collection[str]] = None,
    require_ingredients: bool = False,
    shopping_list_url: str = SHOPPING_LIST_URL,
) -> list[PlannedMeal]:
    """Meals that pass every rule for ``day``, highest bonus score first.

    ``planned_slugs`` enables the no-repeat rule; ``None`` disables it.
    """
    survivors: list[PlannedMeal] = []
    for candidate in candidates:
        meal = candidate.meal
        leftover_valid = is_leftover_valid(day, meal)
        required = resolve_ingredients(day, meal, candidate.ingredients, leftover_valid)
        conditions = {
            "has_ingredients": not require_ingredients or has_ingredients(candidate.ingredients),
            "not_planned": planned_slugs is None or is_not_planned(meal, planned_slugs),
            "preparation_time": is_preparation_time_valid(meal, day),
            "leftover": leftover_valid,
            "discounts": is_discount_requirement_satisfied(required, discount_set),
            "shelf_life": is_shelf_life_valid(required, day.date),
        }
        if all(conditions.values()):
            survivors.append(_annotate(meal, required, discount_set, shopping_list_url))
        else:
            logger.debug(
                "ranking.reject day=%s meal=%s failed=%s",
                day.day,
                meal.slug,
                ",".join(name for name, ok in conditions.items() if not ok),
            )
    survivors.sort(key=lambda m: m.score, reverse=True)
    return survivors


def rank_day(
    day: WeekDay,
    candidates: Sequence[Candidate],
    discount_set: Collection[str],
    planned_slugs: Collection[str],
    rng: random.Random,
    shopping_list_url: str = SHOPPING_LIST_URL,
) -> PlannedMeal | None:
    """Choose the meal for one day given the meals already committed earlier."""
    survivors = feasible_meals(
        day,
        candidates,
        discount_set,
        planned_slugs=planned_slugs,
        require_ingredients=True,
        shopping_list_url=shopping_list_url,
    )
    if not survivors:
        logger.info("ranking.day day=%s survivors=0 chosen=None", day.day)
        return None
    if survivors[0].score > 0:
        chosen = survivors[0]
    else:
        chosen = rng.choice(survivors)
    logger.info(
        "ranking.day day=%s survivors=%s top_score=%s chosen=%s",
        day.day,
        len(survivors),
        survivors[0].score,
        chosen.slug,
    )
    return chosen


def rank_meals(
    meals: MealRows,
    discount_set: Iterable[str],
    ingredients: ProductRows,
    week_days: WeekRows,
    rng: Optional[random.Random] = None,
    shopping_list_url: str = SHOPPING_LIST_URL,
) -> Plan:
    """Plan the week, keyed by day name. A meal is used at most once.

    Raw row mappings are validated first and raise ``InputShapeError``.
    Pass a seeded ``random.Random`` for reproducible plans.
    """
    meal_list = parse_meals(meals)
    products = parse_products(ingredients)
    week = parse_week(week_days)
    discounts = frozenset(str(i) for i in discount_set)
    rng = rng or random.Random()

    candidates = pair_candidates(meal_list, products)
    plan: Plan = {}
    planned: frozenset[str] = frozenset()
    for day in week:
        chosen = rank_day(day, candidates, discounts, planned, rng, shopping_list_url)
        plan[day.day] = chosen
        if chosen is not None:
            planned = planned | {chosen.slug}
    return plan


def match_meals(
    meals: MealRows,
    discount_set: Iterable[str],
    ingredients: ProductRows,
    week_days: WeekRows,
    shopping_list_url: str = SHOPPING_LIST_URL,
) -> list[PlannedMeal | None]:
    """Strict variant: best-scoring feasible meal per day, in week order.

    Meals may repeat across days and ties go to the first candidate.
    """
    meal_list = parse_meals(meals)
    products = parse_products(ingredients)
    week = parse_week(week_days)
    discounts = frozenset(str(i) for i in discount_set)

    candidates = pair_candidates(meal_list, products)
    matches: list[PlannedMeal | None] = []
    for day in week:
        survivors = feasible_meals(day, candidates, discounts, shopping_list_url=shopping_list_url)
        chosen = survivors[0] if survivors else None
        logger.info(
            "matching.day day=%s survivors=%s chosen=%s",
            day.day,
            len(survivors),
            chosen.slug if chosen else None,
        )
        matches.append(chosen)
    return matches
