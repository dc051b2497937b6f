"""Feasibility rules for putting a meal on a given day.

Every rule is a plain predicate: it returns a bool and never raises.
"""
from collections.abc import Collection, Iterable
from datetime import date

from bonusplan.schemas.catalog import Meal, Product, WeekDay

# Groceries arrive on Tuesday (ISO weekday 2).
DELIVERY_WEEKDAY = 2
# Leftovers are planned on the last day of the week.
LEFTOVER_DAY = "Sunday"


def is_preparation_time_valid(meal: Meal, day: WeekDay) -> bool:
    return meal.preparation_time_minutes <= day.max_preparation_time


def is_leftover_valid(day: WeekDay, meal: Meal) -> bool:
    """Any meal is fine except on the leftover day, where it must make leftovers
    and somebody has to eat them."""
    if day.day != LEFTOVER_DAY:
        return True
    return day.number_of_people_leftovers > 0 and meal.can_be_leftovers


def has_ingredients(ingredients: Collection[Product]) -> bool:
    return len(ingredients) > 0


def is_not_planned(meal: Meal, planned_slugs: Collection[str]) -> bool:
    return meal.slug not in planned_slugs


def is_discount_requirement_satisfied(
    ingredients: Iterable[Product], discount_set: Collection[str]
) -> bool:
    """All products flagged ``IsBonusRequired`` must be on bonus."""
    return all(p.id in discount_set for p in ingredients if p.is_bonus_required)


def has_unmet_discount_requirement(
    ingredients: Iterable[Product], discount_set: Collection[str]
) -> bool:
    """Historical form of the discount rule: True when at least one product
    flagged ``IsBonusRequired`` is missing from the bonus list.

    Kept for callers that still use it; ranking relies on
    ``is_discount_requirement_satisfied``.
    """
    return any(p.id not in discount_set for p in ingredients if p.is_bonus_required)


def _as_date(value: date | str) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(value.strip()[:10])


def is_shelf_life_valid(
    ingredients: Iterable[Product],
    day_date: date | str,
    delivery_weekday: int = DELIVERY_WEEKDAY,
) -> bool:
    """Products must keep from delivery until the day they are cooked."""
    days_since_delivery = _as_date(day_date).isoweekday() - delivery_weekday
    return all(
        not p.has_shelf_life or p.max_shelf_life_in_days >= days_since_delivery
        for p in ingredients
    )
