from datetime import date

from bonusplan.schemas.catalog import Meal, Product, WeekDay
from bonusplan.services.ranking.constraints import is_preparation_time_valid
from bonusplan.services.ranking.quantities import portion_multiplier, resolve_ingredients


def _meal(people: int = 2, prep: int = 15) -> Meal:
    return Meal(
        slug="meal-a",
        name="Meal A",
        preparation_time_minutes=prep,
        can_be_leftovers=True,
        number_of_people=people,
    )


def _day(name: str = "Monday", people: int = 4, leftovers: int = 0) -> WeekDay:
    return WeekDay(
        day=name,
        date=date(2025, 6, 2),
        number_of_people=people,
        number_of_people_leftovers=leftovers,
        max_preparation_time=20,
    )


def _product(quantity: float = 3, **kwargs) -> Product:
    return Product(meal="meal-a", id="100", quantity=quantity, **kwargs)


def test_monday_without_leftover_mode_keeps_base_quantity():
    meal, day = _meal(), _day()
    resolved = resolve_ingredients(day, meal, [_product(3)], leftover_mode_active=False)
    assert [p.quantity for p in resolved] == [3]
    assert is_preparation_time_valid(meal, day) is True


def test_inactive_leftover_mode_ignores_day_headcount():
    assert portion_multiplier(_day(people=10, leftovers=6), _meal(people=2), False) == 1


def test_leftover_mode_scales_by_total_headcount():
    day = _day(name="Sunday", people=2, leftovers=2)
    resolved = resolve_ingredients(day, _meal(people=2), [_product(3)], leftover_mode_active=True)
    assert resolved[0].quantity == 6


def test_multiplier_rounds_up():
    # 5 eaters for a 4-person recipe needs two batches
    assert portion_multiplier(_day(people=3, leftovers=2), _meal(people=4), True) == 2
    assert portion_multiplier(_day(people=3, leftovers=0), _meal(people=4), True) == 1


def test_other_fields_are_preserved():
    product = _product(1.5, max_shelf_life_in_days=2, is_bonus_required=True, url="https://example.com/p")
    resolved = resolve_ingredients(_day(people=4), _meal(people=2), [product], True)[0]
    assert resolved.quantity == 3
    assert resolved.id == product.id
    assert resolved.meal == product.meal
    assert resolved.max_shelf_life_in_days == 2
    assert resolved.is_bonus_required is True
    assert resolved.url == "https://example.com/p"


def test_resolution_is_pure():
    meal, day = _meal(), _day(people=4)
    ingredients = [_product(3), Product(meal="meal-a", id="101", quantity=1)]
    first = resolve_ingredients(day, meal, ingredients, True)
    second = resolve_ingredients(day, meal, ingredients, True)
    assert first == second
    assert [p.quantity for p in ingredients] == [3, 1]
    assert first is not ingredients


def test_no_ingredients_resolves_to_empty_list():
    assert resolve_ingredients(_day(), _meal(), [], True) == []
