from typing import Any, Literal

from pydantic import BaseModel, Field

from bonusplan.schemas.catalog import Meal, Product


class PlannedMeal(Meal):
    """A meal committed to a day, with the quantities it needs that day."""

    products_required: list[Product] = Field(default_factory=list, alias="productsRequired")
    products_discounted: list[Product] = Field(default_factory=list, alias="productsDiscounted")
    shopping_list: str = Field("", alias="shoppingList")
    score: int = 0


# Day name -> chosen meal, or None when nothing was feasible that day.
Plan = dict[str, PlannedMeal | None]

RankingMode = Literal["rank", "match"]


class PlanRequest(BaseModel):
    meals: list[dict[str, Any]] | None = None  # omitted -> fetched from the catalog source
    products: list[dict[str, Any]] | None = None
    week: list[dict[str, Any]] | None = None
    bonus_product_ids: list[str] | None = None  # omitted -> scraped (or read from the snapshot cache)
    mode: RankingMode | None = None  # defaults to settings.ranking_mode
    seed: int | None = None
    sort_week_by_preparation_time: bool | None = None


class PlanResponse(BaseModel):
    mode: RankingMode
    plan: dict[str, PlannedMeal | None] | list[PlannedMeal | None]
    bonus_product_count: int = 0
