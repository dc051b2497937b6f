"""Acquire the bonus list and the catalog concurrently, then plan the week."""
import asyncio
import random
from dataclasses import dataclass
from typing import Any

from bonusplan.config import settings
from bonusplan.logging import get_logger
from bonusplan.schemas.plan import Plan, PlannedMeal
from bonusplan.services.bonus.client import bonus_client
from bonusplan.services.catalog.adapter import Catalog, load_catalog
from bonusplan.services.catalog.client import catalog_client
from bonusplan.services.ranking.engine import match_meals, rank_meals, sort_week_by_preparation_time
from bonusplan.utils.timing import time_span

logger = get_logger(__name__)

CatalogRows = tuple[list[dict[str, Any]], list[dict[str, Any]], list[dict[str, Any]]]


@dataclass
class PlanRun:
    mode: str
    plan: Plan | list[PlannedMeal | None]
    bonus_product_ids: set[str]
    catalog: Catalog


async def _skip() -> None:
    return None


async def acquire_inputs(
    fetch_bonus: bool = True, fetch_catalog: bool = True
) -> tuple[set[str] | None, CatalogRows | None]:
    """Run the requested fetches side by side.

    On the first failure the other fetch is cancelled and awaited before
    the error propagates.
    """
    with time_span("plan.acquire", bonus=fetch_bonus, catalog=fetch_catalog):
        tasks = [
            asyncio.ensure_future(bonus_client.fetch_bonus_products() if fetch_bonus else _skip()),
            asyncio.ensure_future(catalog_client.fetch_catalog() if fetch_catalog else _skip()),
        ]
        try:
            bonus_ids, rows = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
    return bonus_ids, rows


def plan_week(
    catalog: Catalog,
    bonus_product_ids: set[str],
    mode: str | None = None,
    seed: int | None = None,
    sort_week: bool | None = None,
) -> Plan | list[PlannedMeal | None]:
    mode = mode or settings.ranking_mode
    seed = settings.random_seed if seed is None else seed
    sort_week = settings.sort_week_by_preparation_time if sort_week is None else sort_week
    week = sort_week_by_preparation_time(catalog.week) if sort_week else catalog.week
    with time_span("plan.rank", mode=mode, days=len(week), bonus=len(bonus_product_ids)):
        if mode == "rank":
            return rank_meals(
                catalog.meals,
                bonus_product_ids,
                catalog.products,
                week,
                rng=random.Random(seed),
                shopping_list_url=settings.shopping_list_url,
            )
        if mode == "match":
            return match_meals(
                catalog.meals,
                bonus_product_ids,
                catalog.products,
                week,
                shopping_list_url=settings.shopping_list_url,
            )
    raise ValueError(f"unknown ranking mode {mode!r}")


async def build_week_plan(
    mode: str | None = None,
    seed: int | None = None,
    sort_week: bool | None = None,
) -> PlanRun:
    mode = mode or settings.ranking_mode
    logger.info("plan.start mode=%s seed=%s", mode, seed)
    with time_span("plan.total", mode=mode):
        bonus_ids, rows = await acquire_inputs()
        catalog = load_catalog(*rows)
        plan = plan_week(catalog, bonus_ids, mode=mode, seed=seed, sort_week=sort_week)
    return PlanRun(mode=mode, plan=plan, bonus_product_ids=bonus_ids, catalog=catalog)
