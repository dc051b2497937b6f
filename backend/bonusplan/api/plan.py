from fastapi import APIRouter, HTTPException

from bonusplan.config import settings
from bonusplan.errors import AcquisitionFailure, InputShapeError
from bonusplan.logging import get_logger
from bonusplan.schemas.plan import PlanRequest, PlanResponse
from bonusplan.services.catalog.adapter import load_catalog
from bonusplan.services.pipeline import acquire_inputs, plan_week

router = APIRouter()
logger = get_logger(__name__)


@router.post("/plan", response_model=PlanResponse)
async def plan(request: PlanRequest) -> PlanResponse:
    """
    Plan the week. Any of meals/products/week/bonus_product_ids left out of
    the body is fetched from the configured sources (sheet, bonus scraper).
    """
    mode = request.mode or settings.ranking_mode
    need_catalog = request.meals is None or request.products is None or request.week is None
    need_bonus = request.bonus_product_ids is None
    try:
        bonus_ids, rows = await acquire_inputs(fetch_bonus=need_bonus, fetch_catalog=need_catalog)
    except AcquisitionFailure as e:
        logger.warning("plan.acquire_failed source=%s error=%s", e.source, e.detail)
        raise HTTPException(status_code=502, detail=str(e)) from e

    meal_rows, product_rows, week_rows = rows or ([], [], [])
    if bonus_ids is None:
        bonus_ids = set(request.bonus_product_ids or [])
    try:
        catalog = load_catalog(
            request.meals if request.meals is not None else meal_rows,
            request.products if request.products is not None else product_rows,
            request.week if request.week is not None else week_rows,
        )
        result = plan_week(
            catalog,
            bonus_ids,
            mode=mode,
            seed=request.seed,
            sort_week=request.sort_week_by_preparation_time,
        )
    except InputShapeError as e:
        logger.info("plan.invalid_input kind=%s index=%s", e.kind, e.index)
        raise HTTPException(status_code=422, detail=str(e)) from e
    return PlanResponse(mode=mode, plan=result, bonus_product_count=len(bonus_ids))
