from fastapi import APIRouter

from bonusplan.api.health import router as health_router
from bonusplan.api.plan import router as plan_router

router = APIRouter(prefix="/api")
router.include_router(health_router)
router.include_router(plan_router)
