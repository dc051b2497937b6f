from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bonusplan.api.routes import router as api_router
from bonusplan.config import settings
from bonusplan.logging import configure_logging, get_logger

app = FastAPI(title="Bonus Meal Planner API")
logger = get_logger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup() -> None:
    configure_logging(settings.log_level)
    logger.info(
        "startup: catalog_source=%s ranking_mode=%s",
        settings.catalog_source,
        settings.ranking_mode,
    )


app.include_router(api_router)
