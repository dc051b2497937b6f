import json
import time
from pathlib import Path

from playwright.async_api import Error as PlaywrightError

from bonusplan.config import settings
from bonusplan.errors import AcquisitionFailure
from bonusplan.logging import get_logger
from bonusplan.services.bonus import ah_scraper

logger = get_logger(__name__)


class BonusClient:
    """Discounted product ids, from a recent snapshot on disk or a fresh scrape."""

    def __init__(self, cache_path: str | Path | None = None, cache_max_age_s: int | None = None) -> None:
        self._cache_path = Path(cache_path or settings.bonus_cache_path)
        self._cache_max_age_s = (
            settings.bonus_cache_max_age_s if cache_max_age_s is None else cache_max_age_s
        )

    def _load_cache(self) -> set[str] | None:
        if self._cache_max_age_s <= 0 or not self._cache_path.exists():
            return None
        try:
            with self._cache_path.open("r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                return None
            if time.time() - float(data.get("ts", 0)) < self._cache_max_age_s:
                return {str(pid) for pid in data.get("product_ids") or []}
        except (OSError, ValueError, TypeError) as e:
            logger.warning("bonus: failed to load snapshot %s: %s", self._cache_path, e)
        return None

    def _save_cache(self, product_ids: list[str]) -> None:
        try:
            with self._cache_path.open("w", encoding="utf-8") as f:
                json.dump({"ts": time.time(), "product_ids": product_ids}, f)
        except OSError as e:
            logger.warning("bonus: failed to save snapshot %s: %s", self._cache_path, e)

    async def fetch_bonus_products(self) -> set[str]:
        cached = self._load_cache()
        if cached is not None:
            logger.info("bonus.fetch source=cache count=%s", len(cached))
            return cached
        try:
            product_ids = await ah_scraper.scrape_bonus_product_ids()
        except PlaywrightError as e:
            logger.warning("bonus.fetch_failed error=%s", e)
            raise AcquisitionFailure("bonus", str(e)) from e
        self._save_cache(product_ids)
        logger.info("bonus.fetch source=scraper count=%s", len(product_ids))
        return set(product_ids)


bonus_client = BonusClient()
