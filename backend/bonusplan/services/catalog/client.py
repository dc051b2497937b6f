import asyncio
from pathlib import Path
from typing import Any

import httpx

from bonusplan.config import settings
from bonusplan.errors import AcquisitionFailure
from bonusplan.logging import get_logger
from bonusplan.services.catalog.files import MEALS_FILE, PRODUCTS_FILE, WEEK_FILE, load_json_rows
from bonusplan.services.catalog.sheets import fetch_sheet

logger = get_logger(__name__)

Rows = list[dict[str, Any]]


class CatalogClient:
    """Fetch meal, product and week rows from the configured source."""

    def __init__(
        self,
        source: str | None = None,
        spreadsheet_id: str | None = None,
        data_dir: str | Path | None = None,
    ) -> None:
        self._source = (source or settings.catalog_source).lower()
        self._spreadsheet_id = spreadsheet_id if spreadsheet_id is not None else settings.spreadsheet_id
        self._data_dir = Path(data_dir or settings.catalog_dir)

    async def _from_sheets(self) -> tuple[Rows, Rows, Rows]:
        if not self._spreadsheet_id:
            raise AcquisitionFailure("catalog", "spreadsheet_id is not configured")
        async with httpx.AsyncClient(timeout=settings.sheets_timeout_s) as client:
            meals, products, week = await asyncio.gather(
                fetch_sheet(self._spreadsheet_id, settings.meals_range, client),
                fetch_sheet(self._spreadsheet_id, settings.products_range, client),
                fetch_sheet(self._spreadsheet_id, settings.week_range, client),
            )
        return meals, products, week

    async def _from_files(self) -> tuple[Rows, Rows, Rows]:
        meals, products, week = await asyncio.gather(
            asyncio.to_thread(load_json_rows, self._data_dir / MEALS_FILE),
            asyncio.to_thread(load_json_rows, self._data_dir / PRODUCTS_FILE),
            asyncio.to_thread(load_json_rows, self._data_dir / WEEK_FILE),
        )
        return meals, products, week

    async def fetch_catalog(self) -> tuple[Rows, Rows, Rows]:
        logger.info("catalog.fetch source=%s", self._source)
        try:
            if self._source == "sheets":
                return await self._from_sheets()
            if self._source == "files":
                return await self._from_files()
        except httpx.HTTPError as e:
            logger.warning("catalog.fetch_failed source=%s error=%s", self._source, e)
            raise AcquisitionFailure("catalog", str(e)) from e
        except (OSError, ValueError) as e:
            logger.warning("catalog.fetch_failed source=%s error=%s", self._source, e)
            raise AcquisitionFailure("catalog", str(e)) from e
        raise AcquisitionFailure("catalog", f"unknown catalog source {self._source!r}")


catalog_client = CatalogClient()
