"""Google Sheets values API reader (v4, API key or public sheet)."""
import urllib.parse
from typing import Any

import httpx

from bonusplan.config import settings
from bonusplan.logging import get_logger
from bonusplan.services.catalog.adapter import rows_to_records

logger = get_logger(__name__)


def _values_url(spreadsheet_id: str, range_: str) -> str:
    return f"{settings.sheets_base_url}/{spreadsheet_id}/values/{urllib.parse.quote(range_, safe='')}"


async def fetch_sheet(
    spreadsheet_id: str,
    range_: str,
    client: httpx.AsyncClient | None = None,
) -> list[dict[str, Any]]:
    """Fetch ``range_`` (e.g. "Meals!A1:Z") and return one record per data row.

    The first row of the range holds the column headers.
    """
    url = _values_url(spreadsheet_id, range_)
    params = {"key": settings.sheets_api_key} if settings.sheets_api_key else {}
    logger.info("sheets.fetch spreadsheet_id=%s range=%s", spreadsheet_id, range_)
    if client is None:
        async with httpx.AsyncClient(timeout=settings.sheets_timeout_s) as own_client:
            resp = await own_client.get(url, params=params)
    else:
        resp = await client.get(url, params=params)
    resp.raise_for_status()
    values = resp.json().get("values") or []
    records = rows_to_records(values)
    logger.info("sheets.fetch.done range=%s rows=%s", range_, len(records))
    return records
