import json
from pathlib import Path
from typing import Any

from bonusplan.logging import get_logger
from bonusplan.services.catalog.adapter import rows_to_records

logger = get_logger(__name__)

MEALS_FILE = "meals.json"
PRODUCTS_FILE = "products.json"
WEEK_FILE = "week.json"


def load_json_rows(path: str | Path) -> list[dict[str, Any]]:
    """Read a JSON catalog file.

    Accepts a list of records, a sheet-style list of rows (header first), or
    a Sheets API payload with a "values" key.
    """
    path = Path(path)
    with path.open("r", encoding="utf-8") as handle:
        data = json.load(handle)
    if isinstance(data, dict) and "values" in data:
        data = rows_to_records(data["values"] or [])
    elif isinstance(data, list) and data and isinstance(data[0], list):
        data = rows_to_records(data)
    if not isinstance(data, list):
        raise ValueError(f"{path.name}: expected a JSON array of rows")
    logger.info("catalog.file path=%s rows=%s", path, len(data))
    return data
