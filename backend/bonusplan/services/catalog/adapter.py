"""Turn spreadsheet rows into validated catalog models.

Sheets return a header row followed by data rows of strings. Checkbox
columns arrive as "TRUE"/"FALSE" and are turned into booleans here,
before any model sees them.
"""
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, TypeVar

from pydantic import BaseModel, ValidationError

from bonusplan.errors import InputShapeError
from bonusplan.logging import get_logger
from bonusplan.schemas.catalog import Meal, Product, WeekDay

logger = get_logger(__name__)

BOOL_MAP = {"TRUE": True, "FALSE": False}

ModelT = TypeVar("ModelT", bound=BaseModel)


def _coerce_cell(cell: Any) -> Any:
    if cell is None or cell == "":
        return ""
    if isinstance(cell, str) and cell in BOOL_MAP:
        return BOOL_MAP[cell]
    return cell


def rows_to_records(values: list[list[Any]]) -> list[dict[str, Any]]:
    """Map each data row onto the header row. Short rows are padded with ""."""
    if len(values) < 2:
        return []
    headers = [str(h).strip() for h in values[0]]
    records: list[dict[str, Any]] = []
    for row in values[1:]:
        if not any(str(cell).strip() for cell in row if cell is not None):
            continue
        records.append({
            header: _coerce_cell(row[i] if i < len(row) else "")
            for i, header in enumerate(headers)
            if header
        })
    return records


def _describe(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'row'}: {err['msg']}"
        for err in exc.errors()
    )


def parse_rows(
    model: type[ModelT],
    rows: Iterable[ModelT | Mapping[str, Any]],
    kind: str,
) -> list[ModelT]:
    """Validate rows into ``model`` instances; already-built instances pass through."""
    parsed: list[ModelT] = []
    for index, row in enumerate(rows):
        if isinstance(row, model):
            parsed.append(row)
            continue
        try:
            parsed.append(model.model_validate(row))
        except ValidationError as e:
            raise InputShapeError(kind, index, _describe(e)) from e
    return parsed


def parse_meals(rows: Iterable[Meal | Mapping[str, Any]]) -> list[Meal]:
    meals = parse_rows(Meal, rows, "meal")
    seen: set[str] = set()
    for index, meal in enumerate(meals):
        if meal.slug in seen:
            raise InputShapeError("meal", index, f"duplicate Slug {meal.slug!r}")
        seen.add(meal.slug)
    return meals


def parse_products(rows: Iterable[Product | Mapping[str, Any]]) -> list[Product]:
    return parse_rows(Product, rows, "product")


def parse_week(rows: Iterable[WeekDay | Mapping[str, Any]]) -> list[WeekDay]:
    week = parse_rows(WeekDay, rows, "week day")
    seen: set[str] = set()
    for index, day in enumerate(week):
        if day.day in seen:
            raise InputShapeError("week day", index, f"duplicate Day {day.day!r}")
        seen.add(day.day)
    return week


@dataclass(frozen=True)
class Catalog:
    meals: list[Meal]
    products: list[Product]
    week: list[WeekDay]


def load_catalog(
    meal_rows: Iterable[Meal | Mapping[str, Any]],
    product_rows: Iterable[Product | Mapping[str, Any]],
    week_rows: Iterable[WeekDay | Mapping[str, Any]],
) -> Catalog:
    catalog = Catalog(
        meals=parse_meals(meal_rows),
        products=parse_products(product_rows),
        week=parse_week(week_rows),
    )
    known = {m.slug for m in catalog.meals}
    orphans = sorted({p.meal for p in catalog.products if p.meal not in known})
    if orphans:
        logger.warning("catalog.orphan_products meals=%s", ",".join(orphans))
    logger.info(
        "catalog.loaded meals=%s products=%s days=%s",
        len(catalog.meals),
        len(catalog.products),
        len(catalog.week),
    )
    return catalog
