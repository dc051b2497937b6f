"""Catalog rows as read from the spreadsheet: meals, products and the week.

Field aliases match the sheet headers (``PreparationTimeMinutes``, ``ID``,
...); snake_case names are accepted as well. All models are frozen.
"""
import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

_ROW_CONFIG = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


class Meal(BaseModel):
    model_config = _ROW_CONFIG

    slug: str = Field(..., alias="Slug", min_length=1)
    name: str = Field("", alias="Meal")
    preparation_time_minutes: int = Field(..., alias="PreparationTimeMinutes", ge=0)
    can_be_leftovers: bool = Field(..., alias="CanBeLeftovers")
    number_of_people: int = Field(..., alias="NumberOfPeople", gt=0)

    @field_validator("slug")
    @classmethod
    def strip_slug(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Slug cannot be empty")
        return v

    @field_validator("can_be_leftovers", mode="before")
    @classmethod
    def blank_is_false(cls, v):
        return False if _blank_to_none(v) is None else v


class Product(BaseModel):
    """An ingredient of exactly one meal, linked by ``Meal`` = ``Meal.Slug``."""

    model_config = _ROW_CONFIG

    meal: str = Field(..., alias="Meal", min_length=1)
    id: str = Field(..., alias="ID", min_length=1)
    quantity: float = Field(..., alias="Quantity", gt=0)
    max_shelf_life_in_days: float | None = Field(None, alias="MaxShelfLifeInDays", ge=0)
    is_bonus_required: bool = Field(False, alias="IsBonusRequired")
    url: str = Field("", alias="URL")

    @field_validator("id", "meal", mode="before")
    @classmethod
    def coerce_identifier(cls, v):
        """Sheets and JSON files may hand over numeric identifiers."""
        if isinstance(v, bool):
            raise ValueError("identifier must be a string or number")
        if isinstance(v, float) and v.is_integer():
            v = int(v)
        if isinstance(v, int):
            return str(v)
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("max_shelf_life_in_days", mode="before")
    @classmethod
    def blank_shelf_life(cls, v):
        return _blank_to_none(v)

    @field_validator("is_bonus_required", mode="before")
    @classmethod
    def blank_is_false(cls, v):
        # Unticked checkboxes come through as empty cells.
        return False if _blank_to_none(v) is None else v

    @field_validator("url", mode="before")
    @classmethod
    def blank_url(cls, v):
        return "" if v is None else v

    @property
    def has_shelf_life(self) -> bool:
        return bool(self.max_shelf_life_in_days)


class WeekDay(BaseModel):
    model_config = _ROW_CONFIG

    day: str = Field(..., alias="Day")
    date: datetime.date = Field(..., alias="Date")
    number_of_people: int = Field(..., alias="NumberOfPeople", ge=0)
    number_of_people_leftovers: int = Field(0, alias="NumberOfPeopleLeftovers", ge=0)
    max_preparation_time: int = Field(..., alias="MaxPreparationTime", ge=0)

    @field_validator("day")
    @classmethod
    def validate_day(cls, v: str) -> str:
        name = v.strip().capitalize()
        if name not in DAY_NAMES:
            raise ValueError(f"Day must be one of {', '.join(DAY_NAMES)}")
        return name

    @field_validator("number_of_people_leftovers", mode="before")
    @classmethod
    def blank_leftovers(cls, v):
        return 0 if _blank_to_none(v) is None else v
