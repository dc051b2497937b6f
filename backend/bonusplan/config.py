from pydantic_settings import BaseSettings

from bonusplan.schemas.plan import RankingMode


class Settings(BaseSettings):
    app_name: str = "bonus-meal-planner"
    env: str = "local"
    log_level: str = "INFO"

    # Catalog: "sheets" reads the Google Sheets values API, "files" reads JSON under catalog_dir.
    catalog_source: str = "sheets"
    spreadsheet_id: str = ""
    sheets_api_key: str = ""
    sheets_base_url: str = "https://sheets.googleapis.com/v4/spreadsheets"
    sheets_timeout_s: float = 30.0
    meals_range: str = "Meals!A1:Z"
    products_range: str = "Products!A1:Z"
    week_range: str = "Week!A1:Z"
    catalog_dir: str = "./data"

    bonus_url: str = "https://www.ah.nl/bonus"
    bonus_select_next_week: bool = True
    browser_headless: bool = True
    browser_timeout_ms: int = 60000
    bonus_cache_path: str = "./.bonus_products.json"
    # 0 disables the snapshot cache.
    bonus_cache_max_age_s: int = 6 * 60 * 60

    shopping_list_url: str = "https://www.ah.nl/mijnlijst/add-multiple"

    ranking_mode: RankingMode = "rank"  # "rank" (dedup + random fallback) or "match" (strict, positional)
    random_seed: int | None = None
    sort_week_by_preparation_time: bool = False

    class Config:
        env_file = ".env"


settings = Settings()
