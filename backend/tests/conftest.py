import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

from bonusplan import main
from bonusplan.services.catalog.adapter import load_catalog
from bonusplan.services.catalog.files import load_json_rows

DATA_DIR = Path(__file__).resolve().parent / "data"

# Rookworst (required bonus for stamppot), gehakt for chili, pesto for pasta.
BONUS_IDS = {"2001", "3002", "1002"}


@pytest.fixture(name="data_dir")
def data_dir_fixture():
    return DATA_DIR


@pytest.fixture(name="rows")
def rows_fixture():
    return (
        load_json_rows(DATA_DIR / "meals.json"),
        load_json_rows(DATA_DIR / "products.json"),
        load_json_rows(DATA_DIR / "week.json"),
    )


@pytest.fixture(name="catalog")
def catalog_fixture(rows):
    return load_catalog(*rows)


@pytest.fixture(name="bonus_ids")
def bonus_ids_fixture():
    return set(BONUS_IDS)


@pytest.fixture(name="client")
def client_fixture():
    return TestClient(main.app)
