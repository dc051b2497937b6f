import json

import pytest

from bonusplan import __main__ as cli
from bonusplan.errors import AcquisitionFailure
from bonusplan.services import pipeline


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    # keep log lines out of the captured JSON on stdout
    monkeypatch.setattr(cli, "configure_logging", lambda level: None)


def _patch_sources(monkeypatch, rows, bonus_ids):
    async def fake_bonus():
        return set(bonus_ids)

    async def fake_catalog():
        return rows

    monkeypatch.setattr(pipeline.bonus_client, "fetch_bonus_products", fake_bonus)
    monkeypatch.setattr(pipeline.catalog_client, "fetch_catalog", fake_catalog)


def test_cli_prints_plan(monkeypatch, capsys, rows, bonus_ids):
    _patch_sources(monkeypatch, rows, bonus_ids)
    assert cli.main(["--mode", "rank", "--seed", "3"]) == 0
    plan = json.loads(capsys.readouterr().out)
    assert plan["Monday"]["Slug"] == "stamppot-boerenkool"
    assert plan["Sunday"] is None


def test_cli_match_mode(monkeypatch, capsys, rows, bonus_ids):
    _patch_sources(monkeypatch, rows, bonus_ids)
    assert cli.main(["--mode", "match"]) == 0
    plan = json.loads(capsys.readouterr().out)
    assert len(plan) == 7


def test_cli_reports_failure(monkeypatch, capsys):
    async def broken_catalog():
        raise AcquisitionFailure("catalog", "403 Forbidden")

    async def fake_bonus():
        return set()

    monkeypatch.setattr(pipeline.bonus_client, "fetch_bonus_products", fake_bonus)
    monkeypatch.setattr(pipeline.catalog_client, "fetch_catalog", broken_catalog)
    assert cli.main([]) == 1
    assert capsys.readouterr().out == ""


def test_cli_can_turn_off_configured_week_sorting(monkeypatch, capsys, rows, bonus_ids):
    _patch_sources(monkeypatch, rows, bonus_ids)
    monkeypatch.setattr(cli.settings, "sort_week_by_preparation_time", True)
    assert cli.main(["--seed", "0", "--no-sort-week"]) == 0
    plan = json.loads(capsys.readouterr().out)
    assert list(plan)[:3] == ["Monday", "Tuesday", "Wednesday"]


def test_cli_uses_configured_week_sorting(monkeypatch, capsys, rows, bonus_ids):
    _patch_sources(monkeypatch, rows, bonus_ids)
    monkeypatch.setattr(cli.settings, "sort_week_by_preparation_time", True)
    assert cli.main(["--seed", "0"]) == 0
    plan = json.loads(capsys.readouterr().out)
    assert list(plan)[:3] == ["Monday", "Wednesday", "Thursday"]
