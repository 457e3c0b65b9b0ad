"""Tests for the update_case_funds CLI adapter."""

from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

from src.adapters import update_case_funds_cli
from src.domain.models import CaseFunds, CaseRecord


def _patch(monkeypatch, results, cases=()):
    updater = MagicMock()
    updater.execute_many.return_value = results
    repository = MagicMock()
    repository.fetch_cases.return_value = list(cases)
    monkeypatch.setattr(
        update_case_funds_cli,
        "CashieringSettings",
        SimpleNamespace(from_env=lambda: "settings"),
    )
    monkeypatch.setattr(
        update_case_funds_cli, "build_database_adapter", lambda: "adapter"
    )
    monkeypatch.setattr(
        update_case_funds_cli,
        "prepare_database",
        lambda db_port, settings: "db_port",
    )
    monkeypatch.setattr(
        update_case_funds_cli,
        "build_cashiering_repository",
        lambda db_port: repository,
    )
    monkeypatch.setattr(
        update_case_funds_cli,
        "build_funds_updater",
        lambda db_port: updater,
    )
    monkeypatch.setattr(update_case_funds_cli, "get_app_logger", MagicMock)
    return updater, repository


def test_main_updates_every_case_by_default(monkeypatch, capsys):
    """Without --case-id every stored case should be refreshed."""
    funds = CaseFunds("c1", Decimal("10"), Decimal("0"))
    updater, repository = _patch(
        monkeypatch,
        {"c1": funds, "c2": funds},
        cases=[CaseRecord(id="c1"), CaseRecord(id="c2")],
    )

    exit_code = update_case_funds_cli.main([])

    assert exit_code == 0
    updater.execute_many.assert_called_once_with(["c1", "c2"])
    repository.fetch_cases.assert_called_once_with()
    assert "Updated funds for 2 of 2 cases." in capsys.readouterr().out


def test_main_reports_failed_cases(monkeypatch, capsys):
    """Failed cases should be listed and give a non-zero exit code."""
    funds = CaseFunds("c1", Decimal("10"), Decimal("0"))
    updater, repository = _patch(monkeypatch, {"c1": funds, "c9": None})

    exit_code = update_case_funds_cli.main(
        ["--case-id", "c1", "--case-id", "c9"]
    )

    output = capsys.readouterr().out
    assert exit_code == 1
    updater.execute_many.assert_called_once_with(["c1", "c9"])
    repository.fetch_cases.assert_not_called()
    assert "Updated funds for 1 of 2 cases." in output
    assert "Failed cases: c9" in output
