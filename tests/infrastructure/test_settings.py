"""Tests for infrastructure settings."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from src.infrastructure import settings as settings_module
from src.infrastructure.settings import (
    DEFAULT_CASE_LIST_LIMIT,
    CashieringSettings,
)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    monkeypatch.setattr(settings_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.setattr(settings_module, "get_app_logger", MagicMock)
    for name in (
        "VAT_CONTROL_ACCOUNT_CODE",
        "VOUCHER_STORAGE_DIR",
        "CASE_LIST_LIMIT",
        "CASHIERING_AUTO_SCHEMA",
    ):
        monkeypatch.delenv(name, raising=False)


def test_from_env_defaults(monkeypatch, tmp_path: Path) -> None:
    """Unset variables should fall back to defaults."""
    monkeypatch.setattr(settings_module, "get_project_root", lambda: tmp_path)

    settings = CashieringSettings.from_env()

    assert settings.vat_control_code == "VAT003"
    assert settings.case_list_limit == DEFAULT_CASE_LIST_LIMIT
    assert settings.voucher_storage_dir == tmp_path / "data" / "vouchers"
    assert settings.auto_schema is True


def test_from_env_reads_values(monkeypatch, tmp_path: Path) -> None:
    """Configured values should be parsed."""
    monkeypatch.setenv("VAT_CONTROL_ACCOUNT_CODE", " VATC ")
    monkeypatch.setenv("VOUCHER_STORAGE_DIR", str(tmp_path))
    monkeypatch.setenv("CASE_LIST_LIMIT", "25")
    monkeypatch.setenv("CASHIERING_AUTO_SCHEMA", "off")

    settings = CashieringSettings.from_env()

    assert settings.vat_control_code == "VATC"
    assert settings.voucher_storage_dir == tmp_path.resolve()
    assert settings.case_list_limit == 25
    assert settings.auto_schema is False


def test_from_env_accepts_file_uri(monkeypatch, tmp_path: Path) -> None:
    """file:// URIs should resolve to filesystem paths."""
    monkeypatch.setenv("VOUCHER_STORAGE_DIR", tmp_path.resolve().as_uri())

    settings = CashieringSettings.from_env()

    assert settings.voucher_storage_dir == tmp_path.resolve()


@pytest.mark.parametrize("raw", ["abc", "0", "-5"])
def test_parse_limit_falls_back_on_invalid_values(raw) -> None:
    """Invalid limits should warn and use the default."""
    logger = MagicMock()

    assert CashieringSettings._parse_limit(raw, logger) == (
        DEFAULT_CASE_LIST_LIMIT
    )
    logger.warning.assert_called_once()


def test_parse_flag_falls_back_on_unknown_values() -> None:
    """Unknown booleans should warn and use the default."""
    logger = MagicMock()

    assert CashieringSettings._parse_flag("maybe", True, logger) is True
    assert CashieringSettings._parse_flag("YES", False, logger) is True
    logger.warning.assert_called_once()
