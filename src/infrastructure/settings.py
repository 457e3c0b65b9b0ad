"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass, field
import os
from pathlib import Path
from urllib.parse import unquote, urlparse

import dotenv

from src.domain.constants import VAT_CONTROL_CODE
from src.infrastructure.logging.logger import get_app_logger
from src.utils.utils import get_project_root


DEFAULT_CASE_LIST_LIMIT = 200

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _default_voucher_dir() -> Path:
    return get_project_root() / "data" / "vouchers"


@dataclass(frozen=True)
class CashieringSettings:
    """Settings for the cashiering adapters.

    Attributes:
        vat_control_code: Ledger code of the VAT control account.
        case_list_limit: Maximum number of cases loaded per snapshot.
        voucher_storage_dir: Directory receiving voucher files.
        auto_schema: Create missing tables on startup.
    """

    vat_control_code: str = VAT_CONTROL_CODE
    case_list_limit: int = DEFAULT_CASE_LIST_LIMIT
    voucher_storage_dir: Path = field(default_factory=_default_voucher_dir)
    auto_schema: bool = True

    @classmethod
    def from_env(cls) -> "CashieringSettings":
        """Build settings from environment variables.

        Values from a ``.env`` file are loaded first. Invalid values are
        logged and replaced with defaults.

        Returns:
            CashieringSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        vat_code = (
            os.getenv("VAT_CONTROL_ACCOUNT_CODE", "").strip()
            or VAT_CONTROL_CODE
        )
        raw_dir = os.getenv("VOUCHER_STORAGE_DIR")
        voucher_dir = (
            cls._normalize_path(raw_dir)
            if raw_dir
            else _default_voucher_dir()
        )
        return cls(
            vat_control_code=vat_code,
            case_list_limit=cls._parse_limit(
                os.getenv("CASE_LIST_LIMIT"),
                logger=logger,
            ),
            voucher_storage_dir=voucher_dir,
            auto_schema=cls._parse_flag(
                os.getenv("CASHIERING_AUTO_SCHEMA"),
                default=True,
                logger=logger,
            ),
        )

    @staticmethod
    def _parse_limit(raw: str | None, logger) -> int:
        """Parse the case list limit, falling back to the default.

        Args:
            raw: Raw environment value.
            logger: Logger used for warnings.

        Returns:
            int: Positive limit.
        """
        if raw is None or not raw.strip():
            return DEFAULT_CASE_LIST_LIMIT
        try:
            value = int(raw)
        except ValueError:
            logger.warning(
                f"Invalid CASE_LIST_LIMIT={raw!r}; "
                f"using {DEFAULT_CASE_LIST_LIMIT}"
            )
            return DEFAULT_CASE_LIST_LIMIT
        if value <= 0:
            logger.warning(
                f"CASE_LIST_LIMIT must be positive; "
                f"using {DEFAULT_CASE_LIST_LIMIT}"
            )
            return DEFAULT_CASE_LIST_LIMIT
        return value

    @staticmethod
    def _parse_flag(raw: str | None, default: bool, logger) -> bool:
        if raw is None or not raw.strip():
            return default
        lowered = raw.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        logger.warning(f"Invalid boolean value {raw!r}; using {default}")
        return default

    @staticmethod
    def _normalize_path(raw_path: str) -> Path:
        """Normalize a directory path or ``file://`` URI.

        Args:
            raw_path: Raw path string.

        Returns:
            Path: Absolute filesystem path.
        """
        parsed = urlparse(raw_path)
        if parsed.scheme == "file":
            raw_path = unquote(parsed.path)
        return Path(raw_path).expanduser().resolve()


__all__ = ["CashieringSettings", "DEFAULT_CASE_LIST_LIMIT"]
