"""CLI adapter recomputing the funds snapshot stored on every case.

This module wires the UpdateCaseFundsUseCase to the concrete database
adapter and provides a command-line entry point for a full refresh.
"""

import argparse

from src.infrastructure.container import (
    build_cashiering_repository,
    build_database_adapter,
    build_funds_updater,
    prepare_database,
)
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import CashieringSettings


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Recompute funds held and distributed for each case."
    )
    parser.add_argument(
        "--case-id",
        action="append",
        dest="case_ids",
        help="Only update this case (may be repeated).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the funds write-back and return a process exit code."""
    args = _parse_args(argv)
    logger = get_app_logger()
    settings = CashieringSettings.from_env()
    db_port = prepare_database(build_database_adapter(), settings=settings)

    case_ids = args.case_ids
    if not case_ids:
        repository = build_cashiering_repository(db_port)
        case_ids = [case.id for case in repository.fetch_cases()]

    results = build_funds_updater(db_port).execute_many(case_ids)
    failed = sorted(
        case_id for case_id, funds in results.items() if funds is None
    )
    updated = len(results) - len(failed)

    print(f"Updated funds for {updated} of {len(results)} cases.")
    if failed:
        logger.warning(f"Funds not updated for cases: {', '.join(failed)}")
        print(f"Failed cases: {', '.join(failed)}")
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
