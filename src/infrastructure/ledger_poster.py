"""Ledger posting adapter writing double entries with SQLAlchemy."""

from dataclasses import asdict
import uuid

from sqlalchemy import text

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.ledger import LedgerPostingPort
from src.domain.errors import LedgerPostingError
from src.domain.models import (
    AccountingEntryRecord,
    ChartOfAccountRecord,
    DoubleEntryRequest,
)
from src.domain.services.ledger import VAT_ACCOUNTS, build_double_entry_lines
from src.domain.services.transactions import parse_date
from src.infrastructure.logging.logger import get_app_logger


SELECT_CHART_SQL = text(
    """
    SELECT account_code, account_name, account_type, account_group
    FROM chart_of_accounts
    """
)

INSERT_ACCOUNT_SQL = text(
    """
    INSERT INTO chart_of_accounts (
        account_code,
        account_name,
        account_type,
        account_group
    )
    VALUES (
        :account_code,
        :account_name,
        :account_type,
        :account_group
    )
    """
)

INSERT_ENTRY_SQL = text(
    """
    INSERT INTO accounting_entries (
        id,
        case_id,
        transaction_id,
        account_code,
        account_name,
        account_type,
        account_group,
        debit_amount,
        credit_amount,
        entry_date,
        description,
        journal_type,
        reference
    )
    VALUES (
        :id,
        :case_id,
        :transaction_id,
        :account_code,
        :account_name,
        :account_type,
        :account_group,
        :debit_amount,
        :credit_amount,
        :entry_date,
        :description,
        :journal_type,
        :reference
    )
    """
)


class SqlAlchemyLedgerPoster(LedgerPostingPort):
    """Post the accounting entries of a transaction in one database
    transaction.

    VAT receivable and payable accounts are added to the chart of accounts
    when missing.
    """

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the poster.

        Args:
            db_port: Port providing access to the cashiering engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()

    def post_double_entry(
        self,
        request: DoubleEntryRequest,
    ) -> list[AccountingEntryRecord]:
        """Build and insert the entries for ``request``.

        Args:
            request: Transaction amounts and codes to post.

        Returns:
            list[AccountingEntryRecord]: Inserted entries.

        Raises:
            LedgerPostingError: If the entries cannot be built.
        """
        engine = self._db_port.get_cashiering_engine()
        with engine.begin() as conn:
            chart = {
                row.account_code: ChartOfAccountRecord(
                    account_code=row.account_code,
                    account_name=row.account_name or "",
                    account_type=row.account_type or "",
                    account_group=row.account_group or "",
                )
                for row in conn.execute(SELECT_CHART_SQL).all()
            }
            for account in VAT_ACCOUNTS:
                if account.account_code not in chart:
                    conn.execute(INSERT_ACCOUNT_SQL, asdict(account))
                    chart[account.account_code] = account
                    self._logger.info(
                        f"Created missing VAT account {account.account_code}"
                    )

            lines = build_double_entry_lines(request, chart)
            try:
                entry_date = parse_date(request.transaction_date)
            except (TypeError, ValueError) as exc:
                raise LedgerPostingError(
                    f"Invalid transaction date: {request.transaction_date}"
                ) from exc
            entry_day = entry_date.isoformat() if entry_date else None
            reference = request.reference or request.transaction_id
            rows = [
                {
                    "id": uuid.uuid4().hex,
                    "case_id": request.case_id,
                    "transaction_id": request.transaction_id,
                    "account_code": line.account_code,
                    "account_name": line.account_name,
                    "account_type": line.account_type,
                    "account_group": line.account_group,
                    "debit_amount": str(line.debit_amount),
                    "credit_amount": str(line.credit_amount),
                    "entry_date": entry_day,
                    "description": line.description,
                    "journal_type": line.journal_type,
                    "reference": reference,
                }
                for line in lines
            ]
            conn.execute(INSERT_ENTRY_SQL, rows)

        self._logger.info(
            f"Posted {len(rows)} entries for transaction "
            f"{request.transaction_id}"
        )
        return [
            AccountingEntryRecord(
                id=row["id"],
                case_id=row["case_id"],
                transaction_id=row["transaction_id"],
                account_code=row["account_code"],
                debit_amount=line.debit_amount,
                credit_amount=line.credit_amount,
                entry_date=entry_date,
                description=row["description"],
                journal_type=row["journal_type"],
            )
            for row, line in zip(rows, lines)
        ]


__all__ = ["SqlAlchemyLedgerPoster"]
