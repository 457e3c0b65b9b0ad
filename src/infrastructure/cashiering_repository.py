"""SQLAlchemy repository for cashiering records."""

from collections.abc import Mapping
from datetime import date
from decimal import Decimal
import json
from typing import Any

from sqlalchemy import text

from src.application.ports.cashiering_repository import (
    CashieringRepositoryPort,
    CashieringWriterPort,
)
from src.application.ports.database import DatabaseEnginePort
from src.domain.errors import TransactionNotFoundError
from src.domain.models import (
    AccountingEntryRecord,
    BankDetails,
    BondIncrease,
    CaseFunds,
    CaseRecord,
    CashieringUser,
    ChartOfAccountRecord,
    TransactionRecord,
)
from src.domain.services.transactions import parse_date
from src.infrastructure.logging.logger import get_app_logger


CASE_COLUMNS = """
    id, company_name, case_reference, case_type, administrator_name,
    bank_details, secondary_bank_details, initial_bond_value,
    bond_increases, soa_etr, appointment_date, closure_date, status,
    bonding_archived, total_funds_held, total_funds_distributed
"""

TRANSACTION_COLUMNS = """
    id, case_id, transaction_type, account_type, target_account, status,
    amount, net_amount, vat_amount, account_code, bank_request_date,
    transaction_date, description, payee_name, invoice_number, reference,
    approver_name, approver_signed_by, approver_signed_date, approver_grade
"""

ENTRY_COLUMNS = """
    id, case_id, transaction_id, account_code, debit_amount, credit_amount,
    entry_date, description, journal_type
"""

SELECT_TRANSACTIONS_SQL = text(
    f"SELECT {TRANSACTION_COLUMNS} FROM transactions ORDER BY id"
)

SELECT_TRANSACTION_SQL = text(
    f"SELECT {TRANSACTION_COLUMNS} FROM transactions WHERE id = :id"
)

SELECT_ENTRIES_SQL = text(
    f"SELECT {ENTRY_COLUMNS} FROM accounting_entries ORDER BY id"
)

SELECT_ENTRIES_FOR_TRANSACTION_SQL = text(
    f"""
    SELECT {ENTRY_COLUMNS}
    FROM accounting_entries
    WHERE transaction_id = :transaction_id
    ORDER BY id
    """
)

SELECT_CHART_SQL = text(
    """
    SELECT account_code, account_name, account_type, account_group
    FROM chart_of_accounts
    ORDER BY account_code
    """
)

SELECT_USERS_SQL = text(
    """
    SELECT email, full_name, grade, signature_image_url
    FROM users
    ORDER BY email
    """
)

SELECT_CASE_SQL = text(f"SELECT {CASE_COLUMNS} FROM cases WHERE id = :id")

UPDATE_CASE_FUNDS_SQL = text(
    """
    UPDATE cases
    SET total_funds_held = :total_funds_held,
        total_funds_distributed = :total_funds_distributed
    WHERE id = :case_id
    """
)

DELETE_TRANSACTION_SQL = text("DELETE FROM transactions WHERE id = :id")

DELETE_ENTRY_SQL = text("DELETE FROM accounting_entries WHERE id = :id")

# Columns a caller may change through update_transaction.
UPDATABLE_TRANSACTION_COLUMNS = frozenset(
    {
        "status",
        "amount",
        "net_amount",
        "vat_amount",
        "account_code",
        "transaction_date",
        "description",
        "payee_name",
        "invoice_number",
        "reference",
        "approver_name",
        "approver_signed_by",
        "approver_signed_date",
        "approver_grade",
        "approver_signature_url",
    }
)


class SqlAlchemyCashieringRepository(
    CashieringRepositoryPort,
    CashieringWriterPort,
):
    """Repository reading and writing cashiering tables with SQLAlchemy.

    Bank details and bond increases are stored as JSON text and decoded
    here; malformed JSON is logged and read as empty.
    """

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the cashiering engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()

    def fetch_cases(self, limit: int | None = None) -> list[CaseRecord]:
        sql = f"SELECT {CASE_COLUMNS} FROM cases ORDER BY created_date DESC, id"
        params: dict[str, Any] = {}
        if limit:
            sql += " LIMIT :limit"
            params["limit"] = int(limit)
        rows = self._fetch_all(text(sql), params)
        cases = [self._to_case(row._mapping) for row in rows]
        self._logger.info(f"Fetched {len(cases)} cases")
        return cases

    def fetch_case(self, case_id: str) -> CaseRecord | None:
        rows = self._fetch_all(SELECT_CASE_SQL, {"id": case_id})
        if not rows:
            return None
        return self._to_case(rows[0]._mapping)

    def fetch_transactions(self) -> list[TransactionRecord]:
        rows = self._fetch_all(SELECT_TRANSACTIONS_SQL)
        transactions = [self._to_transaction(row._mapping) for row in rows]
        self._logger.info(f"Fetched {len(transactions)} transactions")
        return transactions

    def fetch_transaction(
        self,
        transaction_id: str,
    ) -> TransactionRecord | None:
        rows = self._fetch_all(SELECT_TRANSACTION_SQL, {"id": transaction_id})
        if not rows:
            return None
        return self._to_transaction(rows[0]._mapping)

    def fetch_accounting_entries(self) -> list[AccountingEntryRecord]:
        rows = self._fetch_all(SELECT_ENTRIES_SQL)
        entries = [self._to_entry(row._mapping) for row in rows]
        self._logger.info(f"Fetched {len(entries)} accounting entries")
        return entries

    def fetch_entries_for_transaction(
        self,
        transaction_id: str,
    ) -> list[AccountingEntryRecord]:
        rows = self._fetch_all(
            SELECT_ENTRIES_FOR_TRANSACTION_SQL,
            {"transaction_id": transaction_id},
        )
        return [self._to_entry(row._mapping) for row in rows]

    def fetch_chart_of_accounts(self) -> list[ChartOfAccountRecord]:
        rows = self._fetch_all(SELECT_CHART_SQL)
        return [
            ChartOfAccountRecord(
                account_code=str(row.account_code),
                account_name=row.account_name or "",
                account_type=row.account_type or "",
                account_group=row.account_group or "",
            )
            for row in rows
        ]

    def fetch_users(self) -> list[CashieringUser]:
        rows = self._fetch_all(SELECT_USERS_SQL)
        return [
            CashieringUser(
                email=row.email,
                full_name=row.full_name or "",
                grade=row.grade or "",
                signature_image_url=row.signature_image_url or "",
            )
            for row in rows
        ]

    def update_case_funds(self, funds: CaseFunds) -> None:
        engine = self._db_port.get_cashiering_engine()
        with engine.begin() as conn:
            conn.execute(
                UPDATE_CASE_FUNDS_SQL,
                {
                    "case_id": funds.case_id,
                    "total_funds_held": _bind(funds.total_funds_held),
                    "total_funds_distributed": _bind(
                        funds.total_funds_distributed
                    ),
                },
            )

    def update_transaction(
        self,
        transaction_id: str,
        changes: Mapping[str, Any],
    ) -> TransactionRecord:
        unknown = set(changes) - UPDATABLE_TRANSACTION_COLUMNS
        if unknown:
            raise ValueError(
                f"Cannot update transaction columns: {sorted(unknown)}"
            )
        if changes:
            assignments = ", ".join(
                f"{column} = :{column}" for column in sorted(changes)
            )
            params = {column: _bind(value) for column, value in changes.items()}
            params["id"] = transaction_id
            engine = self._db_port.get_cashiering_engine()
            with engine.begin() as conn:
                result = conn.execute(
                    text(
                        f"UPDATE transactions SET {assignments} WHERE id = :id"
                    ),
                    params,
                )
                if result.rowcount == 0:
                    raise TransactionNotFoundError(
                        f"Transaction {transaction_id} not found"
                    )
        updated = self.fetch_transaction(transaction_id)
        if updated is None:
            raise TransactionNotFoundError(
                f"Transaction {transaction_id} not found"
            )
        self._logger.info(
            f"Updated transaction {transaction_id}: {sorted(changes)}"
        )
        return updated

    def delete_transaction(self, transaction_id: str) -> None:
        self._execute(DELETE_TRANSACTION_SQL, {"id": transaction_id})

    def delete_accounting_entry(self, entry_id: str) -> None:
        self._execute(DELETE_ENTRY_SQL, {"id": entry_id})

    def _fetch_all(self, query, params: Mapping[str, Any] | None = None):
        engine = self._db_port.get_cashiering_engine()
        with engine.connect() as conn:
            return conn.execute(query, dict(params or {})).all()

    def _execute(self, query, params: Mapping[str, Any]) -> None:
        engine = self._db_port.get_cashiering_engine()
        with engine.begin() as conn:
            conn.execute(query, dict(params))

    def _to_case(self, row: Mapping[str, Any]) -> CaseRecord:
        case_id = str(row["id"])
        increases = self._decode_json(row["bond_increases"], case_id)
        return CaseRecord(
            id=case_id,
            company_name=row["company_name"] or "",
            case_reference=row["case_reference"] or "",
            case_type=row["case_type"] or "",
            administrator_name=row["administrator_name"] or "",
            bank_details=self._to_bank_details(row["bank_details"], case_id),
            secondary_bank_details=self._to_bank_details(
                row["secondary_bank_details"],
                case_id,
            ),
            initial_bond_value=_raw_amount(row["initial_bond_value"]),
            bond_increases=tuple(
                BondIncrease(
                    increase_value=_raw_amount(item.get("increase_value")),
                    increase_date=self._to_date(
                        item.get("increase_date"),
                        case_id,
                    ),
                )
                for item in (increases if isinstance(increases, list) else [])
                if isinstance(item, dict)
            ),
            soa_etr=_raw_amount(row["soa_etr"]),
            appointment_date=self._to_date(row["appointment_date"], case_id),
            closure_date=self._to_date(row["closure_date"], case_id),
            status=row["status"] or "",
            bonding_archived=bool(row["bonding_archived"]),
            total_funds_held=row["total_funds_held"],
            total_funds_distributed=row["total_funds_distributed"],
        )

    def _to_bank_details(self, raw, case_id: str) -> BankDetails | None:
        data = self._decode_json(raw, case_id)
        if not isinstance(data, dict):
            return None
        return BankDetails(
            account_name=str(data.get("account_name") or ""),
            bank_name=str(data.get("bank_name") or ""),
            account_number=str(data.get("account_number") or ""),
            sort_code=str(data.get("sort_code") or ""),
            account_type=str(data.get("account_type") or ""),
            chart_of_accounts=str(data.get("chart_of_accounts") or ""),
        )

    def _decode_json(self, raw, case_id: str):
        if raw is None or raw == "":
            return None
        if isinstance(raw, (dict, list)):
            return raw
        try:
            return json.loads(raw)
        except (TypeError, ValueError) as exc:
            self._logger.warning(
                f"Ignoring malformed JSON on case {case_id}: {exc}"
            )
            return None

    def _to_date(self, raw, case_id: str) -> date | None:
        try:
            return parse_date(raw)
        except (TypeError, ValueError) as exc:
            self._logger.warning(
                f"Ignoring invalid date on case {case_id}: {exc}"
            )
            return None

    @staticmethod
    def _to_transaction(row: Mapping[str, Any]) -> TransactionRecord:
        return TransactionRecord(
            id=str(row["id"]),
            case_id=str(row["case_id"]),
            transaction_type=row["transaction_type"] or "",
            account_type=row["account_type"] or "",
            target_account=row["target_account"] or "",
            status=row["status"] or "",
            amount=row["amount"],
            net_amount=row["net_amount"],
            vat_amount=row["vat_amount"],
            account_code=row["account_code"] or "",
            bank_request_date=row["bank_request_date"],
            transaction_date=row["transaction_date"],
            description=row["description"] or "",
            payee_name=row["payee_name"] or "",
            invoice_number=row["invoice_number"] or "",
            reference=row["reference"] or "",
            approver_name=row["approver_name"] or "",
            approver_signed_by=row["approver_signed_by"] or "",
            approver_signed_date=row["approver_signed_date"] or "",
            approver_grade=row["approver_grade"] or "",
        )

    @staticmethod
    def _to_entry(row: Mapping[str, Any]) -> AccountingEntryRecord:
        return AccountingEntryRecord(
            id=str(row["id"]),
            case_id=str(row["case_id"]),
            transaction_id=row["transaction_id"],
            account_code=row["account_code"] or "",
            debit_amount=row["debit_amount"],
            credit_amount=row["credit_amount"],
            entry_date=row["entry_date"],
            description=row["description"] or "",
            journal_type=row["journal_type"] or "",
        )


def _raw_amount(value):
    """Return stored amounts as delivered, with missing values as zero."""
    if value is None or value == "":
        return Decimal("0")
    return value


def _bind(value):
    """Convert values the DB-API drivers may not accept."""
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, date):
        return value.isoformat()
    return value


__all__ = ["SqlAlchemyCashieringRepository", "UPDATABLE_TRANSACTION_COLUMNS"]
