"""SQLAlchemy implementation of TransactionRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from papertrade.core.timezone import as_eastern
from papertrade.core.money import to_cents, to_shares
from papertrade.domain.models import Transaction
from papertrade.repositories.sqlalchemy.orm_models import TransactionORM


class SqlAlchemyTransactionRepository:
    """SQLAlchemy-backed append-only transaction log."""

    def __init__(self, db: Session):
        self._db = db

    def append(self, transaction: Transaction) -> Transaction:
        """Append a transaction."""
        orm_txn = TransactionORM(
            txn_id=transaction.txn_id,
            account_id=transaction.account_id,
            symbol=transaction.symbol,
            shares=transaction.shares,
            price=transaction.price,
            side=transaction.side,
            timestamp=transaction.timestamp,
        )
        self._db.add(orm_txn)
        self._db.flush()
        return self._to_domain(orm_txn)

    def get_by_id(self, txn_id: str) -> Optional[Transaction]:
        """Retrieve transaction by ID."""
        orm_txn = self._db.query(TransactionORM).filter(
            TransactionORM.txn_id == txn_id
        ).first()
        return self._to_domain(orm_txn) if orm_txn else None

    def list_by_account(self, account_id: str) -> list[Transaction]:
        """List transactions for an account, oldest first."""
        query = (
            self._db.query(TransactionORM)
            .filter(TransactionORM.account_id == account_id)
            .order_by(TransactionORM.timestamp, TransactionORM.txn_id)
        )
        return [self._to_domain(t) for t in query.all()]

    @staticmethod
    def _to_domain(orm: TransactionORM) -> Transaction:
        """Convert ORM model to domain model."""
        return Transaction(
            txn_id=orm.txn_id,
            account_id=orm.account_id,
            symbol=orm.symbol,
            shares=to_shares(Decimal(str(orm.shares))),
            price=to_cents(Decimal(str(orm.price))),
            side=orm.side,
            timestamp=as_eastern(orm.timestamp),
        )
