"""SQLAlchemy implementation of PositionRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from papertrade.core.timezone import as_eastern
from papertrade.core.money import to_cents, to_shares
from papertrade.domain.models import Position
from papertrade.repositories.sqlalchemy.orm_models import PositionORM


class SqlAlchemyPositionRepository:
    """SQLAlchemy-backed position repository."""

    def __init__(self, db: Session):
        self._db = db

    def get(self, account_id: str, symbol: str) -> Optional[Position]:
        """Get the position for one symbol."""
        orm_pos = self._get_orm(account_id, symbol)
        return self._to_domain(orm_pos) if orm_pos else None

    def list_by_account(self, account_id: str) -> list[Position]:
        """List all open positions for an account."""
        orm_positions = (
            self._db.query(PositionORM)
            .filter(PositionORM.account_id == account_id)
            .order_by(PositionORM.symbol)
            .all()
        )
        return [self._to_domain(p) for p in orm_positions]

    def upsert(self, position: Position) -> Position:
        """Insert or update a position."""
        orm_pos = self._get_orm(position.account_id, position.symbol)

        if orm_pos:
            orm_pos.shares = position.shares
            orm_pos.average_price = position.average_price
            orm_pos.last_updated = position.last_updated
        else:
            orm_pos = PositionORM(
                account_id=position.account_id,
                symbol=position.symbol,
                shares=position.shares,
                average_price=position.average_price,
                last_updated=position.last_updated,
            )
            self._db.add(orm_pos)

        self._db.flush()
        return self._to_domain(orm_pos)

    def delete(self, account_id: str, symbol: str) -> None:
        """Remove a position."""
        self._db.query(PositionORM).filter(
            PositionORM.account_id == account_id,
            PositionORM.symbol == symbol,
        ).delete()
        self._db.flush()

    def _get_orm(self, account_id: str, symbol: str) -> Optional[PositionORM]:
        return (
            self._db.query(PositionORM)
            .filter(
                PositionORM.account_id == account_id,
                PositionORM.symbol == symbol,
            )
            .first()
        )

    @staticmethod
    def _to_domain(orm: PositionORM) -> Position:
        return Position(
            account_id=orm.account_id,
            symbol=orm.symbol,
            shares=to_shares(Decimal(str(orm.shares))),
            average_price=to_cents(Decimal(str(orm.average_price))),
            last_updated=as_eastern(orm.last_updated),
        )
