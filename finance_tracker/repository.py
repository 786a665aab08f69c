from typing import List

from loguru import logger
from sqlalchemy import case, delete, func, select
from sqlalchemy.exc import SQLAlchemyError

from .database import Transaction
from .models.summary import Summary
from .models.transaction import TransactionRecord


class TransactionRepository:
    """Persistence and aggregation over the transactions table.

    Every operation is a single statement in its own short-lived session,
    so the store's transactional guarantees are the only locking involved.
    """

    def __init__(self, session_factory):
        self.session_factory = session_factory

    def create(self, amount: float, category: str, description: str, type: str) -> TransactionRecord:
        """Insert one row and return it with the id and timestamp the store assigned."""
        with self.session_factory() as session:
            transaction = Transaction(
                amount=amount,
                category=category,
                description=description,
                type=type
            )
            session.add(transaction)
            try:
                session.commit()
            except SQLAlchemyError:
                session.rollback()
                raise
            # id and created_at are assigned by the store
            session.refresh(transaction)
            logger.info(f"Added transaction {transaction.id}: {transaction.amount} {transaction.type}")
            return TransactionRecord.model_validate(transaction)

    def get_all(self) -> List[TransactionRecord]:
        """Get all transactions, most recent first."""
        with self.session_factory() as session:
            rows = session.scalars(
                select(Transaction).order_by(Transaction.created_at.desc(), Transaction.id.desc())
            ).all()
            return [TransactionRecord.model_validate(row) for row in rows]

    def delete(self, transaction_id: int) -> int:
        """Delete a transaction by id.

        Returns the number of rows removed. Deleting an unknown id removes
        nothing and is not an error.
        """
        with self.session_factory() as session:
            try:
                result = session.execute(delete(Transaction).where(Transaction.id == transaction_id))
                session.commit()
            except SQLAlchemyError:
                session.rollback()
                raise
            if result.rowcount:
                logger.info(f"Deleted transaction {transaction_id}")
            else:
                logger.debug(f"No transaction with id {transaction_id} to delete")
            return result.rowcount

    def get_summary(self) -> Summary:
        """Sum income and expenses in one aggregate query.

        Rows whose type is neither "income" nor "expense" count towards neither total.
        """
        query = select(
            func.coalesce(func.sum(case((Transaction.type == 'income', Transaction.amount), else_=0)), 0),
            func.coalesce(func.sum(case((Transaction.type == 'expense', Transaction.amount), else_=0)), 0),
        )
        with self.session_factory() as session:
            income, expenses = session.execute(query).one()
        income = float(income)
        expenses = float(expenses)
        return Summary(
            total_income=income,
            total_expenses=expenses,
            net_balance=income - expenses
        )
