from datetime import datetime

from sqlalchemy import func

from smart_library.extensions import db
from smart_library.models.enums import TransactionStatus
from smart_library.models.transaction import Transaction, TransactionParticipant

class TransactionRepo:
    @staticmethod
    def get(transaction_id: int):
        return db.session.get(Transaction, transaction_id)

    @staticmethod
    def get_for_update(transaction_id: int):
        return db.session.execute(
            db.select(Transaction).where(Transaction.id == transaction_id).with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    @staticmethod
    def add(transaction: Transaction):
        db.session.add(transaction)
        return transaction

    @staticmethod
    def list_active():
        return (
            Transaction.query
            .filter(Transaction.status == TransactionStatus.ACTIVE)
            .order_by(Transaction.due_date.asc())
            .all()
        )

    @staticmethod
    def find_overdue(now: datetime):
        return (
            Transaction.query
            .filter(
                Transaction.status == TransactionStatus.ACTIVE,
                Transaction.due_date < now,
            )
            .order_by(Transaction.due_date.asc())
            .all()
        )

    @staticmethod
    def list_by_borrower(member_id: int):
        return (
            Transaction.query
            .filter_by(borrower_id=member_id)
            .order_by(Transaction.from_date.desc(), Transaction.id.desc())
            .all()
        )

    @staticmethod
    def list_by_book(book_id: int):
        return (
            Transaction.query
            .filter_by(book_id=book_id)
            .order_by(Transaction.from_date.desc(), Transaction.id.desc())
            .all()
        )

    @staticmethod
    def count_active_for_book(book_id: int) -> int:
        return Transaction.query.filter(
            Transaction.book_id == book_id,
            Transaction.status == TransactionStatus.ACTIVE,
        ).count()

    @staticmethod
    def active_member_ids(member_ids) -> set:
        """
        Which of member_ids are tied to an Active transaction, either as the
        borrower or as a listed group participant.
        """
        ids = list(member_ids)
        if not ids:
            return set()

        as_borrower = db.session.execute(
            db.select(Transaction.borrower_id).where(
                Transaction.status == TransactionStatus.ACTIVE,
                Transaction.borrower_id.in_(ids),
            )
        ).scalars().all()

        as_participant = db.session.execute(
            db.select(TransactionParticipant.member_id)
            .join(Transaction, Transaction.id == TransactionParticipant.transaction_id)
            .where(
                Transaction.status == TransactionStatus.ACTIVE,
                TransactionParticipant.member_id.in_(ids),
            )
        ).scalars().all()

        return set(as_borrower) | set(as_participant)

    @staticmethod
    def count_active():
        return Transaction.query.filter(Transaction.status == TransactionStatus.ACTIVE).count()

    @staticmethod
    def total_fines() -> int:
        total = db.session.execute(
            db.select(func.coalesce(func.sum(Transaction.fine), 0)).where(Transaction.fine > 0)
        ).scalar()
        return int(total or 0)
