from sqlalchemy import func

from smart_library.extensions import db
from smart_library.models.book import Book
from smart_library.repositories.member_repo import MemberRepo
from smart_library.repositories.transaction_repo import TransactionRepo


class ReportService:
    """Read-only views over the transaction set."""

    def __init__(self, clock):
        self.clock = clock

    def active_transactions(self):
        return TransactionRepo.list_active()

    def overdue_transactions(self):
        # still Active but past due; Missing only applies after the return
        return TransactionRepo.find_overdue(self.clock.now())

    def transactions_for_member(self, member_id: int):
        return TransactionRepo.list_by_borrower(member_id)

    def transactions_for_book(self, book_id: int):
        return TransactionRepo.list_by_book(book_id)

    def dashboard_stats(self) -> dict:
        total_copies, available_copies = db.session.execute(
            db.select(
                func.coalesce(func.sum(Book.total_copies), 0),
                func.coalesce(func.sum(Book.available_copies), 0),
            )
        ).one()
        total_copies = int(total_copies or 0)
        available_copies = int(available_copies or 0)

        return {
            "total_titles": Book.query.count(),
            "total_copies": total_copies,
            "available_copies": available_copies,
            "borrowed_copies": total_copies - available_copies,
            "active_borrowings": TransactionRepo.count_active(),
            "overdue_borrowings": len(self.overdue_transactions()),
            "total_members": MemberRepo.count_members(),
            "total_fines": TransactionRepo.total_fines(),
        }
