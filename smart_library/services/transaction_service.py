from datetime import timedelta

from flask import current_app

from smart_library.errors import (
    EligibilityError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from smart_library.extensions import db
from smart_library.models.enums import BorrowingType, DamageType, TransactionStatus
from smart_library.models.transaction import Transaction, TransactionParticipant
from smart_library.repositories.book_repo import BookRepo
from smart_library.repositories.member_repo import MemberRepo
from smart_library.repositories.transaction_repo import TransactionRepo
from smart_library.services.fine_calculator import calculate_fine, fine_breakdown, total_of
from smart_library.services.validation import parse_enum, parse_int
from smart_library.utils.locks import KeyedLocks

LOAN_DAYS = {
    BorrowingType.INDIVIDUAL: 30,
    BorrowingType.GROUP: 180,
}
# extra members besides the borrower: 3-6 participants in total
GROUP_EXTRA_MIN = 2
GROUP_EXTRA_MAX = 5
# one point lost per 10 currency units of fine
FINE_PER_POINT = 10


class TransactionService:
    """
    Borrow / return engine.

    A member may be tied to at most one Active transaction at a time, as the
    borrower or as a listed group participant. The availability check plus
    decrement and the eligibility check plus insert run under per-book and
    per-member locks and commit together.
    """

    def __init__(self, catalog, membership, clock, locks: KeyedLocks | None = None):
        self.catalog = catalog
        self.membership = membership
        self.clock = clock
        self.locks = locks if locks is not None else KeyedLocks()

    def borrow_book(self, book_id, borrower_id, borrowing_type=BorrowingType.INDIVIDUAL,
                    group_member_ids=None) -> Transaction:
        book_id = parse_int(book_id, "book_id")
        borrower_id = parse_int(borrower_id, "borrower_id")
        borrowing_type = parse_enum(BorrowingType, borrowing_type, "borrowing_type")
        if group_member_ids is not None and not isinstance(group_member_ids, (list, tuple)):
            raise ValidationError("group_members must be a list of member ids")
        group_ids = [parse_int(x, "group member id") for x in (group_member_ids or [])]

        keys = [("book", book_id), ("member", borrower_id)]
        keys += [("member", gid) for gid in group_ids]

        with self.locks.hold(keys):
            try:
                book = BookRepo.get_for_update(book_id)
                borrower = MemberRepo.get_for_update(borrower_id)
                if not book:
                    raise NotFoundError(f"Book not found: id={book_id}")
                if not borrower:
                    raise NotFoundError(f"Member not found: id={borrower_id}")

                if book.available_copies < 1:
                    raise EligibilityError("No copies available")

                self._check_group(borrowing_type, borrower_id, group_ids)

                busy = TransactionRepo.active_member_ids([borrower_id] + group_ids)
                if borrower_id in busy:
                    raise EligibilityError("Member already has an active borrowing")
                busy_group = sorted(busy - {borrower_id})
                if busy_group:
                    raise EligibilityError(
                        f"Group members already have an active borrowing: {busy_group}"
                    )

                now = self.clock.now()
                tx = Transaction(
                    book_id=book.id,
                    book_name=book.title,
                    borrower_id=borrower.id,
                    borrower_name=borrower.full_name,
                    borrowing_type=borrowing_type,
                    from_date=now,
                    due_date=now + timedelta(days=LOAN_DAYS[borrowing_type]),
                    status=TransactionStatus.ACTIVE,
                    fine=0,
                    created_at=now,
                    updated_at=now,
                )
                tx.participants = [TransactionParticipant(member_id=gid) for gid in group_ids]

                TransactionRepo.add(tx)
                self.catalog.decrement_availability(book.id, commit=False)
                db.session.commit()
            except Exception:
                db.session.rollback()
                raise

        current_app.logger.info(
            f"[transactions] borrow ok id={tx.id} book={book_id} borrower={borrower_id} "
            f"type={borrowing_type.value} due={tx.due_date.isoformat()}"
        )
        return tx

    @staticmethod
    def _check_group(borrowing_type, borrower_id, group_ids):
        if borrowing_type != BorrowingType.GROUP:
            if group_ids:
                raise ValidationError("Group members are only allowed for Group borrowing")
            return

        if not GROUP_EXTRA_MIN <= len(group_ids) <= GROUP_EXTRA_MAX:
            raise ValidationError("Group must have 3-6 members (including borrower)")
        if len(set(group_ids)) != len(group_ids):
            raise ValidationError("Group members must be distinct")
        if borrower_id in group_ids:
            raise ValidationError("Borrower must not be listed as a group member")

        found = {m.id for m in MemberRepo.get_many(group_ids)}
        missing = [gid for gid in group_ids if gid not in found]
        if missing:
            raise NotFoundError(f"Group members not found: {missing}")

    def return_book(self, transaction_id, damage=DamageType.NONE):
        """
        Close an Active transaction. Returns (transaction, fine).

        Returned after the due date -> Missing, otherwise Returned. The borrower
        loses floor(fine / 10) points, never dropping below zero.
        """
        transaction_id = parse_int(transaction_id, "transaction_id")
        damage = parse_enum(DamageType, damage or DamageType.NONE, "damage_type")

        tx = TransactionRepo.get(transaction_id)
        if not tx:
            raise NotFoundError(f"Transaction not found: id={transaction_id}")

        keys = [("book", tx.book_id), ("member", tx.borrower_id)]
        with self.locks.hold(keys):
            try:
                tx = TransactionRepo.get_for_update(transaction_id)
                if tx.status != TransactionStatus.ACTIVE:
                    raise InvalidStateError(
                        f"Transaction {transaction_id} is already {tx.status.value}"
                    )

                book = self.catalog.get_book(tx.book_id)
                now = self.clock.now()
                fine = calculate_fine(tx, book.price, damage, now=now)

                tx.return_date = now
                tx.status = (
                    TransactionStatus.MISSING if now > tx.due_date else TransactionStatus.RETURNED
                )
                tx.fine = fine
                tx.damage_type = damage
                tx.updated_at = now

                self.catalog.increment_availability(book.id, commit=False)
                self.membership.adjust_points(tx.borrower_id, -(fine // FINE_PER_POINT), commit=False)
                db.session.commit()
            except Exception:
                db.session.rollback()
                raise

        current_app.logger.info(
            f"[transactions] return ok id={tx.id} status={tx.status.value} "
            f"damage={damage.value} fine={fine}"
        )
        return tx, fine

    def preview_fine(self, transaction_id, damage=DamageType.NONE):
        """Provisional fine as of now; nothing is written. Returns (fine, items)."""
        transaction_id = parse_int(transaction_id, "transaction_id")
        damage = parse_enum(DamageType, damage or DamageType.NONE, "damage_type")

        tx = TransactionRepo.get(transaction_id)
        if not tx:
            raise NotFoundError(f"Transaction not found: id={transaction_id}")
        book = self.catalog.get_book(tx.book_id)

        returned_at = tx.return_date or self.clock.now()
        items = fine_breakdown(tx.due_date, book.price, damage, returned_at)
        return total_of(items), items
