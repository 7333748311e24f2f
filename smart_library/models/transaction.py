from smart_library.extensions import db
from smart_library.models.enums import (
    BorrowingType,
    DamageType,
    TransactionStatus,
    enum_values,
)
from smart_library.utils.clock import utcnow


def _iso(value):
    return value.isoformat() if value else None


class Transaction(db.Model):
    """
    One borrow of one copy of a book.

    book_id / borrower_id are plain ids, not foreign keys: history survives
    deletion of the book or member. book_name / borrower_name are snapshots
    taken at borrow time and are not refreshed on later renames.
    """
    __tablename__ = "transactions"

    id = db.Column(db.Integer, primary_key=True)

    book_id = db.Column(db.Integer, nullable=False, index=True)
    book_name = db.Column(db.String(200), nullable=False)
    borrower_id = db.Column(db.Integer, nullable=False, index=True)
    borrower_name = db.Column(db.String(200), nullable=False)

    borrowing_type = db.Column(
        db.Enum(BorrowingType, values_callable=enum_values, native_enum=False, length=20),
        nullable=False,
        default=BorrowingType.INDIVIDUAL,
    )

    from_date = db.Column(db.DateTime, nullable=False, index=True)
    due_date = db.Column(db.DateTime, nullable=False, index=True)
    return_date = db.Column(db.DateTime, nullable=True)

    status = db.Column(
        db.Enum(TransactionStatus, values_callable=enum_values, native_enum=False, length=20),
        nullable=False,
        default=TransactionStatus.ACTIVE,
        index=True,
    )
    fine = db.Column(db.Integer, nullable=False, default=0)
    damage_type = db.Column(
        db.Enum(DamageType, values_callable=enum_values, native_enum=False, length=20),
        nullable=True,
    )

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    participants = db.relationship(
        "TransactionParticipant",
        backref="transaction",
        cascade="all, delete-orphan",
        order_by="TransactionParticipant.id",
    )

    __table_args__ = (
        db.CheckConstraint("fine >= 0", name="ck_transactions_fine_non_negative"),
    )

    @property
    def group_member_ids(self):
        return [p.member_id for p in self.participants]

    @property
    def is_active(self):
        return self.status == TransactionStatus.ACTIVE

    def to_dict(self):
        return {
            "id": self.id,
            "book_id": self.book_id,
            "book_name": self.book_name,
            "borrower_id": self.borrower_id,
            "borrower_name": self.borrower_name,
            "borrowing_type": self.borrowing_type.value,
            "group_members": (
                self.group_member_ids
                if self.borrowing_type == BorrowingType.GROUP else None
            ),
            "from_date": _iso(self.from_date),
            "due_date": _iso(self.due_date),
            "return_date": _iso(self.return_date),
            "status": self.status.value,
            "fine": int(self.fine or 0),
            "damage_type": self.damage_type.value if self.damage_type else None,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }


class TransactionParticipant(db.Model):
    """Extra members of a Group borrow (the borrower is not listed here)."""
    __tablename__ = "transaction_participants"

    id = db.Column(db.Integer, primary_key=True)
    transaction_id = db.Column(
        db.Integer, db.ForeignKey("transactions.id"), nullable=False, index=True
    )
    member_id = db.Column(db.Integer, nullable=False, index=True)

    __table_args__ = (
        db.UniqueConstraint("transaction_id", "member_id", name="uq_participant_member"),
    )
