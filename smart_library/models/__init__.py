from smart_library.models.book import Book
from smart_library.models.feedback import Feedback
from smart_library.models.member import Member
from smart_library.models.notification_log import NotificationLog
from smart_library.models.transaction import Transaction, TransactionParticipant

__all__ = [
    "Book",
    "Feedback",
    "Member",
    "NotificationLog",
    "Transaction",
    "TransactionParticipant",
]
