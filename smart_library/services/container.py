from flask import current_app

from smart_library.services.catalog_service import CatalogService
from smart_library.services.feedback_service import FeedbackService
from smart_library.services.membership_service import MembershipService
from smart_library.services.notification_service import NotificationService
from smart_library.services.report_service import ReportService
from smart_library.services.transaction_service import TransactionService
from smart_library.utils.clock import SystemClock
from smart_library.utils.locks import KeyedLocks


class LibraryServices:
    def __init__(self, clock=None, copies_per_title: int = 3):
        self.clock = clock or SystemClock()
        self.locks = KeyedLocks()
        self.catalog = CatalogService(copies_per_title=copies_per_title, locks=self.locks)
        self.membership = MembershipService()
        self.transactions = TransactionService(
            self.catalog, self.membership, self.clock, locks=self.locks
        )
        self.reports = ReportService(self.clock)
        self.feedback = FeedbackService()
        self.notifications = NotificationService(self.reports)


def init_services(app, clock=None) -> LibraryServices:
    services = LibraryServices(
        clock=clock,
        copies_per_title=app.config.get("LIBRARY_COPIES_PER_TITLE", 3),
    )
    app.extensions["library"] = services
    return services


def get_services() -> LibraryServices:
    return current_app.extensions["library"]
