from flask import current_app

from smart_library.extensions import db
from smart_library.repositories.member_repo import MemberRepo
from smart_library.repositories.notification_repo import NotificationRepo
from smart_library.services.mail_service import MailService


class NotificationService:
    def __init__(self, reports):
        self.reports = reports

    def notify_overdue(self) -> dict:
        """
        One reminder per overdue transaction; transactions with a successful
        reminder on record are skipped.
        """
        overdue = self.reports.overdue_transactions()
        sent = skipped = failed = 0

        for tx in overdue:
            if NotificationRepo.already_sent(tx.id, "overdue_mail"):
                skipped += 1
                continue
            member = MemberRepo.get_by_id(tx.borrower_id)
            if MailService.send_overdue_mail(tx, member):
                sent += 1
            else:
                failed += 1

        db.session.commit()

        current_app.logger.info(
            f"[overdue_check] overdue={len(overdue)} sent={sent} skipped={skipped} failed={failed}"
        )
        return {"overdue": len(overdue), "sent": sent, "skipped": skipped, "failed": failed}
