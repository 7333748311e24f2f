from __future__ import annotations

from flask import current_app
from flask_mail import Message

from smart_library.extensions import db, mail
from smart_library.models.notification_log import NotificationLog
from smart_library.utils.clock import utcnow


class MailService:
    @staticmethod
    def send_email(to_email: str, subject: str, body: str) -> tuple[bool, str | None]:
        """
        return: (success, error_text)
        """
        try:
            msg = Message(subject=subject, recipients=[to_email], body=body)
            mail.send(msg)
            return True, None
        except Exception as e:
            current_app.logger.warning(f"[MailService] mail not sent to={to_email}: {e}")
            return False, str(e)

    @staticmethod
    def log_notification(
        transaction_id: int,
        notif_type: str,
        to_email: str | None,
        message: str,
        success: bool,
        error: str | None = None,
        commit: bool = False,  # callers looping over rows commit once at the end
    ) -> NotificationLog:
        row = NotificationLog(
            transaction_id=transaction_id,
            type=notif_type,
            email=to_email,
            message=message,
            success=bool(success),
            error_message=error,
            sent_at=utcnow(),
        )
        db.session.add(row)
        if commit:
            db.session.commit()
        return row

    @staticmethod
    def send_overdue_mail(transaction, member) -> bool:
        """
        Overdue reminder for one Active transaction, logged as overdue_mail.
        """
        to_email = getattr(member, "email", None) if member else None
        name = getattr(member, "full_name", None) or transaction.borrower_name

        subject = "Library: overdue book reminder"
        body = (
            f"Hello {name},\n\n"
            f"'{transaction.book_name}' was due on {transaction.due_date:%Y-%m-%d}.\n"
            "Books returned after the due date are treated as missing: "
            "200% of the book price plus 50 per day late is charged.\n\n"
            "Please return it as soon as possible.\n"
        )

        if not to_email:
            MailService.log_notification(
                transaction_id=transaction.id,
                notif_type="overdue_mail",
                to_email=None,
                message="Member e-mail not found",
                success=False,
                error="missing_email",
            )
            return False

        ok, err = MailService.send_email(to_email, subject, body)

        MailService.log_notification(
            transaction_id=transaction.id,
            notif_type="overdue_mail",
            to_email=to_email,
            message="Mail sent" if ok else "Mail not sent",
            success=ok,
            error=err,
        )
        return ok
