from smart_library.models.notification_log import NotificationLog

class NotificationRepo:
    @staticmethod
    def already_sent(transaction_id: int, notif_type: str = "overdue_mail") -> bool:
        return NotificationLog.query.filter_by(
            transaction_id=transaction_id, type=notif_type, success=True
        ).first() is not None

    @staticmethod
    def list_recent(limit: int = 100):
        return NotificationLog.query.order_by(NotificationLog.sent_at.desc()).limit(limit).all()
