from smart_library.extensions import db
from smart_library.utils.clock import utcnow

class NotificationLog(db.Model):
    __tablename__ = "notification_logs"

    id = db.Column(db.Integer, primary_key=True)

    transaction_id = db.Column(db.Integer, db.ForeignKey("transactions.id"), nullable=False, index=True)

    # overdue_mail
    type = db.Column(db.String(50), nullable=False, default="overdue_mail")

    email = db.Column(db.String(255), nullable=True)
    message = db.Column(db.String(1000), nullable=True)

    sent_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    success = db.Column(db.Boolean, nullable=False, default=True)
    error_message = db.Column(db.String(500), nullable=True)

    transaction = db.relationship("Transaction", backref="notifications")

    def to_dict(self):
        return {
            "id": self.id,
            "transaction_id": self.transaction_id,
            "type": self.type,
            "email": self.email,
            "sent_at": self.sent_at.isoformat() if self.sent_at else None,
            "success": bool(self.success),
            "error_message": self.error_message,
        }
