from smart_library.extensions import db
from smart_library.utils.clock import utcnow


class Feedback(db.Model):
    __tablename__ = "feedbacks"

    id = db.Column(db.Integer, primary_key=True)

    member_id = db.Column(db.Integer, nullable=False, index=True)
    member_name = db.Column(db.String(200), nullable=False)
    book_id = db.Column(db.Integer, nullable=True, index=True)
    book_title = db.Column(db.String(200), nullable=True)

    title = db.Column(db.String(200), nullable=False)
    comment = db.Column(db.Text, nullable=False)
    rating = db.Column(db.Integer, nullable=False)
    image_url = db.Column(db.String(500), nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    __table_args__ = (
        db.CheckConstraint("rating BETWEEN 1 AND 5", name="ck_feedbacks_rating_range"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "member_id": self.member_id,
            "member_name": self.member_name,
            "book_id": self.book_id,
            "book_title": self.book_title,
            "title": self.title,
            "comment": self.comment,
            "rating": self.rating,
            "image_url": self.image_url,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
