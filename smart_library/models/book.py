from smart_library.extensions import db
from smart_library.utils.clock import utcnow

class Book(db.Model):
    __tablename__ = "books"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False, index=True)
    author = db.Column(db.String(200), nullable=False, index=True)
    category = db.Column(db.String(100), nullable=False, index=True)
    cover_url = db.Column(db.String(500), nullable=True)

    # drives fine amounts
    price = db.Column(db.Numeric(10, 2), nullable=False)

    total_copies = db.Column(db.Integer, nullable=False, default=3)
    available_copies = db.Column(db.Integer, nullable=False, default=3)

    is_popular = db.Column(db.Boolean, nullable=False, default=False)
    is_recent = db.Column(db.Boolean, nullable=False, default=False)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        db.CheckConstraint(
            "available_copies >= 0 AND available_copies <= total_copies",
            name="ck_books_available_range",
        ),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "category": self.category,
            "cover_url": self.cover_url,
            "price": float(self.price) if self.price is not None else None,
            "total_copies": self.total_copies,
            "available_copies": self.available_copies,
            "is_popular": bool(self.is_popular),
            "is_recent": bool(self.is_recent),
        }
