from smart_library.models.book import Book
from smart_library.extensions import db

class BookRepo:
    @staticmethod
    def list_all(category=None, popular=None, recent=None):
        q = Book.query
        if category:
            q = q.filter(Book.category == category)
        if popular is not None:
            q = q.filter(Book.is_popular.is_(bool(popular)))
        if recent is not None:
            q = q.filter(Book.is_recent.is_(bool(recent)))
        return q.order_by(Book.id.desc()).all()

    @staticmethod
    def list_available():
        return Book.query.filter(Book.available_copies > 0).order_by(Book.title.asc()).all()

    @staticmethod
    def get(book_id: int):
        return db.session.get(Book, book_id)

    @staticmethod
    def get_for_update(book_id: int):
        # row lock on backends that support it (no-op on SQLite)
        return db.session.execute(
            db.select(Book).where(Book.id == book_id).with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    @staticmethod
    def add(book: Book):
        db.session.add(book)
        return book

    @staticmethod
    def delete(book: Book):
        db.session.delete(book)
