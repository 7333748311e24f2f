from flask import current_app

from smart_library.errors import InvalidStateError, InvariantViolation, NotFoundError, ValidationError
from smart_library.extensions import db
from smart_library.models.book import Book
from smart_library.repositories.book_repo import BookRepo
from smart_library.repositories.transaction_repo import TransactionRepo
from smart_library.services.validation import optional_text, parse_int, parse_price, require_text
from smart_library.utils.locks import KeyedLocks


class CatalogService:
    """Books and their copy counts."""

    EDITABLE_TEXT = ("title", "author", "category")

    def __init__(self, copies_per_title: int = 3, locks: KeyedLocks | None = None):
        self.copies_per_title = copies_per_title
        # shared with TransactionService so copy-count edits serialize with borrows
        self.locks = locks if locks is not None else KeyedLocks()

    def list_books(self, category=None, popular=None, recent=None):
        return BookRepo.list_all(category=category, popular=popular, recent=recent)

    def available_books(self):
        return BookRepo.list_available()

    def get_book(self, book_id: int) -> Book:
        book = BookRepo.get(book_id)
        if not book:
            raise NotFoundError(f"Book not found: id={book_id}")
        return book

    def add_book(self, data: dict) -> Book:
        data = data or {}
        book = Book(
            title=require_text(data, "title"),
            author=require_text(data, "author"),
            category=require_text(data, "category"),
            price=parse_price(data.get("price")),
            cover_url=optional_text(data, "cover_url"),
            is_popular=bool(data.get("is_popular", False)),
            is_recent=bool(data.get("is_recent", False)),
            total_copies=self.copies_per_title,
            available_copies=self.copies_per_title,
        )
        BookRepo.add(book)
        db.session.commit()
        current_app.logger.info(f"[catalog] book added id={book.id} title={book.title!r}")
        return book

    def update_book(self, book_id: int, changes: dict) -> Book:
        changes = changes or {}
        # same ("book", id) key the borrow/return engine holds
        with self.locks.hold([("book", book_id)]):
            try:
                book = BookRepo.get_for_update(book_id)
                if not book:
                    raise NotFoundError(f"Book not found: id={book_id}")

                for key in self.EDITABLE_TEXT:
                    if key in changes:
                        setattr(book, key, require_text(changes, key))
                if "price" in changes:
                    book.price = parse_price(changes["price"])
                if "cover_url" in changes:
                    book.cover_url = optional_text(changes, "cover_url")
                for flag in ("is_popular", "is_recent"):
                    if flag in changes:
                        setattr(book, flag, bool(changes[flag]))

                if "total_copies" in changes:
                    total = parse_int(changes["total_copies"], "total_copies")
                    borrowed = book.total_copies - book.available_copies
                    if total < 1:
                        raise ValidationError("total_copies must be at least 1")
                    if total < borrowed:
                        raise ValidationError(
                            f"total_copies cannot be below the {borrowed} copies currently borrowed"
                        )
                    book.available_copies = total - borrowed
                    book.total_copies = total

                db.session.commit()
            except Exception:
                db.session.rollback()
                raise
        current_app.logger.info(f"[catalog] book updated id={book.id}")
        return book

    def delete_book(self, book_id: int) -> None:
        with self.locks.hold([("book", book_id)]):
            try:
                book = BookRepo.get_for_update(book_id)
                if not book:
                    raise NotFoundError(f"Book not found: id={book_id}")
                if TransactionRepo.count_active_for_book(book_id) > 0:
                    raise InvalidStateError("Book has active borrowings; they must be returned first")
                BookRepo.delete(book)
                db.session.commit()
            except Exception:
                db.session.rollback()
                raise
        current_app.logger.info(f"[catalog] book deleted id={book_id}")

    def decrement_availability(self, book_id: int, commit: bool = True) -> Book:
        book = self.get_book(book_id)
        if book.available_copies < 1:
            current_app.logger.error(
                f"[catalog] availability would go negative id={book_id} "
                f"available={book.available_copies}"
            )
            raise InvariantViolation(f"Book {book_id} has no available copy to take")
        book.available_copies -= 1
        if commit:
            db.session.commit()
        return book

    def increment_availability(self, book_id: int, commit: bool = True) -> Book:
        book = self.get_book(book_id)
        if book.available_copies >= book.total_copies:
            current_app.logger.error(
                f"[catalog] availability would exceed total id={book_id} "
                f"available={book.available_copies} total={book.total_copies}"
            )
            raise InvariantViolation(f"Book {book_id} already has all copies on the shelf")
        book.available_copies += 1
        if commit:
            db.session.commit()
        return book
