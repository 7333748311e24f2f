from flask import current_app

from smart_library.errors import NotFoundError, ValidationError
from smart_library.models.feedback import Feedback
from smart_library.repositories.book_repo import BookRepo
from smart_library.repositories.feedback_repo import FeedbackRepo
from smart_library.repositories.member_repo import MemberRepo
from smart_library.services.validation import optional_text, parse_int, require_text


class FeedbackService:
    @staticmethod
    def list_feedback(book_id=None):
        return FeedbackRepo.list_all(book_id=book_id)

    @staticmethod
    def get_feedback(feedback_id: int) -> Feedback:
        fb = FeedbackRepo.get(feedback_id)
        if not fb:
            raise NotFoundError(f"Feedback not found: id={feedback_id}")
        return fb

    @staticmethod
    def add_feedback(member_id: int, data: dict) -> Feedback:
        data = data or {}
        member = MemberRepo.get_by_id(member_id)
        if not member:
            raise NotFoundError(f"Member not found: id={member_id}")

        rating = parse_int(data.get("rating"), "rating")
        if not 1 <= rating <= 5:
            raise ValidationError("rating must be between 1 and 5")

        book = None
        if data.get("book_id") not in (None, ""):
            book_id = parse_int(data["book_id"], "book_id")
            book = BookRepo.get(book_id)
            if not book:
                raise NotFoundError(f"Book not found: id={book_id}")

        fb = Feedback(
            member_id=member.id,
            member_name=member.full_name,
            book_id=book.id if book else None,
            book_title=book.title if book else None,
            title=require_text(data, "title"),
            comment=require_text(data, "comment"),
            rating=rating,
            image_url=optional_text(data, "image_url"),
        )
        FeedbackRepo.create(fb)
        current_app.logger.info(f"[feedback] created id={fb.id} member={member.id} rating={rating}")
        return fb

    @staticmethod
    def delete_feedback(feedback_id: int) -> None:
        fb = FeedbackService.get_feedback(feedback_id)
        FeedbackRepo.delete(fb)
