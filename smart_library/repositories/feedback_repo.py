from smart_library.models.feedback import Feedback
from smart_library.extensions import db

class FeedbackRepo:
    @staticmethod
    def get(feedback_id: int):
        return db.session.get(Feedback, feedback_id)

    @staticmethod
    def list_all(book_id=None):
        q = Feedback.query
        if book_id is not None:
            q = q.filter_by(book_id=book_id)
        return q.order_by(Feedback.created_at.desc(), Feedback.id.desc()).all()

    @staticmethod
    def create(feedback: Feedback):
        db.session.add(feedback)
        db.session.commit()
        return feedback

    @staticmethod
    def delete(feedback: Feedback):
        db.session.delete(feedback)
        db.session.commit()
