from smart_library.models.member import Member
from smart_library.extensions import db

class MemberRepo:
    @staticmethod
    def get_by_email(email: str):
        return Member.query.filter_by(email=email).first()

    @staticmethod
    def get_by_id(member_id: int):
        return db.session.get(Member, member_id)

    @staticmethod
    def get_for_update(member_id: int):
        return db.session.execute(
            db.select(Member).where(Member.id == member_id).with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    @staticmethod
    def get_many(member_ids):
        if not member_ids:
            return []
        return Member.query.filter(Member.id.in_(list(member_ids))).all()

    @staticmethod
    def list_all(include_admins: bool = True):
        q = Member.query
        if not include_admins:
            q = q.filter(Member.is_admin.is_(False))
        return q.order_by(Member.id.asc()).all()

    @staticmethod
    def count_members():
        return Member.query.filter(Member.is_admin.is_(False)).count()

    @staticmethod
    def add(member: Member):
        db.session.add(member)
        return member
