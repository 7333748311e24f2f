from datetime import date

from flask import current_app
from werkzeug.security import check_password_hash, generate_password_hash

from smart_library.errors import AuthenticationError, NotFoundError, ValidationError
from smart_library.extensions import db
from smart_library.models.enums import MemberType
from smart_library.models.member import Member
from smart_library.repositories.member_repo import MemberRepo
from smart_library.services.validation import optional_text, parse_enum, parse_int, require_text

STARTING_POINTS = 100


class MembershipService:
    """Member records, credentials and point balances."""

    PROFILE_FIELDS = ("full_name", "mobile_number", "address", "gender")

    def register(self, data: dict) -> Member:
        """Self-service sign-up; never creates an admin."""
        member_type = parse_enum(MemberType, (data or {}).get("member_type"), "member_type")
        if member_type == MemberType.ADMIN:
            raise ValidationError("Admin accounts cannot be self-registered")
        return self._create(data, is_admin=False)

    def add_user(self, data: dict) -> Member:
        """Admin-created member; member_type Admin yields an admin account."""
        member_type = parse_enum(MemberType, (data or {}).get("member_type"), "member_type")
        return self._create(data, is_admin=member_type == MemberType.ADMIN)

    def _create(self, data: dict, is_admin: bool) -> Member:
        data = data or {}
        member_type = parse_enum(MemberType, data.get("member_type"), "member_type")

        full_name = require_text(data, "full_name")
        email = require_text(data, "email").lower()
        if "@" not in email:
            raise ValidationError("email is not valid")
        mobile_number = require_text(data, "mobile_number")
        password = require_text(data, "password")

        admission_id = employee_id = None
        if member_type == MemberType.STUDENT:
            admission_id = require_text(data, "admission_id")
        else:
            employee_id = require_text(data, "employee_id")

        if MemberRepo.get_by_email(email):
            raise ValidationError("Email is already registered")

        member = Member(
            full_name=full_name,
            email=email,
            mobile_number=mobile_number,
            password_hash=generate_password_hash(password),
            member_type=member_type,
            admission_id=admission_id,
            employee_id=employee_id,
            age=parse_int(data["age"], "age") if data.get("age") not in (None, "") else None,
            gender=optional_text(data, "gender"),
            dob=_parse_dob(data.get("dob")),
            address=optional_text(data, "address"),
            points=STARTING_POINTS,
            is_admin=is_admin,
        )
        MemberRepo.add(member)
        db.session.commit()
        current_app.logger.info(
            f"[membership] member created id={member.id} type={member_type.value} admin={is_admin}"
        )
        return member

    def get_member(self, member_id: int) -> Member:
        member = MemberRepo.get_by_id(member_id)
        if not member:
            raise NotFoundError(f"Member not found: id={member_id}")
        return member

    def list_members(self, include_admins: bool = True):
        return MemberRepo.list_all(include_admins=include_admins)

    def update_member(self, member_id: int, changes: dict) -> Member:
        """Profile edits only; points move exclusively through returns."""
        changes = changes or {}
        if "points" in changes:
            raise ValidationError("points cannot be edited directly")

        member = self.get_member(member_id)
        try:
            for key in self.PROFILE_FIELDS:
                if key in changes:
                    if key in ("full_name", "mobile_number"):
                        setattr(member, key, require_text(changes, key))
                    else:
                        setattr(member, key, optional_text(changes, key))
            if "age" in changes:
                member.age = parse_int(changes["age"], "age") if changes["age"] is not None else None
            if "dob" in changes:
                member.dob = _parse_dob(changes["dob"])
            if "admission_id" in changes and member.member_type == MemberType.STUDENT:
                member.admission_id = require_text(changes, "admission_id")
            if "employee_id" in changes and member.member_type != MemberType.STUDENT:
                member.employee_id = require_text(changes, "employee_id")
            if "password" in changes:
                member.password_hash = generate_password_hash(require_text(changes, "password"))
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        return member

    def adjust_points(self, member_id: int, delta: int, commit: bool = True) -> Member:
        member = MemberRepo.get_by_id(member_id)
        if not member:
            raise NotFoundError(f"Member not found: id={member_id}")
        before = member.points or 0
        member.points = max(0, before + int(delta))
        if commit:
            db.session.commit()
        current_app.logger.info(
            f"[membership] points id={member_id} delta={delta} {before}->{member.points}"
        )
        return member

    def authenticate(self, email: str, password: str) -> Member:
        member = MemberRepo.get_by_email((email or "").strip().lower())
        if not member or not check_password_hash(member.password_hash, password or ""):
            raise AuthenticationError("Invalid email or password")
        return member


def _parse_dob(value):
    if value in (None, ""):
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        raise ValidationError("dob must be an ISO date (YYYY-MM-DD)")
