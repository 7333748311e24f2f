from smart_library.extensions import db
from smart_library.models.enums import MemberType, enum_values
from smart_library.utils.clock import utcnow


class Member(db.Model):
    __tablename__ = "members"

    id = db.Column(db.Integer, primary_key=True)
    full_name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    mobile_number = db.Column(db.String(32), nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)

    member_type = db.Column(
        db.Enum(MemberType, values_callable=enum_values, native_enum=False, length=20),
        nullable=False,
    )
    # Student -> admission_id, Staff/Admin -> employee_id
    admission_id = db.Column(db.String(64), nullable=True)
    employee_id = db.Column(db.String(64), nullable=True)

    age = db.Column(db.Integer, nullable=True)
    gender = db.Column(db.String(20), nullable=True)
    dob = db.Column(db.Date, nullable=True)
    address = db.Column(db.String(500), nullable=True)

    points = db.Column(db.Integer, nullable=False, default=100)
    is_admin = db.Column(db.Boolean, nullable=False, default=False)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        db.CheckConstraint("points >= 0", name="ck_members_points_non_negative"),
    )

    @property
    def role(self):
        return "admin" if self.is_admin else "member"

    def to_dict(self):
        return {
            "id": self.id,
            "full_name": self.full_name,
            "email": self.email,
            "mobile_number": self.mobile_number,
            "member_type": self.member_type.value if self.member_type else None,
            "admission_id": self.admission_id,
            "employee_id": self.employee_id,
            "age": self.age,
            "gender": self.gender,
            "dob": self.dob.isoformat() if self.dob else None,
            "address": self.address,
            "points": self.points,
            "is_admin": bool(self.is_admin),
        }
