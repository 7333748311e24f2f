import pytest

from smart_library.errors import AuthenticationError, NotFoundError, ValidationError
from smart_library.models.enums import MemberType

from tests.conftest import member_data


def test_register_starts_with_100_points(services):
    m = services.membership.register(member_data())
    assert m.points == 100
    assert m.is_admin is False
    assert m.member_type == MemberType.STUDENT
    assert m.admission_id == "ADM-asha"
    assert m.password_hash != "secret"


def test_register_staff_needs_employee_id(services):
    data = member_data(email="s@example.com", member_type="Staff")
    data.pop("employee_id")
    with pytest.raises(ValidationError):
        services.membership.register(data)


def test_register_student_needs_admission_id(services):
    data = member_data()
    data.pop("admission_id")
    with pytest.raises(ValidationError):
        services.membership.register(data)


@pytest.mark.parametrize("missing", ["full_name", "email", "mobile_number", "password", "member_type"])
def test_register_requires_fields(services, missing):
    data = member_data()
    data.pop(missing)
    with pytest.raises(ValidationError):
        services.membership.register(data)


def test_register_duplicate_email(services, member):
    with pytest.raises(ValidationError):
        services.membership.register(member_data(email="ASHA@example.com"))


def test_register_cannot_create_admin(services):
    with pytest.raises(ValidationError):
        services.membership.register(member_data(email="a@x.com", member_type="Admin"))


def test_add_user_admin(services, admin):
    assert admin.is_admin is True
    assert admin.role == "admin"
    assert admin.points == 100


def test_adjust_points_floors_at_zero(services, member):
    services.membership.adjust_points(member.id, -30)
    assert services.membership.get_member(member.id).points == 70
    services.membership.adjust_points(member.id, -500)
    assert services.membership.get_member(member.id).points == 0
    services.membership.adjust_points(member.id, 5)
    assert services.membership.get_member(member.id).points == 5


def test_adjust_points_unknown_member(services):
    with pytest.raises(NotFoundError):
        services.membership.adjust_points(404, -1)


def test_authenticate(services, member):
    assert services.membership.authenticate("asha@example.com", "secret").id == member.id
    with pytest.raises(AuthenticationError):
        services.membership.authenticate("asha@example.com", "wrong")
    with pytest.raises(AuthenticationError):
        services.membership.authenticate("nobody@example.com", "secret")


def test_update_member_profile(services, member):
    m = services.membership.update_member(member.id, {"full_name": "Asha R.", "dob": "2001-05-04", "age": 23})
    assert m.full_name == "Asha R."
    assert m.dob.isoformat() == "2001-05-04"
    assert m.age == 23


def test_update_member_cannot_touch_points(services, member):
    with pytest.raises(ValidationError):
        services.membership.update_member(member.id, {"points": 1000})
    assert services.membership.get_member(member.id).points == 100


def test_update_member_bad_dob_rolls_back(services, member):
    with pytest.raises(ValidationError):
        services.membership.update_member(member.id, {"full_name": "Changed", "dob": "04/05/2001"})
    assert services.membership.get_member(member.id).full_name == "Asha Rao"
