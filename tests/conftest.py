from datetime import datetime

import pytest
from flask_jwt_extended import create_access_token

from smart_library import create_app
from smart_library.config import TestConfig
from smart_library.extensions import db
from smart_library.services.container import get_services
from smart_library.utils.clock import FixedClock

DAY0 = datetime(2025, 1, 1, 10, 0, 0)


@pytest.fixture
def clock():
    return FixedClock(DAY0)


@pytest.fixture
def app(clock):
    app = create_app(TestConfig, clock=clock)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def services(app):
    return get_services()


def member_data(email="asha@example.com", member_type="Student", **overrides):
    data = {
        "full_name": "Asha Rao",
        "email": email,
        "mobile_number": "9000000001",
        "member_type": member_type,
        "password": "secret",
    }
    if member_type == "Student":
        data["admission_id"] = "ADM-" + email.split("@")[0]
    else:
        data["employee_id"] = "EMP-" + email.split("@")[0]
    data.update(overrides)
    return data


@pytest.fixture
def book(services):
    return services.catalog.add_book({
        "title": "Atomic Habits",
        "author": "James Clear",
        "category": "Self-Help",
        "price": 500,
    })


@pytest.fixture
def member(services):
    return services.membership.register(member_data())


@pytest.fixture
def make_member(services):
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        email = overrides.pop("email", f"member{counter['n']}@example.com")
        return services.membership.register(member_data(email=email, **overrides))

    return _make


@pytest.fixture
def admin(services):
    return services.membership.add_user(member_data(
        email="admin@library.com", member_type="Admin", full_name="Admin User"
    ))


def auth_header(member):
    token = create_access_token(
        identity=str(member.id),
        additional_claims={"role": member.role, "email": member.email},
    )
    return {"Authorization": f"Bearer {token}"}
