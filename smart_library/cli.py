import click
from flask import current_app

from smart_library.extensions import db
from smart_library.repositories.member_repo import MemberRepo
from smart_library.services.container import get_services
from smart_library.tasks.overdue_check import run_overdue_check_job

DEFAULT_ADMIN = {
    "full_name": "Admin User",
    "email": "admin@library.com",
    "member_type": "Admin",
    "employee_id": "EMP001",
    "mobile_number": "9876543210",
    "age": 35,
    "gender": "Male",
    "dob": "1990-01-01",
    "address": "Library Admin Office",
}

SAMPLE_BOOKS = [
    {
        "title": "Atomic Habits",
        "author": "James Clear",
        "category": "Self-Help",
        "price": 500,
        "is_popular": True,
    },
    {
        "title": "Rich Dad Poor Dad",
        "author": "Robert Kiyosaki",
        "category": "Finance",
        "price": 400,
        "is_popular": True,
        "is_recent": True,
    },
]


def register_cli(app):
    @app.cli.command("init-db")
    def init_db():
        """Create all tables (development; use `flask db upgrade` otherwise)."""
        db.create_all()
        click.echo("Tables created.")

    @app.cli.command("seed")
    @click.option("--admin-password", default="admin123", show_default=True)
    def seed(admin_password):
        """Create the default admin account and sample books."""
        db.create_all()
        services = get_services()

        if MemberRepo.get_by_email(DEFAULT_ADMIN["email"]):
            click.echo("Admin already exists, skipping.")
        else:
            admin = services.membership.add_user({**DEFAULT_ADMIN, "password": admin_password})
            click.echo(f"Admin created: {admin.email}")

        existing = {b.title for b in services.catalog.list_books()}
        for data in SAMPLE_BOOKS:
            if data["title"] in existing:
                continue
            book = services.catalog.add_book(data)
            click.echo(f"Book added: {book.title}")

    @app.cli.command("overdue-check")
    def overdue_check():
        """Run the overdue reminder job once."""
        summary = run_overdue_check_job(current_app._get_current_object())
        click.echo(f"{summary}")
