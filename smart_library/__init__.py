from flask import Flask, jsonify
from smart_library.config import Config
from smart_library.extensions import db, migrate, jwt, mail


def create_app(config_class=Config, clock=None):
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # 1) db first; models must be imported before create_all / migrations
    db.init_app(app)
    from smart_library import models  # noqa: F401

    # 2) other extensions
    migrate.init_app(app, db)
    jwt.init_app(app)
    mail.init_app(app)

    # 3) engine services (catalog, membership, transactions, reports)
    from smart_library.services.container import init_services
    init_services(app, clock=clock)

    # 4) API blueprints
    from smart_library.controllers.auth_controller import auth_bp
    from smart_library.controllers.book_controller import book_bp
    from smart_library.controllers.feedback_controller import feedback_bp
    from smart_library.controllers.member_controller import member_bp
    from smart_library.controllers.notification_controller import notif_bp
    from smart_library.controllers.report_controller import report_bp
    from smart_library.controllers.transaction_controller import transaction_bp
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(book_bp, url_prefix="/books")
    app.register_blueprint(member_bp, url_prefix="/members")
    app.register_blueprint(transaction_bp, url_prefix="/transactions")
    app.register_blueprint(feedback_bp, url_prefix="/feedback")
    app.register_blueprint(report_bp, url_prefix="/reports")
    app.register_blueprint(notif_bp, url_prefix="/notifications")

    @app.get("/health")
    def health():
        return jsonify({"ok": True})

    from smart_library.cli import register_cli
    register_cli(app)

    # Scheduler (overdue reminders)
    from smart_library.tasks.scheduler import start_scheduler
    start_scheduler(app)

    return app
