from smart_library.extensions import db
from smart_library.services.container import get_services


def run_overdue_check_job(app):
    """
    Sends overdue reminders for Active transactions past their due date.
    Any failure is rolled back and logged; the scheduler keeps running.
    """
    with app.app_context():
        try:
            return get_services().notifications.notify_overdue()
        except Exception as e:
            db.session.rollback()
            app.logger.exception(f"[overdue_check] error: {e}")
            return None
