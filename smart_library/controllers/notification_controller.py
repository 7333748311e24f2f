from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required

from smart_library.repositories.notification_repo import NotificationRepo
from smart_library.services.container import get_services
from smart_library.utils.decorators import role_required

notif_bp = Blueprint("notifications", __name__)

@notif_bp.post("/run-overdue-check")
@jwt_required()
@role_required("admin")
def run_overdue_check():
    summary = get_services().notifications.notify_overdue()
    return jsonify({"success": True, "message": "Overdue check completed", "data": summary})


@notif_bp.get("/")
@jwt_required()
@role_required("admin")
def list_notifications():
    rows = NotificationRepo.list_recent()
    return jsonify({"success": True, "data": [n.to_dict() for n in rows]})
