from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required

from smart_library.services.container import get_services
from smart_library.utils.decorators import role_required

report_bp = Blueprint("reports", __name__)


@report_bp.get("/stats")
@jwt_required()
@role_required("admin")
def stats():
    return jsonify({"success": True, "data": get_services().reports.dashboard_stats()})
