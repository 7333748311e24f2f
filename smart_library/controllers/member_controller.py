from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from smart_library.errors import LibraryError
from smart_library.services.container import get_services
from smart_library.utils.decorators import current_is_admin, current_member_id, role_required
from smart_library.utils.responses import error_response, json_error

member_bp = Blueprint("members", __name__)


@member_bp.get("/")
@jwt_required()
@role_required("admin")
def list_members():
    include_admins = request.args.get("include_admins", "1") == "1"
    members = get_services().membership.list_members(include_admins=include_admins)
    return jsonify({"success": True, "data": [m.to_dict() for m in members]})


@member_bp.post("/")
@jwt_required()
@role_required("admin")
def add_member():
    data = request.get_json(silent=True) or {}
    try:
        m = get_services().membership.add_user(data)
        return jsonify({"success": True, "data": m.to_dict()}), 201
    except LibraryError as e:
        return error_response(e)


@member_bp.get("/<int:member_id>")
@jwt_required()
def get_member(member_id: int):
    if not current_is_admin() and current_member_id() != member_id:
        return json_error("Forbidden", 403)
    try:
        services = get_services()
        m = services.membership.get_member(member_id)
        history = services.reports.transactions_for_member(member_id)
        data = m.to_dict()
        data["active_transactions"] = [t.to_dict() for t in history if t.is_active]
        data["previous_transactions"] = [t.to_dict() for t in history if not t.is_active]
        return jsonify({"success": True, "data": data})
    except LibraryError as e:
        return error_response(e)


@member_bp.put("/<int:member_id>")
@jwt_required()
def update_member(member_id: int):
    if not current_is_admin() and current_member_id() != member_id:
        return json_error("Forbidden", 403)
    data = request.get_json(silent=True) or {}
    try:
        m = get_services().membership.update_member(member_id, data)
        return jsonify({"success": True, "data": m.to_dict()})
    except LibraryError as e:
        return error_response(e)
