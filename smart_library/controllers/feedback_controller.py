from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from smart_library.errors import LibraryError
from smart_library.services.container import get_services
from smart_library.utils.decorators import current_is_admin, current_member_id
from smart_library.utils.responses import error_response, json_error

feedback_bp = Blueprint("feedback", __name__)


@feedback_bp.get("/")
def list_feedback():
    book_id = request.args.get("book_id", type=int)
    rows = get_services().feedback.list_feedback(book_id=book_id)
    return jsonify({"success": True, "data": [f.to_dict() for f in rows]})


@feedback_bp.post("/")
@jwt_required()
def create_feedback():
    data = request.get_json(silent=True) or {}
    try:
        fb = get_services().feedback.add_feedback(current_member_id(), data)
        return jsonify({"success": True, "data": fb.to_dict()}), 201
    except LibraryError as e:
        return error_response(e)


@feedback_bp.delete("/<int:feedback_id>")
@jwt_required()
def delete_feedback(feedback_id: int):
    feedback = get_services().feedback
    try:
        fb = feedback.get_feedback(feedback_id)
        if not current_is_admin() and fb.member_id != current_member_id():
            return json_error("Forbidden", 403)
        feedback.delete_feedback(feedback_id)
        return jsonify({"success": True})
    except LibraryError as e:
        return error_response(e)
