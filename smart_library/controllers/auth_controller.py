from flask import Blueprint, request, jsonify
from flask_jwt_extended import create_access_token, jwt_required

from smart_library.errors import LibraryError
from smart_library.services.container import get_services
from smart_library.utils.decorators import current_member_id
from smart_library.utils.responses import error_response

auth_bp = Blueprint("auth", __name__)


def issue_token(member):
    return create_access_token(
        identity=str(member.id),
        additional_claims={"role": member.role, "email": member.email},
    )


@auth_bp.post("/register", endpoint="auth_register")
def register():
    data = request.get_json(silent=True) or {}
    try:
        member = get_services().membership.register(data)
        return jsonify({"success": True, "data": member.to_dict()}), 201
    except LibraryError as e:
        return error_response(e)


@auth_bp.post("/login", endpoint="auth_login")
def login():
    data = request.get_json(silent=True) or {}
    try:
        member = get_services().membership.authenticate(
            (data.get("email") or "").strip(),
            data.get("password") or "",
        )
        return jsonify({
            "success": True,
            "access_token": issue_token(member),
            "user": member.to_dict(),
        })
    except LibraryError as e:
        return error_response(e)


@auth_bp.get("/me", endpoint="auth_me")
@jwt_required()
def me():
    try:
        member = get_services().membership.get_member(current_member_id())
        return jsonify({"success": True, "user": member.to_dict()})
    except LibraryError as e:
        return error_response(e)
