from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from smart_library.errors import LibraryError
from smart_library.services.container import get_services
from smart_library.utils.decorators import role_required
from smart_library.utils.responses import error_response

book_bp = Blueprint("books", __name__)


def _flag(name):
    value = request.args.get(name)
    if value is None:
        return None
    return value.lower() in ("1", "true", "yes")


@book_bp.get("/")
def list_books():
    catalog = get_services().catalog
    if _flag("available"):
        books = catalog.available_books()
    else:
        books = catalog.list_books(
            category=request.args.get("category") or None,
            popular=_flag("popular"),
            recent=_flag("recent"),
        )
    return jsonify({"success": True, "data": [b.to_dict() for b in books]})


@book_bp.get("/<int:book_id>")
def get_book(book_id: int):
    try:
        b = get_services().catalog.get_book(book_id)
        return jsonify({"success": True, "data": b.to_dict()})
    except LibraryError as e:
        return error_response(e)


@book_bp.get("/<int:book_id>/transactions")
@jwt_required()
@role_required("admin")
def book_transactions(book_id: int):
    rows = get_services().reports.transactions_for_book(book_id)
    return jsonify({"success": True, "data": [t.to_dict() for t in rows]})


@book_bp.post("/")
@jwt_required()
@role_required("admin")
def create_book():
    data = request.get_json(silent=True) or {}
    try:
        b = get_services().catalog.add_book(data)
        return jsonify({"success": True, "data": b.to_dict()}), 201
    except LibraryError as e:
        return error_response(e)


@book_bp.put("/<int:book_id>")
@jwt_required()
@role_required("admin")
def update_book(book_id: int):
    data = request.get_json(silent=True) or {}
    try:
        b = get_services().catalog.update_book(book_id, data)
        return jsonify({"success": True, "data": b.to_dict()})
    except LibraryError as e:
        return error_response(e)


@book_bp.delete("/<int:book_id>")
@jwt_required()
@role_required("admin")
def delete_book(book_id: int):
    try:
        get_services().catalog.delete_book(book_id)
        return jsonify({"success": True})
    except LibraryError as e:
        return error_response(e)
