from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from smart_library.errors import LibraryError
from smart_library.models.enums import BorrowingType, DamageType
from smart_library.services.container import get_services
from smart_library.utils.decorators import current_is_admin, current_member_id, role_required
from smart_library.utils.responses import error_response, json_error

transaction_bp = Blueprint("transactions", __name__)


@transaction_bp.post("/borrow")
@jwt_required()
def borrow_book():
    data = request.get_json(silent=True) or {}
    if "book_id" not in data:
        return json_error("book_id is required", 400, "ValidationError")

    # members borrow for themselves; admins may issue to anyone
    borrower_id = data.get("borrower_id") if current_is_admin() else None
    if borrower_id is None:
        borrower_id = current_member_id()

    try:
        tx = get_services().transactions.borrow_book(
            data["book_id"],
            borrower_id,
            data.get("borrowing_type", BorrowingType.INDIVIDUAL.value),
            data.get("group_members") or [],
        )
        return jsonify({
            "success": True,
            "message": "Book borrowed successfully",
            "data": tx.to_dict(),
        }), 201
    except LibraryError as e:
        return error_response(e)


@transaction_bp.post("/<int:transaction_id>/return")
@jwt_required()
def return_book(transaction_id: int):
    data = request.get_json(silent=True) or {}
    services = get_services()
    try:
        if not current_is_admin():
            own = services.reports.transactions_for_member(current_member_id())
            if transaction_id not in {t.id for t in own}:
                return json_error("Forbidden", 403)

        tx, fine = services.transactions.return_book(
            transaction_id, data.get("damage_type", DamageType.NONE.value)
        )
        return jsonify({
            "success": True,
            "message": f"Book returned. Fine: {fine}",
            "fine": fine,
            "data": tx.to_dict(),
        })
    except LibraryError as e:
        return error_response(e)


@transaction_bp.get("/<int:transaction_id>/fine")
@jwt_required()
@role_required("admin")
def preview_fine(transaction_id: int):
    try:
        fine, items = get_services().transactions.preview_fine(
            transaction_id, request.args.get("damage_type", DamageType.NONE.value)
        )
        return jsonify({
            "success": True,
            "data": {"fine": fine, "items": [i.to_dict() for i in items]},
        })
    except LibraryError as e:
        return error_response(e)


@transaction_bp.get("/active")
@jwt_required()
@role_required("admin")
def active_transactions():
    rows = get_services().reports.active_transactions()
    return jsonify({"success": True, "data": [t.to_dict() for t in rows]})


@transaction_bp.get("/overdue")
@jwt_required()
@role_required("admin")
def overdue_transactions():
    rows = get_services().reports.overdue_transactions()
    return jsonify({"success": True, "data": [t.to_dict() for t in rows]})


@transaction_bp.get("/my")
@jwt_required()
def my_transactions():
    rows = get_services().reports.transactions_for_member(current_member_id())
    return jsonify({"success": True, "data": [t.to_dict() for t in rows]})


@transaction_bp.get("/member/<int:member_id>")
@jwt_required()
@role_required("admin")
def member_transactions(member_id: int):
    rows = get_services().reports.transactions_for_member(member_id)
    return jsonify({"success": True, "data": [t.to_dict() for t in rows]})
