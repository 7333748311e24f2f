from functools import wraps

from flask_jwt_extended import get_jwt, get_jwt_identity, verify_jwt_in_request

from smart_library.utils.responses import json_error


def role_required(*roles):
    """403 unless the token's role claim is one of `roles`."""
    allowed = ", ".join(roles)

    def decorator(view):
        @wraps(view)
        def guarded(*args, **kwargs):
            verify_jwt_in_request()
            if (get_jwt() or {}).get("role") not in roles:
                return json_error(f"Forbidden: requires role {allowed}", 403, "Forbidden")
            return view(*args, **kwargs)
        return guarded
    return decorator


def current_member_id() -> int:
    return int(get_jwt_identity())


def current_is_admin() -> bool:
    return (get_jwt() or {}).get("role") == "admin"
