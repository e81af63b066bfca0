from __future__ import annotations

from functools import wraps

from flask import jsonify, session

from ..core.enums import Role


def admin_required(view):
    """JSON endpoints: 401 without a session, 403 for non-admins."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "code": "unauthenticated", "message": "Please log in first"}), 401

        if session.get("role") != Role.ADMIN.value:
            return jsonify({"success": False, "code": "forbidden", "message": "Admins only"}), 403

        return view(*args, **kwargs)

    return wrapper
