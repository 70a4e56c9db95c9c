from __future__ import annotations

from functools import wraps
from typing import Any, Optional

from flask import jsonify, session

from ..core.enums import Role
from ..core.results import ActionResult

# DomainError.code -> HTTP status
STATUS_BY_CODE = {
    "permission_denied": 403,
    "not_found": 404,
    "conflict": 409,
    "validation_error": 400,
    "storage_error": 503,
}


def payload(data: Any = None, *, error: Optional[str] = None, success: Optional[str] = None) -> dict:
    return {"data": data, "error": error, "success": success}


def respond(result: ActionResult, data: Any = None):
    """Render an ActionResult as ``{data, error, success}`` with a matching status."""

    if not result.ok:
        return jsonify(payload(error=result.error)), STATUS_BY_CODE.get(result.code or "", 400)
    if data is None and result.data is not None:
        data = result.data.to_dict()
    return jsonify(payload(data, success=result.success)), 200


def current_user_id() -> int:
    return int(session["user_id"])


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify(payload(error="Please sign in to continue")), 401
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify(payload(error="Please sign in to continue")), 401
        if session.get("role") != Role.ADMIN.value:
            return jsonify(payload(error="Administrator access required")), 403
        return view(*args, **kwargs)

    return wrapper
