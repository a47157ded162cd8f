from __future__ import annotations

import logging
from datetime import date
from functools import wraps
from typing import Optional

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, DomainError, ValidationError
from .datetime_utils import now_local, parse_iso_date

logger = logging.getLogger(__name__)


def payload() -> dict[str, str]:
    """Request body as a dict of strings, from JSON or a submitted form.

    JSON scalars are stringified and nulls dropped; nested objects are rejected.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return request.form.to_dict()

    fields: dict[str, str] = {}
    for name, value in data.items():
        if value is None:
            continue
        if isinstance(value, (dict, list)):
            raise ValidationError(f"{name} must be a single value")
        fields[name] = str(value)
    return fields


def date_arg(value: Optional[str]) -> date:
    if not value:
        return now_local().date()
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"Invalid date: {value} (expected YYYY-MM-DD)") from None


def error_response(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def role_required(role: Role):
    """Allow only a logged-in user of ``role``."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return error_response("Please log in to continue", 401)
            if session.get("role") != role.value:
                return error_response(f"Only {role.value}s can open this page", 403)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def handle_domain_errors(action: str):
    """Map domain exceptions to JSON errors; unexpected store failures are logged."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except ValidationError as e:
                return error_response(str(e), 400)
            except AuthorizationError as e:
                return error_response(str(e), 403)
            except DomainError:
                logger.exception("Error %s", action)
                return error_response(f"System error while {action}", 500)

        return wrapper

    return decorator
