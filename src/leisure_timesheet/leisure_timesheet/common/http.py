from __future__ import annotations

import logging
from datetime import date
from functools import wraps
from typing import Optional

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "Please sign in to continue"}), 401
        return view(*args, **kwargs)

    return wrapper


def json_errors(view):
    """Map domain errors to JSON responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except AuthorizationError as e:
            return jsonify({"success": False, "message": str(e)}), 403
        except Exception:
            logger.exception("Unhandled error in %s", request.path)
            return jsonify({"success": False, "message": "Internal server error"}), 500

    return wrapper


def current_role() -> Role:
    try:
        return Role(session.get("role"))
    except ValueError:
        raise AuthorizationError("Unknown role") from None


def current_user_id() -> str:
    return str(session["user_id"])


def target_user_id(requested: Optional[str]) -> str:
    """The user a request acts on; animators may only act on themselves."""
    if not requested or str(requested) == current_user_id():
        return current_user_id()
    if current_role() == Role.ANIMATOR:
        raise AuthorizationError("You do not have permission")
    return str(requested)


def date_arg(name: str, default: date) -> date:
    value = request.args.get(name)
    if not value:
        return default
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"Invalid date: {value}") from None
