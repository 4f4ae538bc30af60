from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from functools import wraps
from typing import Any, Optional

from flask import jsonify, request

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Actor:
    user_id: Optional[int]
    role: Optional[Role]


def current_actor() -> Actor:
    """Acting user as forwarded by the upstream auth layer."""
    raw_id = (request.headers.get("X-User-Id") or "").strip()
    raw_role = (request.headers.get("X-User-Role") or "").strip().lower()
    user_id = int(raw_id) if raw_id.isdigit() else None
    try:
        role = Role(raw_role) if raw_role else None
    except ValueError:
        role = None
    return Actor(user_id=user_id, role=role)


def require_role(actor: Actor, *roles: Role) -> None:
    if actor.role not in roles:
        raise AuthorizationError("You do not have permission to perform this action")


def json_ready(value: Any) -> Any:
    """Convert Decimals, dates, times and enums so jsonify emits plain JSON values."""
    if isinstance(value, dict):
        return {k: json_ready(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [json_ready(v) for v in value]
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, datetime):
        return value.isoformat(sep=" ", timespec="seconds")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, time):
        return value.strftime("%H:%M:%S")
    if isinstance(value, Enum):
        return value.value
    return value


def json_response(payload: Any, status: int = 200):
    return jsonify(json_ready(payload)), status


def api_errors(view):
    """Map domain errors to the caller contract: 400/403/404, else opaque 500."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except ValidationError as e:
            return jsonify({"message": str(e)}), 400
        except AuthorizationError as e:
            return jsonify({"message": str(e)}), 403
        except NotFoundError as e:
            return jsonify({"message": str(e)}), 404
        except Exception as e:
            logger.exception("Unhandled error in %s", view.__name__)
            return jsonify({"message": "Server error", "error": str(e)}), 500

    return wrapper
