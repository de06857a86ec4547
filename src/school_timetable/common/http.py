from __future__ import annotations

import dataclasses
import logging
from enum import Enum
from functools import wraps
from typing import Any

from flask import jsonify, request

from ..core.enums import ErrorKind
from ..core.exceptions import DomainError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.RANGE_VIOLATION: 400,
    ErrorKind.BREAK_TIMESLOT_ASSIGNMENT: 400,
    ErrorKind.OVERLAP: 409,
    ErrorKind.REFERENTIAL_BLOCK: 409,
    ErrorKind.TRANSIENT: 503,
}


def to_json(value: Any) -> Any:
    """Plain JSON data from dataclasses, enums and containers."""

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_json(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {str(k): to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    return value


def api_ok(data: Any = None, status: int = 200):
    return jsonify({"success": True, "data": to_json(data)}), status


def api_superseded(generation):
    """A newer request for the same view started; the client must drop this one."""
    return jsonify({"success": True, "superseded": True, "generation": generation, "data": None}), 200


def api_error(exc: DomainError):
    status = 404 if isinstance(exc, NotFoundError) else STATUS_BY_KIND.get(exc.kind, 400)
    body = {
        "success": False,
        "error": exc.kind.value,
        "message": exc.detail,
        "retryable": exc.retryable,
    }
    conflicting = getattr(exc, "conflicting", None)
    if conflicting is not None:
        body["conflicting"] = to_json(conflicting)
    return jsonify(body), status


def api_view(view):
    """Turn domain errors into the ``{"success": false, "error": ...}`` result."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            return api_error(e)
        except Exception:
            logger.exception("Unhandled error in %s", request.path)
            return jsonify({"success": False, "error": "INTERNAL", "message": "Internal server error"}), 500

    return wrapper


def json_body() -> dict:
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload


def as_bool(value: Any, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}
