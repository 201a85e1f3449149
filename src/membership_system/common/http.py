from __future__ import annotations

import dataclasses
import logging
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from flask import Flask, jsonify, request

from ..core.exceptions import NotFoundError, StorageError, ValidationError
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)


def to_payload(value: Any) -> Any:
    """JSON-ready copy of service results (dataclasses, dates, Decimal, enums)."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_payload(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, dict):
        return {k: to_payload(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_payload(v) for v in value]
    return value


def ok(data: Any, status: int = 200):
    return jsonify({"success": True, "data": to_payload(data)}), status


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def date_arg(name: str, default: Optional[date] = None) -> Optional[date]:
    raw = (request.args.get(name) or "").strip()
    if not raw:
        return default
    return as_date(raw, name)


def as_date(raw: Any, name: str) -> Optional[date]:
    if raw in (None, ""):
        return None
    try:
        return parse_iso_date(str(raw))
    except ValueError:
        raise ValidationError(f"{name} must be a YYYY-MM-DD date")


def int_arg(name: str, default: Optional[int] = None) -> Optional[int]:
    raw = (request.args.get(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValidationError(f"{name} must be a whole number")
    if value < 0:
        raise ValidationError(f"{name} cannot be negative")
    return value


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def handle_validation(e: ValidationError):
        return jsonify({"success": False, "message": str(e)}), 400

    @app.errorhandler(NotFoundError)
    def handle_not_found(e: NotFoundError):
        return jsonify({"success": False, "message": str(e)}), 404

    @app.errorhandler(StorageError)
    def handle_storage(e: StorageError):
        logger.error("Storage failure on %s %s: %s", request.method, request.path, e)
        return jsonify({"success": False, "message": "Database unavailable, please retry"}), 503
