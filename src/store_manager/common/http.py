"""Helpers shared by the JSON controllers.

Request bodies use camelCase keys; input dataclasses use snake_case fields.
Responses go the other way through ``serialize``.
"""

from __future__ import annotations

import logging
from dataclasses import fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from functools import wraps
from typing import Any, Optional, Type, TypeVar

from flask import jsonify, request

from ..core.enums import Currency
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from .datetime_utils import to_utc
from .validators import parse_currency, parse_date, parse_integer

logger = logging.getLogger(__name__)

T = TypeVar("T")


def camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _key(key: Any) -> str:
    if isinstance(key, Enum):
        return str(key.value)
    if isinstance(key, str):
        return camel(key) if "_" in key else key
    return str(key)


def serialize(value: Any) -> Any:
    """Dataclasses/enums/decimals/dates into plain JSON types."""
    if is_dataclass(value) and not isinstance(value, type):
        return {camel(f.name): serialize(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, datetime):
        return to_utc(value).isoformat().replace("+00:00", "Z")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {_key(k): serialize(v) for k, v in value.items()}
    if isinstance(value, (set, frozenset)):
        return sorted(serialize(v) for v in value)
    if isinstance(value, (list, tuple)):
        return [serialize(v) for v in value]
    return value


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def from_json(cls: Type[T], data: dict) -> T:
    """Build an input dataclass from a camelCase (or snake_case) JSON object."""
    values = {}
    for f in fields(cls):
        key = camel(f.name)
        if key in data:
            values[f.name] = data[key]
        elif f.name in data:
            values[f.name] = data[f.name]
    return cls(**values)


def arg_int(name: str) -> Optional[int]:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return None
    return parse_integer(raw, name, min_value=1)


def arg_date(name: str) -> Optional[date]:
    raw = request.args.get(name)
    if not raw:
        return None
    return parse_date(raw, name)


def arg_currency(name: str = "currency") -> Optional[Currency]:
    raw = request.args.get(name)
    if not raw:
        return None
    return parse_currency(raw)


def api_errors(action: str):
    """Map domain errors to JSON responses; anything else is a logged 500."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except ValidationError as e:
                logger.debug("Rejected %s: %s", action, e)
                return jsonify({"error": str(e)}), 400
            except NotFoundError as e:
                return jsonify({"error": str(e)}), 404
            except ConflictError as e:
                return jsonify({"error": str(e)}), 409
            except Exception:
                logger.exception("Failed to %s", action)
                return jsonify({"error": f"Failed to {action}"}), 500

        return wrapper

    return decorator
