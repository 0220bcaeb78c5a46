"""Generate types for inline request bodies.

A request body that points at a named schema needs nothing extra. An inline
body has no name of its own, so it is named from method + path
(POST /bookings -> PostBookings) and placed in the request namespace, where it
cannot clash with a component schema of the same simple name.
"""

from __future__ import annotations

import logging
from typing import Any

from .errors import MissingRequestBodyError
from .models import RECORD
from .naming import request_body_name
from .resolver import TypeResolver

logger = logging.getLogger(__name__)

# path item keys that are never operations carrying a body
_SKIP_KEYS = {"get", "parameters"}

JSON_CONTENT = "application/json"


def derive_name(path: str, method: str) -> str:
    """Type name for the request body of `method path`."""
    return request_body_name(path, method)


def get_body_schema(operation: dict[str, Any], location: str = "") -> dict[str, Any] | None:
    """Return the JSON request body schema, or None when no body is declared."""
    request_body = operation.get("requestBody")
    if request_body is None:
        return None

    content = (request_body or {}).get("content") or {}
    schema = (content.get(JSON_CONTENT) or {}).get("schema")
    if not schema:
        raise MissingRequestBodyError(
            f"request body has no {JSON_CONTENT} schema",
            location=location,
            fragment=request_body,
        )
    return schema


def synthesize_request_bodies(
    resolver: TypeResolver,
    paths: dict[str, Any],
    namespace: str = "",
) -> list[str]:
    """Resolve every inline request body; return the names of the records created."""
    names: list[str] = []
    for path, path_item in paths.items():
        if not isinstance(path_item, dict):
            continue
        for method, operation in path_item.items():
            if method.lower() in _SKIP_KEYS or not isinstance(operation, dict):
                continue

            origin = f"{method.upper()} {path}"
            schema = get_body_schema(operation, origin)
            if schema is None:
                continue
            if "$ref" in schema:
                logger.debug("%s: body is a named schema, nothing to synthesize", origin)
                continue

            name = derive_name(path, method)
            descriptor = resolver.resolve(schema, name, name, namespace=namespace, origin=origin)
            if descriptor.kind == RECORD:
                names.append(descriptor.base_name)
    return names
