"""Normalize and validate endpoint parameters.

Handles:
- Top-level path/query parameters
- POST request body properties, hoisted to the top level
- $ref resolution for request body schemas
- Missing schema / display attributes (normalized to empty dicts)
- Rejection of parameter types the templates can't express
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from .loader import resolve_ref

logger = logging.getLogger(__name__)

# OpenAPI types we know how to turn into Terraform fields.
# Arrays are only supported when their items are strings.
SUPPORTED_PARAM_TYPES = ("array", "boolean", "integer", "string")

# Wire key Vault uses for UI metadata such as sensitivity.
DISPLAY_ATTRS_KEY = "x-vault-displayAttrs"


class UnsupportedSchemaError(Exception):
    """An endpoint has a parameter whose type we can't generate code for."""

    def __init__(self, path: str, param_name: str, param_type: str | None) -> None:
        self.path = path
        self.param_name = param_name
        self.param_type = param_type
        super().__init__(
            f"can't generate {path!r} because parameter type of"
            f" {param_type!r} for {param_name} is unsupported"
        )


def normalize_schema(schema: dict[str, Any] | None) -> dict[str, Any]:
    """Return a copy of ``schema`` that always carries ``display_attrs``."""
    schema = copy.deepcopy(schema) if schema else {}
    display_attrs = schema.pop(DISPLAY_ATTRS_KEY, None)
    if schema.get("display_attrs") is None:
        schema["display_attrs"] = display_attrs or {}
    return schema


def _normalize_parameter(param: dict[str, Any]) -> dict[str, Any]:
    return {
        "name": param["name"],
        "description": param.get("description") or "",
        "in": param.get("in") or "query",
        "required": bool(param.get("required", False)),
        "schema": normalize_schema(param.get("schema")),
    }


def _body_schemas(
    path_item: dict[str, Any],
    spec: dict[str, Any] | None,
) -> list[dict[str, Any]]:
    """Collect the POST request body schemas, one per media type."""
    post = path_item.get("post")
    if not post:
        return []
    request_body = post.get("requestBody")
    if not request_body:
        return []
    content = request_body.get("content")
    if not content:
        return []

    schemas = []
    for media_type in content.values():
        schema = (media_type or {}).get("schema")
        if not schema:
            continue
        if "$ref" in schema:
            if spec is None:
                logger.debug("Can't resolve %s without an API document", schema["$ref"])
                continue
            schema = resolve_ref(spec, schema["$ref"])
        if schema.get("properties"):
            schemas.append(schema)
    return schemas


def extract_parameters(
    path_item: dict[str, Any],
    spec: dict[str, Any] | None = None,
) -> list[dict[str, Any]]:
    """Return the endpoint's parameters with POST body properties merged in.

    The path item itself is left untouched. Top-level parameters take
    precedence over body properties of the same name, and feeding the
    result back in as the top-level parameters adds nothing further.
    """
    params = [_normalize_parameter(p) for p in path_item.get("parameters") or []]

    # Seeded before any insertion so re-running over merged output is a no-op.
    seen = {p["name"] for p in params}

    for body_schema in _body_schemas(path_item, spec):
        required_fields = set(body_schema.get("required") or [])
        for prop_name, prop_schema in body_schema["properties"].items():
            if prop_name in seen:
                continue
            schema = normalize_schema(prop_schema)
            params.append({
                "name": prop_name,
                "description": schema.get("description") or "",
                "in": "post",
                "required": prop_name in required_fields,
                "schema": schema,
            })
            seen.add(prop_name)

    return params


def is_supported_schema(schema: dict[str, Any]) -> bool:
    """Check whether a normalized schema maps onto a Terraform field type."""
    schema_type = schema.get("type")
    if schema_type not in SUPPORTED_PARAM_TYPES:
        return False
    if schema_type == "array":
        items = schema.get("items") or {}
        return items.get("type", "string") == "string"
    return True


def _describe_type(schema: dict[str, Any]) -> str | None:
    schema_type = schema.get("type")
    if schema_type == "array":
        item_type = (schema.get("items") or {}).get("type")
        return f"array of {item_type}"
    return schema_type


def validate_parameters(path: str, params: list[dict[str, Any]]) -> None:
    """Raise UnsupportedSchemaError on the first parameter we can't express."""
    for param in params:
        if is_supported_schema(param["schema"]):
            continue
        param_type = _describe_type(param["schema"])
        logger.error(
            "can't generate %r because parameter type of %r for %s is unsupported",
            path, param_type, param["name"],
        )
        raise UnsupportedSchemaError(path, param["name"], param_type)
