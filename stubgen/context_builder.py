"""Build the Jinja2 template context for one endpoint.

Merges body parameters, rejects unsupported types, sorts parameters
and derives naming prefixes and capability flags.
"""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from .naming import exported_prefix, private_prefix
from .schema_parser import extract_parameters, validate_parameters


def _has_operation(path_item: dict[str, Any], method: str) -> bool:
    return path_item.get(method) is not None


def build_context(
    path: str,
    path_item: dict[str, Any],
    parent_dir: Path | str,
    spec: dict[str, Any] | None = None,
) -> Mapping[str, Any]:
    """Build the read-only rendering context for one endpoint.

    Raises UnsupportedSchemaError if any parameter has a type we can't
    generate code for.
    """
    params = extract_parameters(path_item, spec)
    validate_parameters(path, params)

    # Parameters originate from maps upstream; sorting keeps regenerated
    # files stable.
    params.sort(key=lambda p: p["name"])

    return MappingProxyType({
        "endpoint": path,
        "dir_name": Path(parent_dir).name,
        "exported_func_prefix": exported_prefix(path),
        "private_func_prefix": private_prefix(path),
        "parameters": tuple(params),
        "supports_read": _has_operation(path_item, "get"),
        "supports_write": _has_operation(path_item, "post"),
        "supports_delete": _has_operation(path_item, "delete"),
    })
