"""Load a Vault-style OpenAPI document and look up path items.

Also locates the target repository root for callers that want to derive
it from a working directory.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

DEFAULT_REPO_NAME = "terraform-provider-vault"


def load_spec(path: Path | str) -> dict[str, Any]:
    """Load an OpenAPI document from disk."""
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def get_paths(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract paths from the API document."""
    return spec.get("paths") or {}


def get_path_item(spec: dict[str, Any], path: str) -> dict[str, Any]:
    """Return the path item for one endpoint.

    Raises KeyError if the document doesn't describe the endpoint.
    """
    paths = get_paths(spec)
    if path not in paths:
        raise KeyError(f"endpoint {path!r} not found in API document")
    return paths[path] or {}


def resolve_ref(spec: dict[str, Any], ref: str) -> dict[str, Any]:
    """Resolve a $ref pointer in the API document."""
    parts = ref.lstrip("#/").split("/")
    node = spec
    for part in parts:
        node = node[part]
    return node


def find_repo_root(start: Path | str, repo_name: str = DEFAULT_REPO_NAME) -> Path:
    """Return the outermost directory named ``repo_name`` containing ``start``.

    Falls back to ``start`` itself when no ancestor has that name.
    """
    start = Path(start).resolve()
    for candidate in reversed((start, *start.parents)):
        if candidate.name == repo_name:
            return candidate
    return start
