"""Shared fixtures: small Vault-style OpenAPI path items and documents."""

from __future__ import annotations

from typing import Any

import jinja2
import pytest

from stubgen.codegen import make_environment


def make_path_item(**overrides: Any) -> dict[str, Any]:
    """Path item shaped like /transform/transformation/{name} in Vault's OpenAPI."""
    item: dict[str, Any] = {
        "description": "Read, write and delete transformations",
        "parameters": [
            {
                "name": "name",
                "description": "The name of the transformation.",
                "in": "path",
                "required": True,
                "schema": {"type": "string"},
            },
        ],
        "get": {"operationId": "transform-read-transformation-name"},
        "post": {
            "operationId": "transform-write-transformation-name",
            "requestBody": {
                "content": {
                    "application/json": {
                        "schema": {
                            "type": "object",
                            "properties": {
                                "type": {
                                    "type": "string",
                                    "description": "The type of transformation to perform.",
                                },
                                "template": {
                                    "type": "string",
                                    "description": "The name of the template to use.",
                                },
                                "tweak_source": {
                                    "type": "string",
                                    "description": "The source of where the tweak value comes from.",
                                },
                                "allowed_roles": {
                                    "type": "array",
                                    "items": {"type": "string"},
                                    "description": "The set of roles allowed to perform this transformation.",
                                },
                                "masking_character": {
                                    "type": "string",
                                    "description": "The character used to replace data when in masking mode",
                                    "x-vault-displayAttrs": {"name": "Masking character"},
                                },
                            },
                            "required": ["type"],
                        }
                    }
                }
            },
        },
        "delete": {"operationId": "transform-delete-transformation-name"},
    }
    item.update(overrides)
    return item


@pytest.fixture
def path_item() -> dict[str, Any]:
    return make_path_item()


@pytest.fixture
def spec() -> dict[str, Any]:
    """A document with one supported endpoint, one $ref body and one unsupported."""
    return {
        "openapi": "3.0.2",
        "info": {"title": "HashiCorp Vault API", "version": "1.5.0"},
        "paths": {
            "/transform/transformation/{name}": make_path_item(),
            "/transform/role/{name}": {
                "parameters": [
                    {
                        "name": "name",
                        "in": "path",
                        "required": True,
                        "schema": {"type": "string"},
                    },
                ],
                "get": {},
                "post": {
                    "requestBody": {
                        "content": {
                            "application/json": {
                                "schema": {"$ref": "#/components/schemas/TransformWriteRoleRequest"},
                            }
                        }
                    }
                },
            },
            "/sys/policies/password/{name}/generate": {
                "parameters": [
                    {"name": "name", "in": "path", "schema": {"type": "string"}},
                    {"name": "metadata", "in": "query", "schema": {"type": "object"}},
                ],
                "get": {},
            },
        },
        "components": {
            "schemas": {
                "TransformWriteRoleRequest": {
                    "type": "object",
                    "properties": {
                        "transformations": {
                            "type": "array",
                            "items": {"type": "string"},
                            "description": "A comma separated string or slice of transformations to use.",
                        },
                    },
                },
            },
        },
    }


# Minimal template bodies, swapped in so tests don't depend on the Go templates.
_TEST_TEMPLATES = {
    "resource.go.j2": (
        "resource {{ exported_func_prefix }} {{ private_func_prefix }} in {{ dir_name }}\n"
        "{% for p in parameters %}{{ p.name }}:{{ p['in'] }}\n{% endfor %}"
    ),
    "data_source.go.j2": "data source {{ endpoint }}\n",
    "doc.md.j2": "# {{ endpoint }} read={{ supports_read }} write={{ supports_write }}\n",
}


@pytest.fixture
def test_env() -> jinja2.Environment:
    return make_environment(jinja2.DictLoader(_TEST_TEMPLATES))
