"""Derive Go identifier prefixes and file names from endpoint paths.

The last path segment seeds the function prefix, so several generated
files can share a directory without their symbols colliding:

  /transform/{name}                  -> Name / name
  /transform/transformation/{name}   -> Name / name
  /auth/{backend}/role/{role_name}   -> Rolename / rolename
  /pki/roles                         -> Roles / roles

File names flatten the path instead:

  /transform/transformation/{name}   -> transform-transformation-name
"""

from __future__ import annotations

import re

# A word starts after any character that isn't a letter, digit or underscore.
_WORD_START = re.compile(r"(^|[^0-9A-Za-z_])([a-z])")


def strip_curly_braces(path: str) -> str:
    """Remove placeholder braces: 'x/{name}.go' -> 'x/name.go'."""
    return path.replace("{", "").replace("}", "")


def replace_slashes_with_dashes(path: str) -> str:
    """Flatten '/transform/transformation/{name}' to 'transform-transformation-{name}'."""
    if path.startswith("/"):
        path = path[1:]
    return path.replace("/", "-")


def _title(word: str) -> str:
    return _WORD_START.sub(lambda m: m.group(1) + m.group(2).upper(), word)


def func_prefix(path: str) -> str:
    """Return the naming seed for an endpoint path.

    That's the last segment (the only one, if there are no separators),
    without braces or underscores since Go identifiers here are camel case.
    """
    fields = path.split("/")
    prefix = fields[-1] if len(fields) > 1 else fields[0]
    prefix = strip_curly_braces(prefix)
    return prefix.replace("_", "")


def exported_prefix(path: str) -> str:
    return _title(func_prefix(path).lower())


def private_prefix(path: str) -> str:
    return func_prefix(path).lower()
