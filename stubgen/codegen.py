"""Render templates and write generated output.

Takes the context from context_builder and writes one Go source stub and
one documentation stub per endpoint. Nothing is written for endpoints
whose parameters can't be expressed; tests aren't generated because the
stubs are meant to be finished by hand first.
"""

from __future__ import annotations

import enum
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterable, Iterator, TextIO

import jinja2

from .context_builder import build_context
from .loader import get_path_item
from .naming import replace_slashes_with_dashes, strip_curly_braces
from .schema_parser import UnsupportedSchemaError

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"

# Output locations, relative to the target repository root.
GENERATED_CODE_DIR = Path("generated")
GENERATED_DOCS_DIR = Path("website") / "docs" / "generated"


class ArtifactKind(enum.Enum):
    """What is being generated. The value names the output subdirectory."""

    RESOURCE = "resources"
    DATA_SOURCE = "datasources"
    DOC = "doc"

    @classmethod
    def parse(cls, text: str) -> ArtifactKind:
        key = text.strip().lower().replace("-", "").replace("_", "")
        try:
            return _KIND_ALIASES[key]
        except KeyError:
            raise ValueError(f"unknown artifact kind {text!r}") from None


_KIND_ALIASES: dict[str, ArtifactKind] = {
    "resource": ArtifactKind.RESOURCE,
    "resources": ArtifactKind.RESOURCE,
    "datasource": ArtifactKind.DATA_SOURCE,
    "datasources": ArtifactKind.DATA_SOURCE,
    "doc": ArtifactKind.DOC,
    "docs": ArtifactKind.DOC,
}

TEMPLATES: dict[ArtifactKind, str] = {
    ArtifactKind.RESOURCE: "resource.go.j2",
    ArtifactKind.DATA_SOURCE: "data_source.go.j2",
    ArtifactKind.DOC: "doc.md.j2",
}


def make_environment(loader: jinja2.BaseLoader | None = None) -> jinja2.Environment:
    """Create the Jinja2 environment, reading the bundled templates by default."""
    return jinja2.Environment(
        loader=loader or jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=jinja2.StrictUndefined,
    )


def _require_code_kind(kind: ArtifactKind) -> None:
    if kind is ArtifactKind.DOC:
        raise ValueError("expected a resource or data source artifact kind, got doc")


def code_output_path(root: Path | str, kind: ArtifactKind, path: str) -> Path:
    """Map an endpoint to its Go file.

    /transform/transformation/{name} -> generated/resources/transform/transformation/name.go
    """
    _require_code_kind(kind)
    relative = strip_curly_braces(f"{kind.value}{path}.go")
    return Path(root) / GENERATED_CODE_DIR / relative


def doc_output_path(root: Path | str, kind: ArtifactKind, path: str) -> Path:
    """Map an endpoint to its doc file.

    /transform/transformation/{name} -> website/docs/generated/resources/transform-transformation-name.md
    """
    _require_code_kind(kind)
    filename = strip_curly_braces(f"{replace_slashes_with_dashes(path)}.md")
    return Path(root) / GENERATED_DOCS_DIR / kind.value / filename


@contextmanager
def _open_output(output_path: Path) -> Iterator[TextIO]:
    """Open a file for writing; flush and close it however the block exits.

    Flush and close failures are logged rather than raised.
    """
    f = open(output_path, "w", encoding="utf-8")
    try:
        yield f
    finally:
        try:
            f.flush()
        except OSError as exc:
            logger.error("Failed to flush %s: %s", output_path, exc)
        try:
            f.close()
        except OSError as exc:
            logger.error("Failed to close %s: %s", output_path, exc)


def generate_file(
    output_path: Path | str,
    kind: ArtifactKind,
    path: str,
    path_item: dict[str, Any],
    spec: dict[str, Any] | None = None,
    env: jinja2.Environment | None = None,
) -> Path:
    """Render the template for ``kind`` against one endpoint into ``output_path``."""
    output_path = Path(output_path)
    env = env or make_environment()
    template = env.get_template(TEMPLATES[kind])

    # Validation happens here, before anything touches disk.
    context = build_context(path, path_item, output_path.parent, spec)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with _open_output(output_path) as f:
        template.stream(**context).dump(f)

    logger.info("Generated %s", output_path)
    return output_path


def generate_code(
    root: Path | str,
    kind: ArtifactKind,
    path: str,
    path_item: dict[str, Any],
    spec: dict[str, Any] | None = None,
    env: jinja2.Environment | None = None,
) -> Path:
    """Generate the Go source stub for one resource or data source."""
    output_path = code_output_path(root, kind, path)
    return generate_file(output_path, kind, path, path_item, spec, env)


def generate_doc(
    root: Path | str,
    kind: ArtifactKind,
    path: str,
    path_item: dict[str, Any],
    spec: dict[str, Any] | None = None,
    env: jinja2.Environment | None = None,
) -> Path:
    """Generate the starter doc for one resource or data source.

    The doc has placeholders for the author to fill in.
    """
    output_path = doc_output_path(root, kind, path)
    return generate_file(output_path, ArtifactKind.DOC, path, path_item, spec, env)


def generate_files(
    root: Path | str,
    kind: ArtifactKind,
    path: str,
    path_item: dict[str, Any],
    spec: dict[str, Any] | None = None,
    env: jinja2.Environment | None = None,
) -> tuple[Path, Path]:
    """Generate the code and the doc for one endpoint.

    For "/transform/transformation/{name}" as a resource that's
    generated/resources/transform/transformation/name.go and
    website/docs/generated/resources/transform-transformation-name.md.
    """
    env = env or make_environment()
    code_path = generate_code(root, kind, path, path_item, spec, env)
    doc_path = generate_doc(root, kind, path, path_item, spec, env)
    return code_path, doc_path


def generate_batch(
    root: Path | str,
    kind: ArtifactKind,
    spec: dict[str, Any],
    endpoints: Iterable[str],
    env: jinja2.Environment | None = None,
) -> dict[str, list[Any]]:
    """Generate files for several endpoints of one API document.

    Endpoints with unsupported parameter types are skipped; any other
    error stops the batch.
    """
    env = env or make_environment()
    generated: list[Path] = []
    skipped: list[str] = []

    for path in endpoints:
        path_item = get_path_item(spec, path)
        try:
            generated.extend(generate_files(root, kind, path, path_item, spec, env))
        except UnsupportedSchemaError as exc:
            logger.warning("Skipping %s: %s", path, exc)
            skipped.append(path)

    logger.info("Generated %d files, skipped %d endpoints", len(generated), len(skipped))
    return {"generated": generated, "skipped": skipped}
