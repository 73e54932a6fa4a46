"""Load Swagger/OpenAPI documents from a URL, local file, or stdin.

This module handles all I/O for fetching raw API documents and converting
them into Python dictionaries. It supports both JSON and YAML with automatic
format detection, recognises Swagger 2.x and OpenAPI 3.x documents, and can
discover a ``swagger.yaml`` in the project root when no input is given.

The public functions are:

* :func:`load_documents` -- Resolve the input list (or discover one) and load
  every document, in order.
* :func:`load_spec` -- Load and parse a single document from any source.
* :func:`discover_spec` -- Find ``swagger.yaml`` / ``swagger.yml`` in a
  directory.
* :func:`detect_spec_version` -- Return the ``swagger``/``openapi`` version
  string, rejecting anything that is neither.
"""

from __future__ import annotations

import json
import logging
import re
import sys
from pathlib import Path
from typing import Any, Optional

import httpx
import yaml

from oas2sls.exceptions import SpecNotFoundError, SpecParseError

logger = logging.getLogger(__name__)

_DISCOVERY_PATTERN = re.compile(r"^swagger\.ya?ml$")


def load_documents(
    sources: list[str], root: Optional[Path] = None
) -> list[dict[str, Any]]:
    """Load every API document named in *sources*, in order.

    Empty strings are ignored. When nothing is left, the document is
    discovered in *root* via :func:`discover_spec`.

    Args:
        sources: File paths, URLs, or ``-`` for stdin.
        root: Directory searched when *sources* is empty. Defaults to the
            current working directory.

    Returns:
        The parsed documents, one per source.

    Raises:
        SpecNotFoundError: If no source is given and discovery finds nothing.
        SpecParseError: If any document cannot be loaded or is not a
            Swagger/OpenAPI document.
    """
    inputs = [source for source in sources if source]
    if not inputs:
        inputs = [str(discover_spec(root))]

    documents: list[dict[str, Any]] = []
    for source in inputs:
        raw = load_spec(source)
        version = detect_spec_version(raw)
        logger.debug("Loaded %s (version %s)", source, version)
        documents.append(raw)
    return documents


def discover_spec(root: Optional[Path] = None) -> Path:
    """Find the project's swagger file in *root*.

    Matches ``swagger.yaml`` and ``swagger.yml``; when both exist the first
    in sorted order wins.

    Args:
        root: Directory to search. Defaults to the current working directory.

    Returns:
        Absolute path to the discovered file.

    Raises:
        SpecNotFoundError: If *root* cannot be listed or holds no match.
    """
    directory = (root or Path.cwd()).resolve()
    try:
        names = sorted(p.name for p in directory.iterdir() if p.is_file())
    except OSError as exc:
        raise SpecNotFoundError(f"Cannot read directory {directory}: {exc}") from exc

    matches = [name for name in names if _DISCOVERY_PATTERN.match(name)]
    if not matches:
        raise SpecNotFoundError(
            f"Cannot find swagger file in {directory}. "
            "Pass the document path explicitly."
        )
    return directory / matches[0]


def load_spec(source: str) -> dict[str, Any]:
    """Load an API document from URL, file path, or stdin ('-').

    Supports JSON and YAML formats.
    Auto-detects format from content/extension.

    Args:
        source: A URL (http/https), file path, or '-' for stdin.

    Returns:
        The parsed document as a dictionary.

    Raises:
        SpecParseError: If the source cannot be loaded or parsed.
    """
    if source == "-":
        return _load_from_stdin()
    elif source.startswith(("http://", "https://")):
        return _load_from_url(source)
    else:
        return _load_from_file(source)


def _load_from_stdin() -> dict[str, Any]:
    """Read a document from stdin, trying JSON then YAML."""
    try:
        content = sys.stdin.read()
    except OSError as exc:
        raise SpecParseError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise SpecParseError("No input received from stdin")

    return _parse_content(content, hint="stdin")


def _load_from_url(url: str) -> dict[str, Any]:
    """Fetch a document from URL. Supports JSON and YAML responses.

    Raises:
        SpecParseError: If the URL cannot be fetched or content cannot be parsed.
    """
    try:
        response = httpx.get(url, timeout=30.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SpecParseError(
            f"HTTP {exc.response.status_code} fetching document from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise SpecParseError(f"Failed to fetch document from {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "")
    hint = ""
    if "json" in content_type:
        hint = "json"
    elif "yaml" in content_type or "yml" in content_type:
        hint = "yaml"

    return _parse_content(response.text, hint=hint)


def _load_from_file(path: str) -> dict[str, Any]:
    """Load a document from a local file.

    The ``.json``, ``.yaml`` and ``.yml`` extensions pick the parser; any
    other extension falls back to content-based detection.

    Raises:
        SpecParseError: If the file is missing, unreadable, empty, or unparseable.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise SpecParseError(f"Document not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SpecParseError(f"Failed to read document {path}: {exc}") from exc

    if not content.strip():
        raise SpecParseError(f"Document is empty: {path}")

    suffix = file_path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in (".yaml", ".yml"):
        hint = "yaml"

    return _parse_content(content, hint=hint)


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse content as JSON or YAML.

    Tries JSON first (unless hint is 'yaml'), then falls back to YAML.

    Args:
        content: The raw string content.
        hint: Optional format hint ('json' or 'yaml').

    Returns:
        The parsed dictionary.

    Raises:
        SpecParseError: If the content cannot be parsed as either format,
            or does not hold a mapping at the top level.
    """
    json_error: Exception | None = None

    if hint != "yaml":
        try:
            result = json.loads(content)
        except json.JSONDecodeError as exc:
            json_error = exc
            if hint == "json":
                raise SpecParseError(f"Invalid JSON: {exc}") from exc
        else:
            return _ensure_mapping(result)

    try:
        result = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        msg = "Failed to parse document as JSON or YAML"
        if json_error:
            msg += f"\n  JSON error: {json_error}"
        msg += f"\n  YAML error: {exc}"
        raise SpecParseError(msg) from exc

    return _ensure_mapping(result)


def _ensure_mapping(result: Any) -> dict[str, Any]:
    if not isinstance(result, dict):
        kind = type(result).__name__ if result is not None else "empty document"
        raise SpecParseError(f"Document must be a JSON/YAML object (got {kind})")
    return result


def detect_spec_version(spec: dict[str, Any]) -> str:
    """Return the Swagger/OpenAPI version string of *spec*.

    Swagger 2.x documents declare ``swagger: "2.0"``; OpenAPI 3.x documents
    declare ``openapi: "3.x.y"``. No further conformance checks are made.

    Raises:
        SpecParseError: If neither field is present, the version is not
            2.x / 3.x, or ``paths`` is not a mapping.
    """
    if "swagger" in spec:
        version = str(spec["swagger"])
        if not version.startswith("2"):
            raise SpecParseError(f"Unsupported Swagger version: {version}")
    elif "openapi" in spec:
        version = str(spec["openapi"])
        if not version.startswith("3."):
            raise SpecParseError(f"Unsupported OpenAPI version: {version}")
    else:
        raise SpecParseError(
            "Missing 'swagger' or 'openapi' field. Is this an API description document?"
        )

    paths = spec.get("paths", {})
    if paths is not None and not isinstance(paths, dict):
        raise SpecParseError(
            f"'paths' must be a mapping (got {type(paths).__name__})"
        )
    return version
