"""Dereference internal ``$ref`` pointers in Swagger/OpenAPI documents.

Shared parameters are commonly declared once (``#/parameters/userId`` in
Swagger 2.0, ``#/components/parameters/userId`` in OpenAPI 3.x) and referenced
from operations. The converter needs the ``in``/``required``/``name`` fields
of those parameters, so :func:`deref` replaces a ``{"$ref": "#/..."}`` mapping
with its target.

Only **internal** references (``#/...``) are followed. External file or URL
references are returned unchanged, as are pointers that do not resolve.
Chains of references are followed until a non-reference value is reached;
a cycle stops at the first repeated pointer.
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


def deref(obj: Any, root: dict[str, Any]) -> Any:
    """Return the object *obj* points to, or *obj* itself if it is no reference.

    Args:
        obj: Any node of the document; only dicts with a ``$ref`` key are
            resolved.
        root: The document the pointer is relative to.

    Example::

        root = {"parameters": {"id": {"name": "id", "in": "path"}}}
        deref({"$ref": "#/parameters/id"}, root)
        # {"name": "id", "in": "path"}
    """
    seen: set[str] = set()
    current = obj
    while isinstance(current, dict) and isinstance(current.get("$ref"), str):
        ref = current["$ref"]
        if not ref.startswith("#/"):
            logger.debug("Leaving external $ref unresolved: %s", ref)
            return current
        if ref in seen:
            logger.debug("Circular $ref left unresolved: %s", ref)
            return current
        seen.add(ref)
        target = _resolve_pointer(ref, root)
        if target is None:
            logger.debug("Dangling $ref left unresolved: %s", ref)
            return current
        current = target
    return current


def _resolve_pointer(ref: str, root: dict[str, Any]) -> Any:
    """Walk a ``#/a/b/c`` JSON Pointer through *root*.

    Handles RFC 6901 escaping (``~1`` for ``/``, ``~0`` for ``~``). Returns
    ``None`` when any segment is missing.
    """
    current: Any = root
    for segment in ref[2:].split("/"):
        segment = segment.replace("~1", "/").replace("~0", "~")
        if isinstance(current, dict):
            if segment not in current:
                return None
            current = current[segment]
        elif isinstance(current, list):
            try:
                current = current[int(segment)]
            except (ValueError, IndexError):
                return None
        else:
            return None
    return current
