"""Flatten parsed API documents into a sequence of operation descriptors.

Each Swagger/OpenAPI path item maps lowercase HTTP verbs to operation
objects. :func:`extract_operations` walks every document, every path and every
verb in declaration order and yields one
:class:`~oas2sls.models.OperationDescriptor` per operation. Keys that are not
HTTP verbs (``parameters``, ``summary``, ``$ref``, ``x-*`` extensions...) are
not operations and are skipped.

When ``options_method`` is enabled, one synthetic ``options`` descriptor is
added per path that declares at least one non-GET operation. It reuses the
operation object of the first non-GET verb in declaration order, so its tags
(and therefore its service) match that operation.

Internal ``$ref`` entries in an operation's ``parameters`` list are
dereferenced against the owning document so later stages can read
``name``/``in``/``required`` directly.
"""

from __future__ import annotations

from typing import Any

from oas2sls.models import ConvertOptions, HTTPMethod, OperationDescriptor
from oas2sls.parser.resolver import deref

_HTTP_METHODS = frozenset(m.value for m in HTTPMethod)


def extract_operations(
    documents: list[dict[str, Any]], options: ConvertOptions
) -> list[OperationDescriptor]:
    """Extract operation descriptors from *documents*.

    Args:
        documents: Parsed documents as returned by
            :func:`~oas2sls.parser.loader.load_documents`.
        options: Conversion options; only ``options_method`` is read here.

    Returns:
        Descriptors in document, then path, then method order, with any
        synthetic OPTIONS descriptor following the declared operations of
        its path.
    """
    descriptors: list[OperationDescriptor] = []

    for document in documents:
        paths = document.get("paths") or {}
        for path, path_item in paths.items():
            if not isinstance(path_item, dict):
                continue

            methods = [
                key
                for key, value in path_item.items()
                if isinstance(key, str)
                and key.lower() in _HTTP_METHODS
                and isinstance(value, dict)
            ]

            for method in methods:
                descriptors.append(
                    OperationDescriptor(
                        path=path,
                        method=method.lower(),
                        operation=_prepare_operation(path_item[method], document),
                    )
                )

            if options.options_method:
                non_get = [m for m in methods if m.lower() != HTTPMethod.GET.value]
                if non_get:
                    descriptors.append(
                        OperationDescriptor(
                            path=path,
                            method=HTTPMethod.OPTIONS.value,
                            operation=_prepare_operation(
                                path_item[non_get[0]], document
                            ),
                            synthetic=True,
                        )
                    )

    return descriptors


def _prepare_operation(
    operation: dict[str, Any], document: dict[str, Any]
) -> dict[str, Any]:
    """Return a copy of *operation* with its parameter ``$ref`` entries resolved."""
    prepared = dict(operation)
    parameters = operation.get("parameters")
    if isinstance(parameters, list):
        prepared["parameters"] = [deref(param, document) for param in parameters]
    return prepared
