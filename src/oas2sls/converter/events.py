"""Build the HTTP event attached to each generated function.

An event is the ``http`` entry of a serverless function's ``events`` list::

    {"http": {
        "path": "/users/{id}",
        "method": "get",
        "integration": "lambda-proxy",
        "request": {"parameters": {"paths": {"id": True}}},   # optional
        "cors": True,                                         # optional
        "authorizer": "arn:aws:lambda:...",                   # optional
    }}

``request`` is present only when the operation declares at least one
required path parameter. ``cors`` is set when the ``cors`` option is on, or
when ``options_method`` is on and the event is a GET (the synthetic OPTIONS
handler answers preflight requests for the other verbs).
"""

from __future__ import annotations

from typing import Any, Optional

from oas2sls.models import ConvertOptions, HTTPMethod, OperationDescriptor

INTEGRATION = "lambda-proxy"


def extract_parameters(
    descriptor: OperationDescriptor,
) -> Optional[dict[str, dict[str, bool]]]:
    """Collect the required path parameters of a descriptor's operation.

    Only parameters with ``in: path`` and ``required: true`` count.

    Returns:
        ``{"paths": {name: True, ...}}``, or ``None`` when there are no such
        parameters and the ``request`` block should be omitted.
    """
    paths: dict[str, bool] = {}
    for param in descriptor.operation.get("parameters") or []:
        if not isinstance(param, dict):
            continue
        name = param.get("name")
        if param.get("in") == "path" and param.get("required") is True and name:
            paths[str(name)] = True

    if not paths:
        return None
    return {"paths": paths}


def rewrite_path(path: str, base_path: bool) -> str:
    """Return the event path, dropping the first segment when *base_path* is set.

    Example::

        >>> rewrite_path("/v1/users/{id}", True)
        '/users/{id}'
        >>> rewrite_path("/v1", True)
        '/'
    """
    if not base_path:
        return path
    parts = path[1:].split("/")
    if len(parts) == 1:
        return "/"
    return "/" + "/".join(parts[1:])


def build_http_event(
    descriptor: OperationDescriptor, options: ConvertOptions
) -> dict[str, Any]:
    """Build the ``{"http": {...}}`` event for *descriptor*."""
    http: dict[str, Any] = {
        "path": rewrite_path(descriptor.path, options.base_path),
        "method": descriptor.method,
        "integration": INTEGRATION,
    }

    params = extract_parameters(descriptor)
    if params is not None:
        http["request"] = {"parameters": params}

    if options.cors or (
        options.options_method and descriptor.method == HTTPMethod.GET.value
    ):
        http["cors"] = True

    if options.authorizer:
        http["authorizer"] = options.authorizer

    return {"http": http}
