"""Canonical Pydantic models shared across all oas2sls modules.

This is the single source of truth for data shapes in the project. The models
fall into two groups:

**Configuration models** -- resolved from CLI flags, environment variables and
the project-local ``oas2sls.json`` file:
    :class:`ConvertOptions`, :class:`ConfigFormat` and :class:`ProjectConfig`.

**Pipeline models** -- produced by the operation extractor and consumed by the
converter:
    :class:`HTTPMethod` and :class:`OperationDescriptor`.

Function config fragments and final service configs are deliberately plain
``dict`` objects: they are handed straight to the YAML/JSON serializer and
their shape is the ``functions`` block of a ``serverless.yml``.

All models use Pydantic v2. Option fields are snake_case in Python and accept
the camelCase spelling (``apiPrefix``, ``optionsMethod``...) as an alias, so
project config files written for either convention validate.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Options ---


class ConvertOptions(BaseModel):
    """Options controlling how operations become serverless functions.

    Only operations carrying a tag that starts with ``api_prefix`` are
    converted; the remainder of that tag names the service the function
    belongs to.

    Example::

        ConvertOptions(api_prefix="api", service_prefix="svc", cors=True)
        ConvertOptions.model_validate({"apiPrefix": "api", "optionsMethod": True})
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    api_prefix: str = Field(
        alias="apiPrefix",
        description="Tag prefix selecting the operations to convert",
    )
    service_prefix: Optional[str] = Field(
        default=None,
        alias="servicePrefix",
        description="Prepended (with a hyphen) to every derived service name",
    )
    base_path: bool = Field(
        default=False,
        alias="basePath",
        description="Treat the first path segment as a base path and strip it",
    )
    function_name: Optional[str] = Field(
        default=None,
        alias="functionName",
        description="Force a single function name for every matched operation",
    )
    operation_id: bool = Field(
        default=False,
        alias="operationId",
        description="Prefer the operation's operationId as the function name",
    )
    cors: bool = Field(default=False, description="Enable CORS on every HTTP event")
    options_method: bool = Field(
        default=False,
        alias="optionsMethod",
        description="Synthesize an OPTIONS event per path with a non-GET method",
    )
    authorizer: Any = Field(
        default=None, description="Authorizer reference copied into every HTTP event"
    )


class ConfigFormat(str, enum.Enum):
    """Serialization formats for the generated service configs."""

    YAML = "yaml"
    JSON = "json"


class ProjectConfig(BaseModel):
    """Project-local settings read from ``./oas2sls.json``.

    Holds the non-option settings (inputs, output directory, format). The
    conversion options live in the same flat JSON object and are picked up
    by :func:`~oas2sls.config.resolve_config`; extra keys are kept in
    ``model_extra`` for that purpose.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    input: list[str] = Field(default_factory=list)
    output_dir: Optional[str] = Field(default=None, alias="outputDir")
    format: ConfigFormat = ConfigFormat.YAML


# --- Pipeline Models ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods recognised as operations in Swagger/OpenAPI path items."""

    GET = "get"
    PUT = "put"
    POST = "post"
    DELETE = "delete"
    OPTIONS = "options"
    HEAD = "head"
    PATCH = "patch"
    TRACE = "trace"


class OperationDescriptor(BaseModel):
    """One (path, method, operation) triple extracted from an API document.

    ``operation`` is the raw operation mapping (tags, operationId,
    parameters...). Descriptors are immutable; every pipeline stage builds
    new values from them.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    method: str
    operation: dict[str, Any] = Field(default_factory=dict)
    synthetic: bool = Field(
        default=False, description="True for generated OPTIONS descriptors"
    )

    @property
    def tags(self) -> Optional[list[Any]]:
        """The operation's ``tags`` list, or ``None`` when it declares none."""
        tags = self.operation.get("tags")
        return tags if isinstance(tags, list) else None
