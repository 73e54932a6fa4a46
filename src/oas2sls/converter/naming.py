"""Service-name and function-name derivation.

Both names are pure functions of an
:class:`~oas2sls.models.OperationDescriptor` and the
:class:`~oas2sls.models.ConvertOptions`; the same input always yields the same
name.

**Service names** come from the first tag starting with ``api_prefix``: the
prefix and the separator after it are dropped and the rest is kebab-cased,
e.g. ``api-UserProfiles`` -> ``user-profiles``.

**Function names** are, in order of precedence:

1. the ``function_name`` override, if set;
2. the operation's ``operationId``, when ``operation_id`` is enabled and the
   operation declares a string one;
3. a synthetic name built from the HTTP method and the path template.

The synthetic name is ``<method><Resources><Conditions>``:

* *Resources* are the literal segments after the last path parameter
  (literals before a parameter are discarded once the parameter is passed),
  each pascal-cased: ``/users/{id}/orders`` -> ``Orders``.
* *Conditions* are one token per path parameter: the parameter name is split
  into words, each word is cut to its first three characters and
  pascal-cased, and the pieces are joined. The first token is prefixed with
  ``With``: ``{userId}`` -> ``WithUseId``.

Example::

    get /users/{userId}/orders/{orderStatus}  -> getOrdersWithUseIdOrdSta
    post /orders/{orderId}/items              -> postItemsWithOrdId
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from functools import reduce
from typing import Optional

from oas2sls.casing import dot_case, kebab_case, pascal_case
from oas2sls.exceptions import Oas2SlsError
from oas2sls.models import ConvertOptions, OperationDescriptor

_PARAMETER_PATTERN = re.compile(r"\{.*\}")


class SegmentKind(str, enum.Enum):
    """Kind of a path template segment."""

    LITERAL = "literal"
    PARAMETER = "parameter"


@dataclass(frozen=True)
class PathSegment:
    """A single non-empty segment of a path template.

    ``value`` is the segment text without braces, so ``{userId}`` is stored
    as ``PathSegment(SegmentKind.PARAMETER, "userId")``.
    """

    kind: SegmentKind
    value: str

    @property
    def is_parameter(self) -> bool:
        return self.kind is SegmentKind.PARAMETER


# ---------------------------------------------------------------------------
# Tags and service names
# ---------------------------------------------------------------------------


def matching_tags(descriptor: OperationDescriptor, api_prefix: str) -> list[str]:
    """Return the descriptor's tags that start with *api_prefix*, in order."""
    return [
        tag
        for tag in descriptor.tags or []
        if isinstance(tag, str) and tag.startswith(api_prefix)
    ]


def extract_service_name(
    descriptor: OperationDescriptor, options: ConvertOptions
) -> str:
    """Derive the service a descriptor belongs to.

    Args:
        descriptor: A descriptor that passed
            :func:`~oas2sls.converter.pipeline.is_target`.
        options: Conversion options (``api_prefix``, ``service_prefix``).

    Returns:
        The kebab-cased tag remainder, prefixed with ``service_prefix-``
        when one is configured.

    Raises:
        Oas2SlsError: If the descriptor has no tag matching ``api_prefix``.
    """
    tags = matching_tags(descriptor, options.api_prefix)
    if not tags:
        raise Oas2SlsError(
            f"{descriptor.method.upper()} {descriptor.path} has no tag "
            f"starting with {options.api_prefix!r}"
        )

    service = kebab_case(tags[0][len(options.api_prefix) + 1 :])
    if options.service_prefix:
        return f"{options.service_prefix}-{service}"
    return service


# ---------------------------------------------------------------------------
# Function names
# ---------------------------------------------------------------------------


def extract_function_name(
    descriptor: OperationDescriptor, options: ConvertOptions
) -> str:
    """Derive the function name for a descriptor.

    See the module docstring for the precedence rules and the synthetic
    naming scheme.
    """
    if options.function_name:
        return options.function_name

    if options.operation_id:
        operation_id = descriptor.operation.get("operationId")
        if isinstance(operation_id, str):
            return operation_id

    segments = parse_path_segments(descriptor.path, options.base_path)
    return "".join(
        [descriptor.method, *resource_tokens(segments), *condition_tokens(segments)]
    )


def parse_path_segments(path: str, base_path: bool = False) -> list[PathSegment]:
    """Split a path template into typed segments.

    Empty segments are dropped. With *base_path*, the first remaining
    segment is dropped as well.

    Example::

        parse_path_segments("/v1/users/{id}", base_path=True)
        # [PathSegment(LITERAL, "users"), PathSegment(PARAMETER, "id")]
    """
    raw = [part for part in path.split("/") if part]
    if base_path:
        raw = raw[1:]
    return [_classify(part) for part in raw]


def _classify(part: str) -> PathSegment:
    if _PARAMETER_PATTERN.fullmatch(part):
        return PathSegment(SegmentKind.PARAMETER, part[1:-1])
    return PathSegment(SegmentKind.LITERAL, part)


def _fold_resource(
    acc: tuple[str, ...],
    step: tuple[Optional[PathSegment], PathSegment],
) -> tuple[str, ...]:
    previous, current = step
    if current.is_parameter:
        return acc
    if previous is not None and previous.is_parameter:
        return (current.value,)
    return acc + (current.value,)


def resource_tokens(segments: list[PathSegment]) -> list[str]:
    """Pascal-cased literal segments that follow the last path parameter.

    A literal directly after a parameter restarts the accumulation, so only
    the trailing run of literals survives. Without parameters, every literal
    is kept.
    """
    steps = zip([None, *segments], segments)
    return [pascal_case(value) for value in reduce(_fold_resource, steps, ())]


def condition_tokens(segments: list[PathSegment]) -> list[str]:
    """One token per path parameter, the first prefixed with ``With``.

    Each word of the parameter name is truncated to three characters before
    pascal-casing: ``orderStatus`` -> ``OrdSta``.
    """
    tokens: list[str] = []
    for index, segment in enumerate(s for s in segments if s.is_parameter):
        token = "".join(
            pascal_case(piece[:3]) for piece in dot_case(segment.value).split(".")
        )
        tokens.append(f"With{token}" if index == 0 else token)
    return tokens
