"""The conversion pipeline: documents in, per-service function configs out.

Stages, in order::

    extract_operations -> is_target -> definition_to_config -> merge_configs

:func:`convert` runs all of them. The individual stages are public so callers
(and tests) can inspect intermediate results.
"""

from __future__ import annotations

import logging
from typing import Any

from oas2sls.converter.events import build_http_event
from oas2sls.converter.merge import merge_configs
from oas2sls.converter.naming import (
    extract_function_name,
    extract_service_name,
    matching_tags,
)
from oas2sls.models import ConvertOptions, OperationDescriptor
from oas2sls.parser.extractor import extract_operations

logger = logging.getLogger(__name__)


def is_target(descriptor: OperationDescriptor, options: ConvertOptions) -> bool:
    """Return True if the descriptor carries a tag starting with ``api_prefix``.

    Operations without tags are never targets. The match is a raw prefix
    test, so ``api2-users`` matches the prefix ``api``.
    """
    if descriptor.tags is None:
        return False
    return bool(matching_tags(descriptor, options.api_prefix))


def definition_to_config(
    descriptor: OperationDescriptor, options: ConvertOptions
) -> dict[str, Any]:
    """Build the single-function config fragment for a target descriptor.

    Returns:
        ``{"service": name, "functions": {function_name: {"handler": ...,
        "events": [http_event]}}}``.
    """
    service = extract_service_name(descriptor, options)
    function_name = extract_function_name(descriptor, options)

    return {
        "service": service,
        "functions": {
            function_name: {
                "handler": f"handler.{function_name}",
                "events": [build_http_event(descriptor, options)],
            }
        },
    }


def convert(
    documents: list[dict[str, Any]], options: ConvertOptions
) -> list[dict[str, Any]]:
    """Convert parsed API documents into per-service serverless function configs.

    Args:
        documents: Parsed Swagger/OpenAPI documents, in priority order.
        options: Conversion options.

    Returns:
        One ``{"service": ..., "functions": ...}`` mapping per service, ordered
        by first appearance.

    Example::

        documents = load_documents(["swagger.yaml"])
        configs = convert(documents, ConvertOptions(api_prefix="api"))
        for config in configs:
            print(config["service"], list(config["functions"]))
    """
    fragments: list[dict[str, Any]] = []
    for descriptor in extract_operations(documents, options):
        if not is_target(descriptor, options):
            logger.debug(
                "Skipping %s %s: no tag starting with %r",
                descriptor.method.upper(),
                descriptor.path,
                options.api_prefix,
            )
            continue
        if descriptor.synthetic:
            logger.debug(
                "Adding OPTIONS handler for %s (operation of another method reused)",
                descriptor.path,
            )
        fragments.append(definition_to_config(descriptor, options))

    configs = merge_configs(fragments)
    logger.debug(
        "Converted %d operation(s) into %d service(s)", len(fragments), len(configs)
    )
    return configs
