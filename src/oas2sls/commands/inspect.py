"""Inspect command -- preview the functions a conversion would generate.

Implements ``oas2sls inspect``: runs the same pipeline as ``convert`` and
prints one table row per HTTP event (service, function, method, path),
without writing anything.
"""

from __future__ import annotations

from typing import Optional

import typer

from oas2sls.commands.common import (
    API_PREFIX_OPTION,
    AUTHORIZER_OPTION,
    BASE_PATH_OPTION,
    CORS_OPTION,
    FUNCTION_NAME_OPTION,
    INPUTS_ARGUMENT,
    OPERATION_ID_OPTION,
    OPTIONS_METHOD_OPTION,
    SERVICE_PREFIX_OPTION,
    collect_cli_options,
    load_and_convert,
)
from oas2sls.exceptions import Oas2SlsError
from oas2sls.output import error, print_table, warning


def inspect_command(
    inputs: Optional[list[str]] = INPUTS_ARGUMENT,
    api_prefix: Optional[str] = API_PREFIX_OPTION,
    service_prefix: Optional[str] = SERVICE_PREFIX_OPTION,
    base_path: Optional[bool] = BASE_PATH_OPTION,
    function_name: Optional[str] = FUNCTION_NAME_OPTION,
    operation_id: Optional[bool] = OPERATION_ID_OPTION,
    cors: Optional[bool] = CORS_OPTION,
    options_method: Optional[bool] = OPTIONS_METHOD_OPTION,
    authorizer: Optional[str] = AUTHORIZER_OPTION,
) -> None:
    """List the functions generated from Swagger/OpenAPI documents.

    Example::

        oas2sls inspect swagger.yaml --api-prefix api
        oas2sls --json inspect --api-prefix api --options-method
    """
    cli_options = collect_cli_options(
        api_prefix,
        service_prefix,
        base_path,
        function_name,
        operation_id,
        cors,
        options_method,
        authorizer,
    )

    try:
        configs, options, _ = load_and_convert(cli_options, inputs)
    except Oas2SlsError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    if not configs:
        warning(f"No operations tagged with prefix '{options.api_prefix}' found.")
        return

    headers = ["Service", "Function", "Method", "Path"]
    rows: list[list[str]] = []
    for config in configs:
        for name, function in config["functions"].items():
            for event in function["events"]:
                http = event["http"]
                rows.append(
                    [config["service"], name, http["method"].upper(), http["path"]]
                )

    print_table(headers, rows, title=f"Functions ({len(rows)} events)")
