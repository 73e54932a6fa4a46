"""Convert command -- generate serverless function configs from API documents.

Implements ``oas2sls convert``. Without ``--output-dir`` the configs are
printed to stdout (a YAML stream, or a JSON array with ``--format json``);
with it, one ``<service>.yml`` file per service is written.
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
from oas2sls.output import error, info, print_document, success, warning


def convert_command(
    inputs: Optional[list[str]] = INPUTS_ARGUMENT,
    api_prefix: Optional[str] = API_PREFIX_OPTION,
    service_prefix: Optional[str] = SERVICE_PREFIX_OPTION,
    base_path: Optional[bool] = BASE_PATH_OPTION,
    function_name: Optional[str] = FUNCTION_NAME_OPTION,
    operation_id: Optional[bool] = OPERATION_ID_OPTION,
    cors: Optional[bool] = CORS_OPTION,
    options_method: Optional[bool] = OPTIONS_METHOD_OPTION,
    authorizer: Optional[str] = AUTHORIZER_OPTION,
    output_dir: Optional[str] = typer.Option(
        None, "--output-dir", "-o", help="Write one config file per service here."
    ),
    fmt: Optional[str] = typer.Option(
        None, "--format", "-f", help="Output format: yaml (default) or json."
    ),
) -> None:
    """Generate serverless function configs from Swagger/OpenAPI documents.

    Example::

        oas2sls convert swagger.yaml --api-prefix api
        oas2sls convert api.yaml --api-prefix api --cors -o serverless/
        oas2sls convert --api-prefix api --format json > functions.json
    """
    from oas2sls.writer import dump_configs, write_configs

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
        configs, options, project = load_and_convert(
            cli_options, inputs, output_dir, fmt
        )
        if not configs:
            warning(f"No operations tagged with prefix '{options.api_prefix}' found.")
            return

        if project.output_dir:
            paths = write_configs(configs, project.output_dir, project.format)
            for path in paths:
                info(f"  {path}")
            success(f"Wrote {len(paths)} service config(s) to {project.output_dir}")
        else:
            print_document(dump_configs(configs, project.format), project.format.value)
    except Oas2SlsError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    except OSError as exc:
        error(f"Failed to write configs: {exc}")
        raise typer.Exit(code=1) from None
