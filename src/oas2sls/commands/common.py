"""Options and pipeline invocation shared by the ``convert`` and ``inspect`` commands."""

from __future__ import annotations

from typing import Any, Optional

import typer

from oas2sls.models import ConvertOptions, ProjectConfig

INPUTS_ARGUMENT = typer.Argument(
    None,
    help="Swagger/OpenAPI files or URLs ('-' for stdin). "
    "Defaults to swagger.yaml in the current directory.",
    show_default=False,
)
API_PREFIX_OPTION = typer.Option(
    None, "--api-prefix", "-a", help="Tag prefix selecting the operations to convert."
)
SERVICE_PREFIX_OPTION = typer.Option(
    None, "--service-prefix", "-s", help="Prefix prepended to every service name."
)
BASE_PATH_OPTION = typer.Option(
    None,
    "--base-path/--no-base-path",
    help="Treat the first path segment as a base path and strip it.",
    show_default=False,
)
FUNCTION_NAME_OPTION = typer.Option(
    None, "--function-name", help="Use one fixed function name for every operation."
)
OPERATION_ID_OPTION = typer.Option(
    None,
    "--operation-id/--no-operation-id",
    help="Use operationId as the function name when present.",
    show_default=False,
)
CORS_OPTION = typer.Option(
    None, "--cors/--no-cors", help="Enable CORS on every HTTP event.", show_default=False
)
OPTIONS_METHOD_OPTION = typer.Option(
    None,
    "--options-method/--no-options-method",
    help="Add an OPTIONS event for every path with a non-GET method.",
    show_default=False,
)
AUTHORIZER_OPTION = typer.Option(
    None,
    "--authorizer",
    help="Authorizer for every HTTP event: a name, an ARN, or a JSON object.",
)


def collect_cli_options(
    api_prefix: Optional[str],
    service_prefix: Optional[str],
    base_path: Optional[bool],
    function_name: Optional[str],
    operation_id: Optional[bool],
    cors: Optional[bool],
    options_method: Optional[bool],
    authorizer: Optional[str],
) -> dict[str, Any]:
    """Gather the option flags into a dict for :func:`~oas2sls.config.resolve_config`."""
    from oas2sls.config import parse_authorizer

    return {
        "api_prefix": api_prefix,
        "service_prefix": service_prefix,
        "base_path": base_path,
        "function_name": function_name,
        "operation_id": operation_id,
        "cors": cors,
        "options_method": options_method,
        "authorizer": parse_authorizer(authorizer),
    }


def load_and_convert(
    cli_options: dict[str, Any],
    inputs: Optional[list[str]],
    output_dir: Optional[str] = None,
    fmt: Optional[str] = None,
) -> tuple[list[dict[str, Any]], ConvertOptions, ProjectConfig]:
    """Resolve configuration, load the documents and run the conversion.

    Returns:
        ``(configs, options, project)``.

    Raises:
        Oas2SlsError: Any configuration, discovery or parse failure.
    """
    from oas2sls.config import resolve_config
    from oas2sls.converter import convert
    from oas2sls.output import debug, info
    from oas2sls.parser import load_documents

    options, project = resolve_config(
        cli_options=cli_options,
        cli_inputs=inputs,
        cli_output_dir=output_dir,
        cli_format=fmt,
    )
    debug(f"Options: {options.model_dump(by_alias=True)}")

    documents = load_documents(project.input)
    info(f"Loaded {len(documents)} document(s)")

    return convert(documents, options), options, project
