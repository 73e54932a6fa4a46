"""oas2sls -- Generate Serverless Framework function configs from OpenAPI specs.

This package reads one or more Swagger 2.0 / OpenAPI 3.x documents and derives,
per logical service, the ``functions`` block of a ``serverless.yml``: one
function per tagged operation, each with an HTTP event carrying the path,
method, required path parameters, CORS flag and authorizer.

Typical workflow::

    oas2sls convert swagger.yaml --api-prefix api -o build/
    oas2sls inspect swagger.yaml --api-prefix api

Modules:
    app: Typer application factory and CLI entry point.
    models: Pydantic models shared across the package.
    config: Option resolution (CLI > env > project file > defaults).
    casing: kebab/dot/pascal case primitives used for name derivation.
    writer: YAML/JSON serialization of the generated service configs.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.3.0"
