"""Configuration resolution with a CLI > env > project-file > defaults chain.

This module turns the scattered sources of settings into the two objects the
rest of oas2sls works with:

* **Conversion options** -- a :class:`~oas2sls.models.ConvertOptions`
  controlling name derivation and event construction.
* **Project settings** -- a :class:`~oas2sls.models.ProjectConfig` holding
  input documents, output directory and output format.

Both are resolved by :func:`resolve_config` with the precedence documented
there. The project-local ``oas2sls.json`` file is a single flat JSON object;
option keys may use either snake_case or camelCase::

    {
      "apiPrefix": "api",
      "servicePrefix": "shop",
      "cors": true,
      "input": ["swagger.yaml"],
      "outputDir": "serverless"
    }

The module also owns the user data directory (XDG compliant on Linux/BSD)
where crash logs are written.
"""

from __future__ import annotations

import json
import os
import platform
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from oas2sls.exceptions import ConfigError, InvalidUsageError
from oas2sls.models import ConfigFormat, ConvertOptions, ProjectConfig

_APP_NAME = "oas2sls"
_PROJECT_CONFIG_FILENAME = "oas2sls.json"

# Environment variable -> ConvertOptions field
_ENV_OPTIONS = {
    "OAS2SLS_API_PREFIX": "api_prefix",
    "OAS2SLS_SERVICE_PREFIX": "service_prefix",
    "OAS2SLS_FUNCTION_NAME": "function_name",
    "OAS2SLS_AUTHORIZER": "authorizer",
}

# Both spellings of every option key, mapped to the field name
_OPTION_KEYS: dict[str, str] = {}
for _name, _field in ConvertOptions.model_fields.items():
    _OPTION_KEYS[_name] = _name
    if _field.alias:
        _OPTION_KEYS[_field.alias] = _name


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/oas2sls/`` (default ``~/.local/share/oas2sls/``).
    On macOS/Windows: ``~/.oas2sls/``.
    """
    if _is_xdg_platform():
        env_value = os.environ.get("XDG_DATA_HOME", "")
        base = Path(env_value) if env_value else Path.home() / ".local" / "share"
        path = base / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Project-local config ---


def project_config_path() -> Path:
    """Path of the project config file.

    ``OAS2SLS_CONFIG`` overrides the default ``./oas2sls.json``.
    """
    override = os.environ.get("OAS2SLS_CONFIG")
    if override:
        return Path(override)
    return Path.cwd() / _PROJECT_CONFIG_FILENAME


def load_project_config() -> Optional[dict[str, Any]]:
    """Load the project-local configuration file.

    Returns:
        The parsed JSON object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a valid JSON object.
    """
    path = project_config_path()
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(
            f"Invalid project config at {path}: expected a JSON object, "
            f"got {type(data).__name__}"
        )
    return data


# --- Value parsing ---


def parse_authorizer(value: Optional[str]) -> Any:  # noqa: ANN401
    """Parse an authorizer given as text.

    JSON objects (``{"name": "auth", "type": "TOKEN"}``) are decoded; any
    other text, such as an ARN or an authorizer function name, is returned
    as-is.
    """
    if value is None:
        return None
    try:
        parsed = json.loads(value)
    except (json.JSONDecodeError, TypeError):
        return value
    return parsed if isinstance(parsed, dict) else value


def _option_values(data: dict[str, Any]) -> dict[str, Any]:
    """Pick the conversion option keys out of *data*, normalised to field names."""
    return {_OPTION_KEYS[key]: value for key, value in data.items() if key in _OPTION_KEYS}


# --- Precedence resolution ---


def resolve_config(
    cli_options: Optional[dict[str, Any]] = None,
    cli_inputs: Optional[list[str]] = None,
    cli_output_dir: Optional[str] = None,
    cli_format: Optional[str] = None,
) -> tuple[ConvertOptions, ProjectConfig]:
    """Resolve conversion options and project settings.

    Precedence (high to low):
        1. CLI values (``None`` entries in *cli_options* are ignored)
        2. Environment variables (``OAS2SLS_API_PREFIX``,
           ``OAS2SLS_SERVICE_PREFIX``, ``OAS2SLS_FUNCTION_NAME``,
           ``OAS2SLS_AUTHORIZER``)
        3. Project config (``./oas2sls.json`` or ``$OAS2SLS_CONFIG``)
        4. Defaults

    Returns:
        A tuple of ``(options, project_config)``.

    Raises:
        ConfigError: If the project file is invalid, or no ``api_prefix``
            was given by any source.
        InvalidUsageError: If *cli_format* names an unknown format.
    """
    project_data = load_project_config() or {}

    # 3. Project config
    values = _option_values(project_data)

    # 2. Environment variables
    for env_var, field in _ENV_OPTIONS.items():
        env_value = os.environ.get(env_var)
        if env_value:
            values[field] = (
                parse_authorizer(env_value) if field == "authorizer" else env_value
            )

    # 1. CLI flags
    for key, value in (cli_options or {}).items():
        if value is not None:
            values[_OPTION_KEYS.get(key, key)] = value

    if not values.get("api_prefix"):
        raise ConfigError(
            "No API tag prefix configured. Pass --api-prefix, set "
            f"OAS2SLS_API_PREFIX, or add \"apiPrefix\" to {_PROJECT_CONFIG_FILENAME}."
        )

    try:
        options = ConvertOptions.model_validate(values)
        project = ProjectConfig.model_validate(
            {k: v for k, v in project_data.items() if k not in _OPTION_KEYS}
        )
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc

    updates: dict[str, Any] = {}
    if cli_inputs:
        updates["input"] = list(cli_inputs)
    if cli_output_dir is not None:
        updates["output_dir"] = cli_output_dir
    if cli_format is not None:
        try:
            updates["format"] = ConfigFormat(cli_format.lower())
        except ValueError as exc:
            raise InvalidUsageError(f"Unknown output format: {cli_format}") from exc
    if updates:
        project = project.model_copy(update=updates)

    return options, project
