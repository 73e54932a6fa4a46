"""Shared test fixtures for oas2sls.

Provides reusable fixtures for loading the document fixtures, building
operation descriptors, isolating the working directory and environment, and
managing output state. These fixtures are automatically discovered by pytest.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pytest
import yaml

from oas2sls.models import ConvertOptions, OperationDescriptor
from oas2sls.output import reset_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager and package logger after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time; once CliRunner restores the real streams those references
    are stale, so a fresh manager is created on next use.
    """
    yield
    reset_output()
    logger = logging.getLogger("oas2sls")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


# ---------------------------------------------------------------------------
# Document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def shop_swagger_path() -> Path:
    """Path of the Swagger 2.0 shop fixture."""
    return FIXTURES_DIR / "shop_swagger.yaml"


@pytest.fixture
def shop_swagger_raw(shop_swagger_path: Path) -> dict[str, Any]:
    """Raw Swagger 2.0 shop document."""
    return yaml.safe_load(shop_swagger_path.read_text(encoding="utf-8"))


@pytest.fixture
def catalog_openapi_path() -> Path:
    """Path of the OpenAPI 3.0 catalog fixture."""
    return FIXTURES_DIR / "catalog_openapi.yaml"


@pytest.fixture
def catalog_openapi_raw(catalog_openapi_path: Path) -> dict[str, Any]:
    """Raw OpenAPI 3.0 catalog document."""
    return yaml.safe_load(catalog_openapi_path.read_text(encoding="utf-8"))


@pytest.fixture
def api_options() -> ConvertOptions:
    """Default options selecting ``api-*`` tags."""
    return ConvertOptions(api_prefix="api")


# ---------------------------------------------------------------------------
# Environment isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points XDG_DATA_HOME into tmp_path, clears every OAS2SLS_* environment
    variable and changes the working directory to tmp_path so that project
    config and swagger discovery only see files the test creates.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))

    for var in [
        "OAS2SLS_API_PREFIX",
        "OAS2SLS_SERVICE_PREFIX",
        "OAS2SLS_FUNCTION_NAME",
        "OAS2SLS_AUTHORIZER",
        "OAS2SLS_CONFIG",
    ]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Descriptor factory
# ---------------------------------------------------------------------------


@pytest.fixture
def make_descriptor():
    """Factory building descriptors; ``tags=None`` omits the ``tags`` key."""

    def _make(
        path: str = "/users",
        method: str = "get",
        tags: Any = ("api-Users",),
        **operation: Any,
    ) -> OperationDescriptor:
        op = dict(operation)
        if tags is not None:
            op["tags"] = list(tags)
        return OperationDescriptor(path=path, method=method, operation=op)

    return _make
