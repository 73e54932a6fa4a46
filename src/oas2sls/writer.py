"""Serialize generated service configs to YAML or JSON.

:func:`dump_configs` renders every service config into one text document (a
multi-document YAML stream, or a JSON array) for printing to stdout.
:func:`write_configs` writes one file per service, ``<service>.yml`` or
``<service>.json``, into an output directory. Key order is preserved so the
files read like hand-written ``serverless.yml`` fragments.

All file writes use an atomic temp-file-then-rename strategy
(:func:`_atomic_write`) so an interrupted run never leaves a truncated config
behind.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

import yaml

from oas2sls.models import ConfigFormat

logger = logging.getLogger(__name__)

_DEFAULT_SERVICE_FILENAME = "default"
_EXTENSIONS = {ConfigFormat.YAML: ".yml", ConfigFormat.JSON: ".json"}


def dump_config(config: dict[str, Any], fmt: ConfigFormat = ConfigFormat.YAML) -> str:
    """Render a single service config as text."""
    if fmt == ConfigFormat.JSON:
        return json.dumps(config, indent=2, ensure_ascii=False) + "\n"
    return yaml.safe_dump(
        config, sort_keys=False, default_flow_style=False, allow_unicode=True
    )


def dump_configs(
    configs: list[dict[str, Any]], fmt: ConfigFormat = ConfigFormat.YAML
) -> str:
    """Render all service configs as one text document.

    YAML output is a ``---``-separated stream with one document per service;
    JSON output is a single array.
    """
    if fmt == ConfigFormat.JSON:
        return json.dumps(configs, indent=2, ensure_ascii=False) + "\n"
    return yaml.safe_dump_all(
        configs, sort_keys=False, default_flow_style=False, allow_unicode=True
    )


def config_filename(service: str, fmt: ConfigFormat = ConfigFormat.YAML) -> str:
    """File name for a service config; an empty service name maps to ``default``."""
    return f"{service or _DEFAULT_SERVICE_FILENAME}{_EXTENSIONS[fmt]}"


def write_configs(
    configs: list[dict[str, Any]],
    output_dir: str | Path,
    fmt: ConfigFormat = ConfigFormat.YAML,
) -> list[Path]:
    """Write one file per service config into *output_dir*.

    The directory is created if needed and existing files are replaced.

    Returns:
        The written paths, in the order of *configs*.
    """
    directory = Path(output_dir)
    written: list[Path] = []
    for config in configs:
        path = directory / config_filename(config["service"], fmt)
        _atomic_write(path, dump_config(config, fmt))
        logger.debug("Wrote %s", path)
        written.append(path)
    return written


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. On any failure the
    temp file is removed.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close below
        os.replace(tmp_path, path)
    except BaseException:
        # Clean up the temp file on any error (including KeyboardInterrupt).
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise
