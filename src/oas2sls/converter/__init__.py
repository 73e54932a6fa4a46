"""Converter -- turn operation descriptors into serverless function configs.

This sub-package is the second half of the oas2sls pipeline: it filters the
descriptors produced by :mod:`oas2sls.parser`, derives service and function
names, builds HTTP events and merges everything into one config per service.

Typical usage::

    from oas2sls.converter import convert
    from oas2sls.models import ConvertOptions

    configs = convert(documents, ConvertOptions(api_prefix="api", cors=True))

Sub-modules:

* :mod:`~oas2sls.converter.naming` -- Service-name and function-name
  derivation from tags, operation ids and path templates.
* :mod:`~oas2sls.converter.events` -- HTTP event construction, including
  required path parameter extraction.
* :mod:`~oas2sls.converter.merge` -- Deep merge and per-service grouping.
* :mod:`~oas2sls.converter.pipeline` -- Filtering and the end-to-end
  :func:`convert` entry point.
"""

from oas2sls.converter.merge import deep_merge, merge_configs
from oas2sls.converter.pipeline import convert, definition_to_config, is_target

__all__ = [
    "convert",
    "definition_to_config",
    "is_target",
    "merge_configs",
    "deep_merge",
]
