"""API document parser -- load documents and extract operation descriptors.

This sub-package is responsible for the first half of the oas2sls pipeline:
turning raw Swagger 2.0 / OpenAPI 3.x documents (JSON or YAML, local file,
remote URL or stdin) into the flat list of
:class:`~oas2sls.models.OperationDescriptor` objects the converter consumes.

Typical usage::

    from oas2sls.parser import load_documents, extract_operations

    documents = load_documents(["swagger.yaml"])
    descriptors = extract_operations(documents, options)

Sub-modules:

* :mod:`~oas2sls.parser.loader` -- I/O layer (URL, file, stdin), format
  detection, swagger file discovery and version detection.
* :mod:`~oas2sls.parser.resolver` -- Internal ``$ref`` dereferencing.
* :mod:`~oas2sls.parser.extractor` -- Walks path items and produces
  operation descriptors.
"""

from oas2sls.parser.extractor import extract_operations
from oas2sls.parser.loader import (
    detect_spec_version,
    discover_spec,
    load_documents,
    load_spec,
)

__all__ = [
    "load_documents",
    "load_spec",
    "discover_spec",
    "detect_spec_version",
    "extract_operations",
]
