"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to an error category and is referenced by the
corresponding :class:`~oas2sls.exceptions.Oas2SlsError` subclass, so CI
scripts can tell a missing input document from a broken one without parsing
stderr.

Example::

    $ oas2sls convert --api-prefix api
    $ echo $?
    4   # EXIT_NOT_FOUND -- no swagger.yaml in the working directory
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred (including configuration problems)."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_NOT_FOUND = 4
"""No input document was given and none could be discovered."""

EXIT_SPEC_PARSE_ERROR = 7
"""An input document could not be read or parsed."""

EXIT_INTERRUPTED = 130
"""The run was cancelled with Ctrl-C."""
