"""Exception hierarchy for oas2sls.

All exceptions inherit from :class:`Oas2SlsError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`oas2sls.exit_codes`.
The top-level error handler in :func:`oas2sls.app.main` catches
``Oas2SlsError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    Oas2SlsError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- SpecNotFoundError   (exit 4)
    +-- SpecParseError      (exit 7)
    +-- ConfigError         (exit 1)
"""

from oas2sls.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_SPEC_PARSE_ERROR,
)


class Oas2SlsError(Exception):
    """Base exception for all oas2sls errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(Oas2SlsError):
    """Raised for invalid CLI arguments (e.g. an unknown output format)."""

    exit_code = EXIT_INVALID_USAGE


class SpecNotFoundError(Oas2SlsError):
    """Raised when no input document was given and none could be discovered."""

    exit_code = EXIT_NOT_FOUND


class SpecParseError(Oas2SlsError):
    """Raised when an API document cannot be read, parsed, or is not Swagger/OpenAPI."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class ConfigError(Oas2SlsError):
    """Raised for configuration problems (invalid project file, missing api prefix)."""

    exit_code = EXIT_GENERIC_FAILURE
