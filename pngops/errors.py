"""Error types raised by pngops. Each carries the process exit code the CLI uses."""

EXIT_OK = 0
EXIT_ARGUMENT = 40
EXIT_FILE = 41
EXIT_OPERATION_FLAG = 42
EXIT_MEMORY = 43
EXIT_PNG_FORMAT = 44


class PngOpsError(Exception):
    """Base error for the project."""

    exit_code = EXIT_ARGUMENT


class ArgumentError(PngOpsError):
    """Malformed or missing command-line argument."""

    exit_code = EXIT_ARGUMENT


class InvalidGeometry(ArgumentError):
    """Non-positive thickness, negative tile counts or canvas sizes.

    Raised before any canvas is touched.
    """


class InputFileError(PngOpsError):
    """Input file missing or unreadable."""

    exit_code = EXIT_FILE


class OperationFlagError(PngOpsError):
    """No operation, or more than one, was requested."""

    exit_code = EXIT_OPERATION_FLAG


class AllocationFailure(PngOpsError):
    """A destination or scratch buffer could not be allocated."""

    exit_code = EXIT_MEMORY


class CodecError(PngOpsError):
    """Input is not a decodable PNG, or the canvas cannot be encoded."""

    exit_code = EXIT_PNG_FORMAT
