"""
Standard exit codes for gitcontext commands.

Following Unix/POSIX conventions for command-line tools.
"""
# Standard POSIX exit codes
SUCCESS = 0              # Successful termination
GENERAL_ERROR = 1        # General errors
USAGE_ERROR = 2          # Bad arguments (raised by click itself)

# Application-specific exit codes (64-113 are typically available)
NOT_FOUND = 64           # Repository, HEAD, ref or object missing
DATA_ERROR = 65          # Malformed HEAD, ref or object
CONFIG_ERROR = 66        # Configuration file error
PERMISSION_ERROR = 67    # Insufficient permissions
INTERRUPTED = 130        # Terminated by Ctrl+C (SIGINT)

# Exit code mappings for exception classes (matched along the MRO)
EXCEPTION_EXIT_CODES = {
    'NotFoundError': NOT_FOUND,
    'MalformedObjectError': DATA_ERROR,
    'ConfigError': CONFIG_ERROR,
    'PermissionError': PERMISSION_ERROR,
    'FileNotFoundError': NOT_FOUND,
    'KeyboardInterrupt': INTERRUPTED,
}


def get_exit_code_for_exception(exc: BaseException) -> int:
    """
    Get the appropriate exit code for an exception.

    Subclasses inherit the code of the closest mapped base class, so
    ObjectNotFoundError exits with NOT_FOUND.

    Args:
        exc: The exception that occurred

    Returns:
        Appropriate exit code
    """
    for cls in type(exc).__mro__:
        if cls.__name__ in EXCEPTION_EXIT_CODES:
            return EXCEPTION_EXIT_CODES[cls.__name__]
    return GENERAL_ERROR
