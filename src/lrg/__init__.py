"""lrg — find the largest (or smallest) files under a directory."""

__version__ = "0.1.0"


class LrgError(Exception):
    """User-facing CLI error.

    Raised for invalid arguments, an unreadable working directory, and
    an empty result. The message is printed to stderr and the process
    exits with code 1.
    """
