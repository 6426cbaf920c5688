"""
Error types and helpers shared by probes and the execution harness.
"""


class ProbeUnsupportedError(Exception):
    """Raised by a probe whose capability is unavailable in this environment.

    The harness downgrades it to an indeterminate result, the same as
    any other probe fault, but keeps the message as the evidence.
    """


def get_error_message(error: BaseException | object) -> str:
    """
    Safely extract a readable message from an unknown error type.

    Falls back to the exception class name when the error carries no
    message (``TimeoutError()`` and friends).
    """
    if isinstance(error, BaseException):
        return str(error) or type(error).__name__
    return "Unknown error"
