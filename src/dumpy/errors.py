"""Exceptions raised inside dumpy."""


class DumpyError(Exception):
    """Base class for dumpy errors."""


class InvocationError(DumpyError):
    """
    Stand-in for the result of an accessor that raised when invoked.

    Produced by the accessor discoverer and fed back through the sanitizer,
    which renders its message verbatim instead of propagating the failure.
    """

    def __init__(self, signature: str, cause: Exception):
        self.signature = signature
        self.cause = cause
        super().__init__(
            f'Couldn\'t invoke {signature}: {type(cause).__name__} '
            f'with message "{_message_of(cause)}"'
        )


def _message_of(exc: BaseException) -> str:
    # Exceptions with a broken __str__ must not escape the sanitizer.
    try:
        return str(exc)
    except Exception:
        return f"<unprintable {type(exc).__name__}>"
