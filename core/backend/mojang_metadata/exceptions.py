"""
Exceptions raised by the metadata client.
"""

from typing import Optional


class MojangAPIError(Exception):
    """Base error for this package"""


class LookupFailed(MojangAPIError):
    """
    A lookup did not produce a result.

    Raised for transport, decode and shape failures alike. The originating
    exception is chained as ``__cause__`` and kept on ``cause``.
    """

    def __init__(self, operation: str, url: Optional[str] = None,
                 cause: Optional[BaseException] = None):
        self.operation = operation
        self.url = url
        self.cause = cause

        message = f"{operation} failed"
        if url:
            message += f" ({url})"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)
