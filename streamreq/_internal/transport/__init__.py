"""Transport layer used by RequestController.

WARNING: Internal module. Application code talks to RequestController.
"""

from streamreq._internal.transport.errors import (
    NetworkError,
    describe_error,
    error_for_exception,
    error_for_status,
)
from streamreq._internal.transport.httpx_transport import HttpxOperation, HttpxTransport
from streamreq._internal.transport.protocol import Operation, Transport

__all__ = [
    "HttpxOperation",
    "HttpxTransport",
    "NetworkError",
    "Operation",
    "Transport",
    "describe_error",
    "error_for_exception",
    "error_for_status",
]
