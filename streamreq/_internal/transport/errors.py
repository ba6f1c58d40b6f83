"""Network error codes and their mapping from httpx failures.

Codes follow the classic network-reply numbering: connection errors below
100, proxy errors 1xx, content errors 2xx, protocol errors 3xx and server
errors 4xx, with x99 as the catch-all of each group.
"""

from enum import IntEnum

import httpx


class NetworkError(IntEnum):
    NO_ERROR = 0

    # Connection
    CONNECTION_REFUSED = 1
    REMOTE_HOST_CLOSED = 2
    HOST_NOT_FOUND = 3
    TIMEOUT = 4
    OPERATION_CANCELED = 5
    SSL_HANDSHAKE_FAILED = 6
    TEMPORARY_NETWORK_FAILURE = 7
    NETWORK_SESSION_FAILED = 8
    TOO_MANY_REDIRECTS = 10
    INSECURE_REDIRECT = 11
    UNKNOWN_NETWORK = 99

    # Proxy
    PROXY_CONNECTION_REFUSED = 101
    PROXY_CONNECTION_CLOSED = 102
    PROXY_NOT_FOUND = 103
    PROXY_TIMEOUT = 104
    PROXY_AUTHENTICATION_REQUIRED = 105
    UNKNOWN_PROXY = 199

    # Content (4xx responses)
    CONTENT_ACCESS_DENIED = 201
    CONTENT_OPERATION_NOT_PERMITTED = 202
    CONTENT_NOT_FOUND = 203
    AUTHENTICATION_REQUIRED = 204
    CONTENT_RESEND = 205
    CONTENT_CONFLICT = 206
    CONTENT_GONE = 207
    UNKNOWN_CONTENT = 299

    # Protocol
    PROTOCOL_UNKNOWN = 301
    PROTOCOL_INVALID_OPERATION = 302
    PROTOCOL_FAILURE = 399

    # Server (5xx responses)
    INTERNAL_SERVER_ERROR = 401
    OPERATION_NOT_IMPLEMENTED = 402
    SERVICE_UNAVAILABLE = 403
    UNKNOWN_SERVER = 499


_STATUS_ERRORS: dict[int, NetworkError] = {
    400: NetworkError.PROTOCOL_INVALID_OPERATION,
    401: NetworkError.AUTHENTICATION_REQUIRED,
    403: NetworkError.CONTENT_ACCESS_DENIED,
    404: NetworkError.CONTENT_NOT_FOUND,
    405: NetworkError.CONTENT_OPERATION_NOT_PERMITTED,
    407: NetworkError.PROXY_AUTHENTICATION_REQUIRED,
    409: NetworkError.CONTENT_CONFLICT,
    410: NetworkError.CONTENT_GONE,
    418: NetworkError.PROTOCOL_INVALID_OPERATION,
    500: NetworkError.INTERNAL_SERVER_ERROR,
    501: NetworkError.OPERATION_NOT_IMPLEMENTED,
    503: NetworkError.SERVICE_UNAVAILABLE,
}

_HOST_NOT_FOUND_HINTS = (
    "name or service not known",
    "nodename nor servname",
    "getaddrinfo",
    "no address associated",
    "temporary failure in name resolution",
)


def error_for_status(status_code: int) -> NetworkError:
    """Map an HTTP status to a network error code (NO_ERROR below 400)."""
    if status_code < 400:
        return NetworkError.NO_ERROR
    if status_code in _STATUS_ERRORS:
        return _STATUS_ERRORS[status_code]
    if status_code < 500:
        return NetworkError.UNKNOWN_CONTENT
    return NetworkError.UNKNOWN_SERVER


def error_for_exception(exc: Exception) -> NetworkError:
    """Map an httpx exception to a network error code."""
    if isinstance(exc, httpx.ProxyError):
        return NetworkError.UNKNOWN_PROXY
    if isinstance(exc, httpx.TimeoutException):
        return NetworkError.TIMEOUT
    if isinstance(exc, httpx.ConnectError):
        return _error_for_connect_failure(str(exc))
    if isinstance(exc, httpx.RemoteProtocolError):
        return NetworkError.REMOTE_HOST_CLOSED
    if isinstance(exc, (httpx.LocalProtocolError, httpx.DecodingError, UnicodeError)):
        return NetworkError.PROTOCOL_FAILURE
    if isinstance(exc, (httpx.ReadError, httpx.WriteError)):
        return NetworkError.TEMPORARY_NETWORK_FAILURE
    if isinstance(exc, (httpx.UnsupportedProtocol, httpx.InvalidURL)):
        return NetworkError.PROTOCOL_UNKNOWN
    if isinstance(exc, httpx.TooManyRedirects):
        return NetworkError.TOO_MANY_REDIRECTS
    return NetworkError.UNKNOWN_NETWORK


def _error_for_connect_failure(message: str) -> NetworkError:
    message = message.lower()
    if any(hint in message for hint in _HOST_NOT_FOUND_HINTS):
        return NetworkError.HOST_NOT_FOUND
    if "ssl" in message or "certificate" in message:
        return NetworkError.SSL_HANDSHAKE_FAILED
    if "refused" in message:
        return NetworkError.CONNECTION_REFUSED
    return NetworkError.UNKNOWN_NETWORK


def describe_error(code: int) -> str:
    """Human-readable message embedding the numeric error code."""
    return f"Network Error (Code: {int(code)})"
