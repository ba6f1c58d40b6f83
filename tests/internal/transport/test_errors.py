"""Tests for network error mapping."""

import httpx
import pytest

from streamreq._internal.transport.errors import (
    NetworkError,
    describe_error,
    error_for_exception,
    error_for_status,
)


class TestErrorForStatus:
    """Tests for error_for_status."""

    @pytest.mark.parametrize("status", [200, 201, 204, 301, 304])
    def test_success_and_redirect_statuses(self, status):
        """Statuses below 400 are not errors."""
        assert error_for_status(status) == NetworkError.NO_ERROR

    @pytest.mark.parametrize(
        ("status", "expected"),
        [
            (400, NetworkError.PROTOCOL_INVALID_OPERATION),
            (401, NetworkError.AUTHENTICATION_REQUIRED),
            (403, NetworkError.CONTENT_ACCESS_DENIED),
            (404, NetworkError.CONTENT_NOT_FOUND),
            (405, NetworkError.CONTENT_OPERATION_NOT_PERMITTED),
            (407, NetworkError.PROXY_AUTHENTICATION_REQUIRED),
            (409, NetworkError.CONTENT_CONFLICT),
            (410, NetworkError.CONTENT_GONE),
            (500, NetworkError.INTERNAL_SERVER_ERROR),
            (501, NetworkError.OPERATION_NOT_IMPLEMENTED),
            (503, NetworkError.SERVICE_UNAVAILABLE),
        ],
    )
    def test_known_statuses(self, status, expected):
        """Known statuses map to their specific codes."""
        assert error_for_status(status) == expected

    def test_unknown_client_error(self):
        """Unlisted 4xx falls back to UNKNOWN_CONTENT."""
        assert error_for_status(422) == NetworkError.UNKNOWN_CONTENT

    def test_unknown_server_error(self):
        """Unlisted 5xx falls back to UNKNOWN_SERVER."""
        assert error_for_status(502) == NetworkError.UNKNOWN_SERVER


class TestErrorForException:
    """Tests for error_for_exception."""

    @pytest.mark.parametrize(
        "exc",
        [
            httpx.ConnectTimeout("connect"),
            httpx.ReadTimeout("read"),
            httpx.WriteTimeout("write"),
            httpx.PoolTimeout("pool"),
        ],
    )
    def test_timeouts(self, exc):
        """Every httpx timeout maps to TIMEOUT."""
        assert error_for_exception(exc) == NetworkError.TIMEOUT

    def test_dns_failure(self):
        """Name resolution failures map to HOST_NOT_FOUND."""
        exc = httpx.ConnectError("[Errno -2] Name or service not known")
        assert error_for_exception(exc) == NetworkError.HOST_NOT_FOUND

    def test_tls_failure(self):
        """Certificate failures map to SSL_HANDSHAKE_FAILED."""
        exc = httpx.ConnectError("[SSL: CERTIFICATE_VERIFY_FAILED] certificate verify failed")
        assert error_for_exception(exc) == NetworkError.SSL_HANDSHAKE_FAILED

    def test_connection_refused(self):
        """Refused connections map to CONNECTION_REFUSED."""
        exc = httpx.ConnectError("[Errno 111] Connection refused")
        assert error_for_exception(exc) == NetworkError.CONNECTION_REFUSED

    def test_other_connect_error(self):
        """Unrecognized connect errors map to UNKNOWN_NETWORK."""
        assert error_for_exception(httpx.ConnectError("boom")) == NetworkError.UNKNOWN_NETWORK

    def test_remote_closed(self):
        """Server disconnects map to REMOTE_HOST_CLOSED."""
        exc = httpx.RemoteProtocolError("Server disconnected without sending a response.")
        assert error_for_exception(exc) == NetworkError.REMOTE_HOST_CLOSED

    def test_read_error(self):
        """Broken reads map to TEMPORARY_NETWORK_FAILURE."""
        assert error_for_exception(httpx.ReadError("reset")) == NetworkError.TEMPORARY_NETWORK_FAILURE

    def test_proxy_error(self):
        """Proxy failures map to UNKNOWN_PROXY."""
        assert error_for_exception(httpx.ProxyError("proxy")) == NetworkError.UNKNOWN_PROXY

    def test_unsupported_protocol(self):
        """Unsupported schemes map to PROTOCOL_UNKNOWN."""
        exc = httpx.UnsupportedProtocol("Request URL has an unsupported protocol 'ftp://'.")
        assert error_for_exception(exc) == NetworkError.PROTOCOL_UNKNOWN

    def test_header_encoding_failure(self):
        """Headers that cannot be encoded map to PROTOCOL_FAILURE."""
        exc = UnicodeEncodeError("ascii", "t\u00f6k", 1, 2, "ordinal not in range(128)")
        assert error_for_exception(exc) == NetworkError.PROTOCOL_FAILURE

    def test_unknown_exception(self):
        """Anything else maps to UNKNOWN_NETWORK."""
        assert error_for_exception(RuntimeError("odd")) == NetworkError.UNKNOWN_NETWORK


class TestDescribeError:
    """Tests for describe_error."""

    def test_embeds_numeric_code(self):
        """Message should contain the numeric value."""
        assert describe_error(NetworkError.TEMPORARY_NETWORK_FAILURE) == "Network Error (Code: 7)"

    def test_accepts_plain_int(self):
        """Plain integers should be accepted."""
        assert describe_error(42) == "Network Error (Code: 42)"
