"""Tests for the HTTP transport layer."""

from __future__ import annotations

import asyncio
import time

import httpx
import pytest
import pytest_asyncio
import respx

from f1scraper._http import AsyncTransport, backoff_delay, ensure_list
from f1scraper.errors import ErrorKind
from tests.conftest import BASE_URL, RecordingSleep


def _transport(sleep: RecordingSleep, max_attempts: int = 3, retry_delay: float = 1.0) -> AsyncTransport:
    return AsyncTransport(max_attempts=max_attempts, retry_delay=retry_delay, sleep=sleep)


class TestBackoffDelay:
    def test_first_attempt_never_waits(self) -> None:
        assert backoff_delay(1, 1.0) == 0.0

    def test_doubles_from_second_attempt(self) -> None:
        assert [backoff_delay(n, 0.5) for n in (2, 3, 4, 5)] == [0.5, 1.0, 2.0, 4.0]


class TestEnsureList:
    def test_list_passes(self) -> None:
        result = ensure_list([{"a": 1}], "drivers")
        assert result.success
        assert result.data == [{"a": 1}]

    @pytest.mark.parametrize(
        ("payload", "shape"),
        [({"detail": "x"}, "dict"), ("oops", "str"), (None, "NoneType"), (3, "int")],
    )
    def test_non_list_rejected(self, payload: object, shape: str) -> None:
        result = ensure_list(payload, "drivers")
        assert not result.success
        assert result.error.kind is ErrorKind.INVALID_RESPONSE
        assert result.error.details == {"received_type": shape}


class TestAsyncTransport:
    @respx.mock
    @pytest.mark.asyncio
    async def test_get_success(self, sleep: RecordingSleep) -> None:
        route = respx.get(f"{BASE_URL}/drivers").mock(
            return_value=httpx.Response(200, json=[{"driver_number": 1}])
        )
        async with _transport(sleep) as transport:
            result = await transport.get("/drivers", [("session_key", "9161")])
        assert result.success
        assert result.data == [{"driver_number": 1}]
        assert route.call_count == 1
        assert route.calls.last.request.url.params["session_key"] == "9161"
        assert sleep.delays == []

    @respx.mock
    @pytest.mark.asyncio
    async def test_sends_headers(self, sleep: RecordingSleep) -> None:
        route = respx.get(f"{BASE_URL}/drivers").mock(return_value=httpx.Response(200, json=[]))
        async with _transport(sleep) as transport:
            await transport.get("/drivers", [])
        request = route.calls.last.request
        assert request.headers["Accept"] == "application/json"
        assert request.headers["User-Agent"].startswith("f1scraper/")

    @respx.mock
    @pytest.mark.asyncio
    async def test_succeeds_after_transient_failures(self, sleep: RecordingSleep) -> None:
        route = respx.get(f"{BASE_URL}/drivers").mock(
            side_effect=[
                httpx.Response(503),
                httpx.ConnectError("fail"),
                httpx.Response(200, json=[{"driver_number": 44}]),
            ]
        )
        async with _transport(sleep, max_attempts=3, retry_delay=0.5) as transport:
            result = await transport.get("/drivers", [])
        assert result.success
        assert result.data == [{"driver_number": 44}]
        assert route.call_count == 3
        assert sleep.delays == [0.5, 1.0]

    @respx.mock
    @pytest.mark.asyncio
    async def test_retry_exhausted(self, sleep: RecordingSleep) -> None:
        route = respx.get(f"{BASE_URL}/drivers").mock(return_value=httpx.Response(500))
        async with _transport(sleep, max_attempts=4, retry_delay=1.0) as transport:
            result = await transport.get("/drivers", [])
        assert not result.success
        assert result.error.kind is ErrorKind.MAX_RETRIES_EXCEEDED
        assert result.error.details["attempts"] == 4
        assert result.error.cause.kind is ErrorKind.SERVER_ERROR
        assert route.call_count == 4
        assert sleep.delays == [1.0, 2.0, 4.0]

    @respx.mock
    @pytest.mark.asyncio
    async def test_single_attempt_does_not_sleep(self, sleep: RecordingSleep) -> None:
        route = respx.get(f"{BASE_URL}/drivers").mock(return_value=httpx.Response(429))
        async with _transport(sleep, max_attempts=1) as transport:
            result = await transport.get("/drivers", [])
        assert result.error.kind is ErrorKind.MAX_RETRIES_EXCEEDED
        assert result.error.cause.kind is ErrorKind.RATE_LIMIT
        assert route.call_count == 1
        assert sleep.delays == []

    @pytest.mark.parametrize(
        ("status", "kind"),
        [
            (400, ErrorKind.BAD_REQUEST),
            (404, ErrorKind.NOT_FOUND),
            (429, ErrorKind.RATE_LIMIT),
            (500, ErrorKind.SERVER_ERROR),
            (503, ErrorKind.SERVICE_UNAVAILABLE),
            (418, ErrorKind.HTTP_ERROR),
            (502, ErrorKind.HTTP_ERROR),
        ],
    )
    @respx.mock
    @pytest.mark.asyncio
    async def test_status_classification(self, sleep: RecordingSleep, status: int, kind: ErrorKind) -> None:
        respx.get(f"{BASE_URL}/drivers").mock(return_value=httpx.Response(status))
        async with _transport(sleep, max_attempts=2) as transport:
            result = await transport.get("/drivers", [])
        cause = result.error.cause
        assert cause.kind is kind
        assert cause.status == status
        assert cause.status_text == httpx.Response(status).reason_phrase
        assert cause.is_http_error

    @respx.mock
    @pytest.mark.asyncio
    async def test_timeout(self, sleep: RecordingSleep) -> None:
        respx.get(f"{BASE_URL}/drivers").mock(side_effect=httpx.ReadTimeout("timeout"))
        async with _transport(sleep) as transport:
            result = await transport.get("/drivers", [])
        assert result.error.kind is ErrorKind.MAX_RETRIES_EXCEEDED
        assert result.error.cause.kind is ErrorKind.TIMEOUT

    @respx.mock
    @pytest.mark.asyncio
    async def test_connection_error(self, sleep: RecordingSleep) -> None:
        respx.get(f"{BASE_URL}/drivers").mock(side_effect=httpx.ConnectError("fail"))
        async with _transport(sleep) as transport:
            result = await transport.get("/drivers", [])
        assert result.error.cause.kind is ErrorKind.NETWORK_ERROR

    @respx.mock
    @pytest.mark.asyncio
    async def test_unexpected_exception_classified(self, sleep: RecordingSleep) -> None:
        respx.get(f"{BASE_URL}/drivers").mock(side_effect=RuntimeError("boom"))
        async with _transport(sleep, max_attempts=1) as transport:
            result = await transport.get("/drivers", [])
        assert result.error.cause.kind is ErrorKind.UNKNOWN_ERROR
        assert result.error.cause.message == "boom"

    @respx.mock
    @pytest.mark.asyncio
    async def test_invalid_json_not_retried(self, sleep: RecordingSleep) -> None:
        route = respx.get(f"{BASE_URL}/drivers").mock(
            return_value=httpx.Response(200, text="<html>oops</html>")
        )
        async with _transport(sleep) as transport:
            result = await transport.get("/drivers", [])
        assert result.error.kind is ErrorKind.INVALID_RESPONSE
        assert route.call_count == 1
        assert sleep.delays == []

    @respx.mock
    @pytest.mark.asyncio
    async def test_non_list_payload_returned_as_is(self, sleep: RecordingSleep) -> None:
        respx.get(f"{BASE_URL}/drivers").mock(
            return_value=httpx.Response(200, json={"detail": "not a list"})
        )
        async with _transport(sleep) as transport:
            result = await transport.get("/drivers", [])
        assert result.success
        assert result.data == {"detail": "not a list"}

    def test_rejects_zero_attempts(self) -> None:
        with pytest.raises(ValueError):
            AsyncTransport(max_attempts=0)


TRICKLE_BODY = b"[" + b" " * 18 + b"]"


async def _trickle(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
    """Answer with a valid JSON body, one byte every 0.1s."""
    await reader.readuntil(b"\r\n\r\n")
    writer.write(
        b"HTTP/1.1 200 OK\r\n"
        b"Content-Type: application/json\r\n"
        b"Content-Length: %d\r\n\r\n" % len(TRICKLE_BODY)
    )
    try:
        for byte in TRICKLE_BODY:
            await writer.drain()
            await asyncio.sleep(0.1)
            if reader.at_eof() or writer.is_closing():
                break
            writer.write(bytes([byte]))
        await writer.drain()
    except ConnectionError:
        pass
    finally:
        writer.close()


@pytest_asyncio.fixture
async def trickle_url(monkeypatch: pytest.MonkeyPatch):
    for var in ("HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY", "http_proxy", "https_proxy", "all_proxy"):
        monkeypatch.delenv(var, raising=False)
    server = await asyncio.start_server(_trickle, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    yield f"http://127.0.0.1:{port}"
    server.close()
    await server.wait_closed()


class TestAttemptTimeout:
    @pytest.mark.asyncio
    async def test_slow_body_times_out(self, trickle_url: str, sleep: RecordingSleep) -> None:
        # Every read completes well within 0.3s, but the whole body takes 2s.
        transport = AsyncTransport(base_url=trickle_url, timeout=0.3, max_attempts=1, sleep=sleep)
        started = time.monotonic()
        async with transport:
            result = await transport.get("/drivers", [])
        elapsed = time.monotonic() - started

        assert not result.success
        assert result.error.kind is ErrorKind.MAX_RETRIES_EXCEEDED
        assert result.error.cause.kind is ErrorKind.TIMEOUT
        assert elapsed < 1.5

    @pytest.mark.asyncio
    async def test_slow_body_within_budget(self, trickle_url: str, sleep: RecordingSleep) -> None:
        async with AsyncTransport(base_url=trickle_url, timeout=10.0, sleep=sleep) as transport:
            result = await transport.get("/drivers", [])
        assert result.success
        assert result.data == []
