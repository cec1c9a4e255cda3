# =============================================================================
# tests/test_http_client.py - Outbound Request Logging Tests
# =============================================================================

import asyncio
import logging

import httpx
import pytest

from lib.http_client import LoggingTransport, create_http_client


async def _call(transport, method="GET", url="https://upstream.test/items", **kwargs):
    async with create_http_client(transport=transport, body_limit=10) as client:
        return await client.request(method, url, **kwargs)


class TestLoggingTransport:

    def test_logs_request_and_response(self, caplog):
        transport = httpx.MockTransport(lambda request: httpx.Response(204))

        with caplog.at_level(logging.INFO, logger="lib.http_client"):
            response = asyncio.run(_call(transport))

        assert response.status_code == 204
        messages = [r.getMessage() for r in caplog.records]
        assert any(m.startswith("[FETCH OUT]") and "https://upstream.test/items" in m for m in messages)
        assert any(m.startswith("[FETCH RESPONSE]") and "204" in m for m in messages)

    def test_body_is_truncated(self, caplog):
        transport = httpx.MockTransport(lambda request: httpx.Response(200))

        with caplog.at_level(logging.INFO, logger="lib.http_client"):
            asyncio.run(_call(transport, "POST", content=b"0123456789abcdef"))

        out = next(r.getMessage() for r in caplog.records if r.getMessage().startswith("[FETCH OUT]"))
        assert "'0123456789'" in out
        assert "abcdef" not in out

    def test_credentials_redacted(self, caplog):
        transport = httpx.MockTransport(lambda request: httpx.Response(200))

        with caplog.at_level(logging.INFO, logger="lib.http_client"):
            asyncio.run(_call(transport, headers={"Authorization": "ApiKey secret"}))

        assert "secret" not in caplog.text
        assert "[redacted]" in caplog.text

    def test_transport_errors_logged_and_reraised(self, caplog):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with caplog.at_level(logging.INFO, logger="lib.http_client"):
            with pytest.raises(httpx.ConnectError):
                asyncio.run(_call(httpx.MockTransport(handler)))

        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert errors and errors[0].getMessage().startswith("[FETCH ERROR]")

    def test_same_id_on_request_and_response(self, caplog):
        log = logging.getLogger("test.fetch")
        transport = LoggingTransport(httpx.MockTransport(lambda request: httpx.Response(200)), log=log)

        async def call():
            async with httpx.AsyncClient(transport=transport) as client:
                await client.get("https://upstream.test/")

        with caplog.at_level(logging.INFO, logger="test.fetch"):
            asyncio.run(call())

        records = [r for r in caplog.records if r.name == "test.fetch"]
        # a single dict argument becomes record.args itself
        out, resp = (r.args["requestId"] for r in records)
        assert out == resp
