"""
StackIt Backend: Request Context Middleware Tests
==================================================

What we test:
    ✅ Safe client request IDs are reused; anything else is replaced
    ✅ The caller's X-User-ID reaches the access log and the log filter
    ✅ Records outside a request get "-" placeholders
"""

import logging

import pytest

from stackit.middleware.request_id import (
    RequestContextFilter,
    request_id_var,
    resolve_request_id,
    user_id_var,
)


class TestResolveRequestID:
    @pytest.mark.parametrize("supplied", ["abc12345", "trace_01-AB", "x" * 64])
    def test_safe_ids_are_reused(self, supplied):
        assert resolve_request_id(supplied) == supplied

    @pytest.mark.parametrize(
        "supplied", ["", "x" * 65, "abc\nINFO forged line", "id with spaces", "<script>"]
    )
    def test_unsafe_ids_are_replaced(self, supplied):
        rid = resolve_request_id(supplied)
        assert rid != supplied
        assert len(rid) == 8


class TestRequestContextFilter:
    def _record(self, **extra):
        record = logging.LogRecord("stackit.test", logging.INFO, __file__, 1, "msg", None, None)
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_outside_request_uses_placeholders(self):
        record = self._record()
        assert RequestContextFilter().filter(record) is True
        assert record.request_id == "-"
        assert record.user_id == "-"

    def test_copies_context_values(self):
        rid_token = request_id_var.set("req00001")
        user_token = user_id_var.set("4")
        try:
            record = self._record()
            RequestContextFilter().filter(record)
        finally:
            request_id_var.reset(rid_token)
            user_id_var.reset(user_token)
        assert record.request_id == "req00001"
        assert record.user_id == "4"

    def test_explicit_extras_win(self):
        record = self._record(request_id="given", user_id="9")
        RequestContextFilter().filter(record)
        assert record.request_id == "given"
        assert record.user_id == "9"


class TestMiddlewareOverHTTP:
    @pytest.mark.asyncio
    async def test_forged_request_id_is_replaced(self, test_client):
        response = await test_client.get("/health", headers={"X-Request-ID": "a b\nforged"})
        rid = response.headers["X-Request-ID"]
        assert rid != "a b\nforged"
        assert len(rid) == 8

    @pytest.mark.asyncio
    async def test_access_log_carries_caller(self, test_client, caplog):
        with caplog.at_level(logging.INFO, logger="stackit.access"):
            await test_client.get(
                "/api/questions/1", headers={"X-User-ID": "4", "X-Request-ID": "req00042"}
            )
        records = [r for r in caplog.records if r.name == "stackit.access"]
        assert records[-1].user_id == "4"
        assert records[-1].request_id == "req00042"
        assert records[-1].status == 200

    @pytest.mark.asyncio
    async def test_service_logs_carry_caller(self, test_client, caplog):
        body = {"target_id": "2", "target_type": "question", "direction": "up"}
        context_filter = RequestContextFilter()
        caplog.handler.addFilter(context_filter)
        try:
            with caplog.at_level(logging.INFO, logger="stackit.services.question_detail"):
                await test_client.post(
                    "/api/questions/2/votes", json=body,
                    headers={"X-User-ID": "3", "X-Request-ID": "req00043"},
                )
        finally:
            caplog.handler.removeFilter(context_filter)

        record = next(r for r in caplog.records if r.getMessage().startswith("Vote observed"))
        assert record.user_id == "3"
        assert record.request_id == "req00043"
