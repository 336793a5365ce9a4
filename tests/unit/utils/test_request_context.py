"""Tests for the per-request context."""

from nubian.services.auth_service import Principal
from nubian.utils.logger import get_request_id
from nubian.utils.request_context import (
    end_request_context,
    get_request_context,
    set_principal,
    start_request_context,
)


class TestRequestContext:
    def test_no_context_outside_a_request(self):
        assert get_request_context() is None
        assert get_request_id() is None

    def test_start_uses_given_request_id(self):
        ctx, token = start_request_context("req-123")
        try:
            assert get_request_context() is ctx
            assert get_request_id() == "req-123"
        finally:
            end_request_context(token)

        assert get_request_context() is None

    def test_start_generates_request_id(self):
        ctx, token = start_request_context()
        try:
            assert ctx.request_id
            assert len(ctx.request_id) == 32
        finally:
            end_request_context(token)

    def test_set_principal_records_on_current_context(self):
        principal = Principal(kind="user", id="user_1")
        ctx, token = start_request_context("req-1")
        try:
            set_principal(principal)
            assert ctx.principal is principal
        finally:
            end_request_context(token)

    def test_set_principal_without_context_is_noop(self):
        set_principal(Principal(kind="admin", id="admin_1"))

        assert get_request_context() is None

    def test_elapsed_is_non_negative(self):
        ctx, token = start_request_context()
        try:
            assert ctx.elapsed_ms >= 0
        finally:
            end_request_context(token)
