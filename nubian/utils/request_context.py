"""Typed per-request context carried in a ContextVar."""

from __future__ import annotations

import time
import uuid
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from nubian.services.auth_service import Principal


@dataclass
class RequestContext:
    """State attached to a single HTTP request."""

    request_id: str
    principal: Optional[Principal] = None
    started_at: float = field(default_factory=time.perf_counter)

    @property
    def elapsed_ms(self) -> float:
        return round((time.perf_counter() - self.started_at) * 1000, 2)


_current_context: ContextVar[RequestContext | None] = ContextVar("request_context", default=None)


def new_request_id() -> str:
    return uuid.uuid4().hex


def start_request_context(request_id: str | None = None) -> tuple[RequestContext, Token]:
    """Create a context for the current request and make it current.

    Returns the context and the reset token; pass the token to
    ``end_request_context`` once the request completes.
    """
    ctx = RequestContext(request_id=request_id or new_request_id())
    token = _current_context.set(ctx)
    return ctx, token


def end_request_context(token: Token) -> None:
    _current_context.reset(token)


def get_request_context() -> RequestContext | None:
    return _current_context.get()


def set_principal(principal: Optional[Principal]) -> None:
    """Record the authenticated principal on the current request, if any."""
    ctx = _current_context.get()
    if ctx is not None:
        ctx.principal = principal
