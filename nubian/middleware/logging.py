"""Request logging middleware."""

from fastapi import Request

from nubian.utils.logger import bind_request, get_logger, unbind_request
from nubian.utils.request_context import end_request_context, start_request_context

log = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


async def logging_middleware(request: Request, call_next):
    """
    Open a request context, then log one completion event per request.

    The request id is taken from ``X-Request-ID`` when the caller sends one
    and is echoed back on the response.
    """
    ctx, token = start_request_context(request.headers.get(REQUEST_ID_HEADER) or None)
    bind_request(ctx.request_id, method=request.method, path=request.url.path)

    try:
        try:
            response = await call_next(request)
        except Exception:
            log.exception("request failed", duration_ms=ctx.elapsed_ms)
            raise

        principal = ctx.principal
        fields = {
            "status_code": response.status_code,
            "duration_ms": ctx.elapsed_ms,
            "principal": f"{principal.kind}:{principal.id}" if principal else None,
        }
        if response.status_code >= 500:
            log.error("request completed", **fields)
        elif response.status_code >= 400:
            log.warning("request completed", **fields)
        else:
            log.info("request completed", **fields)

        response.headers[REQUEST_ID_HEADER] = ctx.request_id
        return response
    finally:
        unbind_request()
        end_request_context(token)
