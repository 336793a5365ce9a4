"""Request middleware and exception handlers."""

from nubian.middleware.error_handler import register_exception_handlers
from nubian.middleware.logging import REQUEST_ID_HEADER, logging_middleware

__all__ = ["REQUEST_ID_HEADER", "logging_middleware", "register_exception_handlers"]
