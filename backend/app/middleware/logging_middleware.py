"""
Pure ASGI middleware that logs every API request and its response.

Bodies are captured as they stream through, with credentials and personal
fields masked and long payloads truncated before they are logged.
"""

import json
import logging
import time
from typing import Optional
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from ..core.logging_config import filter_sensitive_data, truncate_large_data

logger = logging.getLogger(__name__)

MAX_BODY_LOG_LENGTH = 5000


def _sanitize_body(chunks: list) -> Optional[str]:
    """Join captured chunks into a loggable, masked string."""
    raw = b"".join(chunks)
    if not raw:
        return None
    text = raw.decode("utf-8", errors="ignore")
    try:
        payload = filter_sensitive_data(json.loads(text))
        text = json.dumps(payload, ensure_ascii=False)
    except json.JSONDecodeError:
        pass
    return truncate_large_data(text, max_length=MAX_BODY_LOG_LENGTH)


def _error_reason(body: Optional[str]) -> Optional[str]:
    """Pull the ``code``/``detail`` out of an error body."""
    if not body:
        return None
    try:
        payload = json.loads(body)
    except json.JSONDecodeError:
        return truncate_large_data(body, max_length=500)
    if isinstance(payload, dict):
        code = payload.get("code")
        detail = payload.get("detail")
        if code:
            return f"{code}: {detail}"
        if detail:
            return str(detail)
    return truncate_large_data(body, max_length=500)


class RequestLoggingMiddleware:
    """Log method, path, status, duration and sanitized bodies of each request."""

    def __init__(self, app: ASGIApp, exclude_paths: Optional[list] = None):
        """
        Args:
            app: The ASGI application
            exclude_paths: Paths that are passed through without logging
        """
        self.app = app
        self.exclude_paths = exclude_paths or ["/health", "/"]

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope.get("path", "") in self.exclude_paths:
            await self.app(scope, receive, send)
            return

        start_time = time.perf_counter()
        method = scope.get("method", "UNKNOWN")
        path = scope.get("path", "")
        client = scope.get("client")
        request_id = id(scope)

        request_chunks: list = []
        response_chunks: list = []
        status_code = 0

        async def logging_receive() -> Message:
            message = await receive()
            if message["type"] == "http.request":
                request_chunks.append(message.get("body", b""))
            return message

        async def logging_send(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message.get("status", 0)
            elif message["type"] == "http.response.body":
                response_chunks.append(message.get("body", b""))
            await send(message)

        logger.info(
            f"Request started: {method} {path}",
            extra={"extra_fields": {
                "request_id": request_id,
                "method": method,
                "path": path,
                "client": client[0] if client else None,
            }}
        )

        try:
            await self.app(scope, logging_receive, logging_send)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"Request failed: {method} {path} - {e}",
                exc_info=True,
                extra={"extra_fields": {
                    "request_id": request_id,
                    "duration_ms": duration_ms,
                }}
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        request_body = _sanitize_body(request_chunks)
        response_body = _sanitize_body(response_chunks)
        error_reason = _error_reason(response_body) if status_code >= 400 else None

        if status_code < 400:
            log_level = logging.INFO
        elif status_code < 500:
            log_level = logging.WARNING
        else:
            log_level = logging.ERROR

        message = f"Request completed: {method} {path} - {status_code} ({duration_ms:.2f}ms)"
        if error_reason:
            message += f" | error_reason={error_reason}"

        logger.log(
            log_level,
            message,
            extra={"extra_fields": {
                "request_id": request_id,
                "method": method,
                "path": path,
                "status_code": status_code,
                "duration_ms": duration_ms,
                "request_body": request_body,
                "response_body": response_body,
                "error_reason": error_reason,
            }}
        )
