"""Tags HTTP log lines with a request id.

WebSocket traffic bypasses this middleware; the chat route binds the
connection id to the same context variable instead.
"""
from __future__ import annotations

import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from group_chat.log_config import correlation_id_ctx

HEADER = "X-Request-ID"


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get(HEADER) or uuid.uuid4().hex
        token = correlation_id_ctx.set(request_id)
        try:
            response = await call_next(request)
        finally:
            correlation_id_ctx.reset(token)
        response.headers[HEADER] = request_id
        return response
