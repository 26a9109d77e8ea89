"""ASGI middleware that caps the size of inbound request bodies."""

import logging

from fastapi import HTTPException
from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)

BODY_TOO_LARGE = "Request body too large"


class BodySizeLimitMiddleware:
    """Reject requests whose body exceeds ``max_body_size`` bytes with 413.

    A declared ``Content-Length`` over the limit is refused before the app
    runs. Bodies without one are counted as they are received, and reading
    past the limit raises an ``HTTPException`` inside the handler.
    """

    def __init__(self, app: ASGIApp, max_body_size: int) -> None:
        self.app = app
        self.max_body_size = max_body_size

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")
        if scope["method"] == "POST" and scope["path"] == "/api/properties":
            logger.info(
                "Incoming %s %s Content-Length: %s",
                scope["method"],
                scope["path"],
                content_length,
            )

        if content_length is not None and content_length.isdigit():
            if int(content_length) > self.max_body_size:
                logger.warning(
                    "Rejected %s %s: Content-Length %s exceeds %d bytes",
                    scope["method"],
                    scope["path"],
                    content_length,
                    self.max_body_size,
                )
                response = JSONResponse(
                    {"error": BODY_TOO_LARGE},
                    status_code=413,
                )
                await response(scope, receive, send)
                return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_size:
                    raise HTTPException(
                        status_code=413,
                        detail=BODY_TOO_LARGE,
                    )
            return message

        await self.app(scope, limited_receive, send)
