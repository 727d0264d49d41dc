from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, MutableMapping

from docsgen.capture.core import is_documented, record_sample
from docsgen.registry import EndpointRegistry

logger = logging.getLogger(__name__)

Scope = MutableMapping[str, Any]
Message = MutableMapping[str, Any]
Receive = Callable[[], Awaitable[Message]]
Send = Callable[[Message], Awaitable[None]]
ASGIApp = Callable[[Scope, Receive, Send], Awaitable[None]]


class CaptureMiddleware:
    """
    Pure ASGI middleware recording response shapes into a registry.

    Every message the wrapped app sends is forwarded untouched; status and
    body chunks are copied on the side and recorded once the app returns.

    Attach app-wide:
        app.add_middleware(CaptureMiddleware, registry=registry)
    or around one route:
        Route("/users", endpoint=CaptureMiddleware(users_app, registry))
    """

    def __init__(self, app: ASGIApp, registry: EndpointRegistry) -> None:
        self.app = app
        self.registry = registry

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or not is_documented(self.registry, scope["method"], scope["path"]):
            # undocumented routes stream through without buffering
            await self.app(scope, receive, send)
            return

        status_code = 200
        chunks: list[bytes] = []

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = int(message["status"])
            elif message["type"] == "http.response.body":
                chunks.append(bytes(message.get("body", b"")))
            await send(message)

        await self.app(scope, receive, send_wrapper)

        try:
            record_sample(
                self.registry, scope["method"], scope["path"], status_code, b"".join(chunks)
            )
        except Exception:
            # documentation capture must never change what the client sees
            logger.exception("capture failed for %s %s", scope.get("method"), scope.get("path"))
