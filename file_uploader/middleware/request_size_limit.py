"""Upload size limit middleware.

Answers 413 with the usual JSON error body when a request body exceeds
MAX_UPLOAD_SIZE. A declared Content-Length is checked before anything is
read; bodies without one are read up to the limit and then replayed.
Raw ASGI (no BaseHTTPMiddleware).
"""

import json
from typing import Callable

from file_uploader.middleware.request_id import header_value


def _payload_too_large(max_bytes: int, received: int) -> bytes:
    return json.dumps(
        {
            "error": "PAYLOAD_TOO_LARGE",
            "message": f"Upload must be at most {max_bytes} bytes",
            "details": {"max_bytes": max_bytes, "received_bytes": received},
        }
    ).encode()


class RequestSizeLimitMiddleware:
    """Reject request bodies larger than max_bytes."""

    def __init__(self, app: Callable, max_bytes: int) -> None:
        self.app = app
        self.max_bytes = max_bytes

    async def _reject(self, send: Callable, received: int) -> None:
        await send({
            "type": "http.response.start",
            "status": 413,
            "headers": [(b"content-type", b"application/json")],
        })
        await send({
            "type": "http.response.body",
            "body": _payload_too_large(self.max_bytes, received),
        })

    async def __call__(self, scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        declared = header_value(scope, "content-length")
        if declared is not None and declared.strip().isdigit():
            if int(declared) > self.max_bytes:
                await self._reject(send, int(declared))
                return
            await self.app(scope, receive, send)
            return

        # No usable Content-Length (e.g. chunked): buffer up to the limit.
        messages: list[dict] = []
        received = 0
        more_body = True
        while more_body:
            message = await receive()
            if message["type"] == "http.disconnect":
                return
            received += len(message.get("body", b""))
            if received > self.max_bytes:
                await self._reject(send, received)
                return
            messages.append(message)
            more_body = message.get("more_body", False)

        async def replay() -> dict:
            if messages:
                return messages.pop(0)
            return await receive()

        await self.app(scope, replay, send)
