"""Request body size limit middleware.

Caps the whole request body at the upload limit plus a small allowance for
multipart framing and form fields, so an over-size file is refused before
it is spooled. The exact per-file limit is enforced again by the upload
service. Raw ASGI, no BaseHTTPMiddleware.
"""

import json
from typing import Any, Callable

from recordvault.middleware.request_id import get_header

# Multipart boundaries plus the metadata form fields sent alongside the file.
MULTIPART_ALLOWANCE = 64 * 1024


async def _send_413(send: Callable, max_bytes: int, actual: int | None = None) -> None:
    """Send 413 Payload Too Large response."""
    details: dict[str, Any] = {"max_bytes": max_bytes}
    if actual is not None:
        details["content_length"] = actual
    body = json.dumps(
        {
            "error": "PAYLOAD_TOO_LARGE",
            "message": f"Request body must be at most {max_bytes} bytes",
            "details": details,
        }
    ).encode()
    await send({
        "type": "http.response.start",
        "status": 413,
        "headers": [(b"content-type", b"application/json")],
    })
    await send({"type": "http.response.body", "body": body, "more_body": False})


def _replay(chunks: list[bytes]) -> Callable:
    """Return a receive callable that hands the buffered body back one chunk at a time."""
    index = 0

    async def receive() -> dict:
        nonlocal index
        if index < len(chunks):
            body = chunks[index]
            index += 1
            return {"type": "http.request", "body": body, "more_body": index < len(chunks)}
        return {"type": "http.request", "body": b"", "more_body": False}

    return receive


def RequestSizeLimitMiddleware(app: Callable, max_upload_size: int) -> Callable:
    """Reject requests whose body exceeds the cap (Content-Length or chunked). Raw ASGI."""
    max_bytes = max_upload_size + MULTIPART_ALLOWANCE

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        content_length = get_header(scope, "content-length")
        if content_length is not None:
            try:
                length = int(content_length)
            except ValueError:
                length = 0
            if length > max_bytes:
                await _send_413(send, max_bytes, length)
                return
            await app(scope, receive, send)
            return

        if scope.get("method") in ("GET", "HEAD", "DELETE", "OPTIONS"):
            await app(scope, receive, send)
            return

        # No Content-Length (chunked): buffer and count before handing over.
        chunks: list[bytes] = []
        total = 0
        while True:
            message = await receive()
            if message["type"] == "http.disconnect":
                return
            if message["type"] != "http.request":
                continue
            body = message.get("body", b"")
            total += len(body)
            if total > max_bytes:
                await _send_413(send, max_bytes, total)
                return
            chunks.append(body)
            if not message.get("more_body", False):
                break

        await app(scope, _replay(chunks), send)

    return asgi_app
