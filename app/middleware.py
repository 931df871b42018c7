from fastapi import HTTPException
from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.core.logging_config import logger


class BodySizeLimitMiddleware:
    """
    Weiger request bodies boven de limiet (base64-uploads zijn groot).

    Content-Length wordt vooraf gecontroleerd; chunked bodies zonder
    Content-Length worden geteld terwijl de app ze inleest.
    """

    def __init__(self, app: ASGIApp, max_bytes: int):
        self.app = app
        self.max_bytes = max_bytes

    def _too_large(self) -> str:
        return f"Request body exceeds {self.max_bytes} bytes"

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = Headers(scope=scope)
        length = headers.get("content-length")
        if length is not None:
            try:
                size = int(length)
            except ValueError:
                response = JSONResponse(status_code=400, content={"error": "Invalid Content-Length header"})
                await response(scope, receive, send)
                return
            if size > self.max_bytes:
                logger.warning("request_too_large", size=size, limit=self.max_bytes, path=scope.get("path"))
                response = JSONResponse(status_code=413, content={"error": self._too_large()})
                await response(scope, receive, send)
                return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_bytes:
                    logger.warning("request_too_large", size=received, limit=self.max_bytes, path=scope.get("path"))
                    # FastAPI laat HTTPException uit het inlezen van de body ongemoeid door
                    raise HTTPException(status_code=413, detail=self._too_large())
            return message

        await self.app(scope, limited_receive, send)
