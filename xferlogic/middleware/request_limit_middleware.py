import logging

from fastapi import HTTPException
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from xferlogic.common.exception.errors import RequestTooLargeError
from xferlogic.core.conf import settings

logger = logging.getLogger(__name__)


class RequestBodyLimitMiddleware:
    """
    请求体大小限制中间件

    Rejects a request with 413 when its declared ``Content-Length`` exceeds
    ``REQUEST_BODY_MAX_SIZE``, and also counts the bytes actually received so
    chunked bodies without a length are held to the same limit.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope['type'] != 'http':
            await self.app(scope, receive, send)
            return

        max_size = settings.REQUEST_BODY_MAX_SIZE
        content_length = Headers(scope=scope).get('content-length')
        if content_length and content_length.isdigit() and int(content_length) > max_size:
            logger.info(f"{scope['method']} {scope['path']} rejected: declared body of {content_length} bytes")
            exc = RequestTooLargeError(max_size)
            response = JSONResponse(status_code=exc.status_code, content=exc.to_dict())
            await response(scope, receive, send)
            return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message['type'] == 'http.request':
                received += len(message.get('body', b''))
                if received > max_size:
                    logger.info(f"{scope['method']} {scope['path']} rejected: body passed {max_size} bytes")
                    # Raised while the route reads its body; the HTTP exception handler answers 413
                    raise HTTPException(status_code=413, detail=RequestTooLargeError(max_size).message)
            return message

        await self.app(scope, limited_receive, send)
