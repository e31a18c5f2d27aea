"""ASGI app over a dispatch table.

The only component that touches raw ASGI directly. Matches the request
against a ``Router``, calls the bound handler with its path params, and
sends the result back through ASGI send().

Usage::

    router = Router()
    service.dispatch_table(router)
    app = ASGIApp(router)
    # uvicorn mymodule:app
"""

import inspect
import logging
from typing import Any

from routebook._internal.asgi import Receive, Scope, Send
from routebook.errors import HTTPError
from routebook.http.response import Response
from routebook.routing.router import Router
from routebook.server.sender import send_response

logger = logging.getLogger("routebook.server")


def to_response(value: Any) -> Response:
    """Convert a handler's return value to a Response.

    ``Response`` passes through, ``str``/``bytes`` become ``text/plain``,
    ``dict``/``list`` become JSON, and ``None`` is an empty 204.
    """
    match value:
        case Response():
            return value
        case str() | bytes():
            return Response(body=value)
        case dict() | list():
            return Response.json(value)
        case None:
            return Response(status=204)
        case _:
            msg = f"Cannot convert handler result of type {type(value).__name__} to a response"
            raise TypeError(msg)


class ASGIApp:
    """Serve a ``Router`` as an ASGI application."""

    __slots__ = ("router",)

    def __init__(self, router: Router) -> None:
        self.router = router

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return
        if scope["type"] != "http":
            return

        method: str = scope["method"]
        path: str = scope["path"]
        response = await self._dispatch(method, path)
        await send_response(response, send, method=method)

    async def _dispatch(self, method: str, path: str) -> Response:
        try:
            found = self.router.match(method, path)
            result = found.binding.handler(**found.path_params)
            if inspect.isawaitable(result):
                result = await result
            return to_response(result)
        except HTTPError as exc:
            logger.debug("%d %s %s: %s", exc.status, method, path, exc.detail)
            resp = Response(body=exc.detail or f"Error {exc.status}", status=exc.status)
            for name, value in exc.headers:
                resp = resp.with_header(name, value)
            return resp
        except Exception:
            logger.exception("500 %s %s", method, path)
            return Response(body="Internal Server Error", status=500)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return
