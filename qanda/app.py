"""The question service application, a minimal greeting server and a client."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Iterable
from pathlib import Path

import httpx
import uvicorn
from starlette.applications import Starlette
from starlette.datastructures import Headers, MutableHeaders
from starlette.exceptions import HTTPException
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.routing import Route
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from qanda.errors import ApiError, CorsForbidden, recover
from qanda.routes import route_table
from qanda.store import Store, load_questions

DEFAULT_HOST = "127.0.0.1"
SERVICE_PORT = 3030
HELLO_PORT = 1337
HELLO_MESSAGE = "m+z-cycles"
HELLO_URL = "http://localhost:1337"


def _error_response(error: BaseException) -> PlainTextResponse:
    body, status = recover(error)
    return PlainTextResponse(body, status_code=int(status))


async def _recover_response(request: Request, exc: Exception) -> PlainTextResponse:
    return _error_response(exc)


class _CorsMiddleware:
    """Allows any origin, a fixed set of methods and a fixed set of headers."""

    def __init__(
        self, app: ASGIApp, allow_methods: Iterable[str], allow_headers: Iterable[str]
    ) -> None:
        self.app = app
        self.allow_methods = [method.upper() for method in allow_methods]
        self.allow_headers = [header.lower() for header in allow_headers]

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return
        headers = Headers(scope=scope)
        origin = headers.get("origin")
        if origin is None:
            await self.app(scope, receive, send)
            return
        if scope["method"] == "OPTIONS" and "access-control-request-method" in headers:
            response = self._preflight(origin, headers)
            await response(scope, receive, send)
            return

        async def send_with_origin(message: Message) -> None:
            if message["type"] == "http.response.start":
                MutableHeaders(scope=message)["access-control-allow-origin"] = origin
            await send(message)

        await self.app(scope, receive, send_with_origin)

    def _preflight(self, origin: str, headers: Headers) -> Response:
        method = headers["access-control-request-method"].strip().upper()
        if method not in self.allow_methods:
            return _error_response(CorsForbidden("request-method not allowed"))
        requested = headers.get("access-control-request-headers", "")
        for name in (part.strip().lower() for part in requested.split(",")):
            if name and name not in self.allow_headers:
                return _error_response(CorsForbidden("header not allowed"))
        return Response(
            status_code=200,
            headers={
                "access-control-allow-origin": origin,
                "access-control-allow-methods": ", ".join(self.allow_methods),
                "access-control-allow-headers": ", ".join(self.allow_headers),
            },
        )


def create_app(store: Store | None = None) -> Starlette:
    """Build the question service around ``store`` (an empty one by default)."""
    app = Starlette(
        routes=route_table(),
        middleware=[
            Middleware(
                _CorsMiddleware,
                allow_methods=["PUT", "DELETE"],
                allow_headers=["content-type"],
            )
        ],
        exception_handlers={
            ApiError: _recover_response,
            HTTPException: _recover_response,
        },
    )
    app.state.store = Store() if store is None else store
    return app


def create_hello_app(message: str = HELLO_MESSAGE) -> Starlette:
    """Build a server that answers every GET request with ``message``."""

    async def hello(request: Request) -> PlainTextResponse:
        return PlainTextResponse(message)

    return Starlette(routes=[Route("/{path:path}", hello, methods=["GET"])])


def _describe(response: httpx.Response) -> str:
    headers = ",\n".join(f"        {k!r}: {v!r}" for k, v in response.headers.items())
    return (
        "Response {\n"
        f"    url: {response.url},\n"
        f"    status: {response.status_code},\n"
        "    headers: {\n"
        f"{headers}\n"
        "    },\n"
        "}"
    )


def fetch(url: str = HELLO_URL) -> httpx.Response:
    """Send a GET request to ``url``, print a summary and return the response."""
    response = httpx.get(url)
    print(_describe(response))
    return response


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="qanda", description="Question and answer service.")
    parser.add_argument(
        "command",
        nargs="?",
        choices=["serve", "hello", "fetch"],
        default="serve",
        help="what to run (default: serve)",
    )
    parser.add_argument("--host", default=DEFAULT_HOST, help="address to listen on")
    parser.add_argument("--port", type=int, default=None, help="port to listen on")
    parser.add_argument(
        "--questions", type=Path, default=None, help="JSON file of initial questions"
    )
    parser.add_argument("--url", default=HELLO_URL, help="address to fetch")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the service, the greeting server or the client."""
    args = _parse_args(argv)
    if args.command == "fetch":
        try:
            fetch(args.url)
        except httpx.HTTPError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        return 0
    if args.command == "hello":
        port = HELLO_PORT if args.port is None else args.port
        uvicorn.run(create_hello_app(), host=args.host, port=port)
        return 0
    store = Store()
    if args.questions is not None:
        try:
            store = Store(load_questions(args.questions.read_text(encoding="utf-8")))
        except (OSError, ValueError) as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
    port = SERVICE_PORT if args.port is None else args.port
    uvicorn.run(create_app(store), host=args.host, port=port)
    return 0