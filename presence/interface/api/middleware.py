"""ASGI middleware for vanity-domain routing and response headers."""

from dishka import AsyncContainer
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from presence.domain.service import HostRouter

API_PREFIX = "/api"


def strip_api_prefix(path: str) -> str | None:
    """Remove a leading ``/api`` segment.

    Only a whole segment counts: ``/api`` and ``/api/users`` are rewritten,
    ``/apix`` is not.

    Args:
        path: Request path without query string

    Returns:
        The rewritten path, or None if the path has no ``/api`` segment
    """
    if path == API_PREFIX:
        return "/"
    if path.startswith(API_PREFIX + "/"):
        return path[len(API_PREFIX) :]
    return None


def _host_header(scope: Scope) -> str | None:
    for name, value in scope.get("headers", []):
        if name == b"host":
            return value.decode("latin-1")
    return None


class VanityDomainMiddleware:
    """Serves ``/api/...`` as ``/...`` on configured user domains.

    User sites proxy the API under ``/api`` on their own domain. The query
    string is kept as is; only the path is rewritten.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        rewritten = strip_api_prefix(scope["path"])
        if rewritten is not None:
            container: AsyncContainer = scope["app"].state.dishka_container
            host_router = await container.get(HostRouter)
            if host_router.is_user_domain(_host_header(scope)):
                scope = dict(scope)
                scope["path"] = rewritten
                scope["raw_path"] = rewritten.encode("latin-1")

        await self.app(scope, receive, send)


class AllowAnyOriginMiddleware:
    """Adds ``Access-Control-Allow-Origin: *`` to every HTTP response.

    CORSMiddleware only sets the header when the request carries an
    ``Origin``; the API is public so it is sent unconditionally.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_origin(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = [
                    (name, value)
                    for name, value in message.get("headers", [])
                    if name.lower() != b"access-control-allow-origin"
                ]
                headers.append((b"access-control-allow-origin", b"*"))
                message = {**message, "headers": headers}
            await send(message)

        await self.app(scope, receive, send_with_origin)
