"""CORS middleware that leaves the manifest stream's handshake alone."""

from starlette.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send


class PassthroughCORSMiddleware(CORSMiddleware):
    """CORSMiddleware that hands ``passthrough_paths`` straight to the app.

    The SSE endpoint sets its own CORS headers and answers OPTIONS itself
    with the full event-stream header set, so preflights to it must reach
    the route instead of getting the middleware's plain-text ``OK``.
    """

    def __init__(
        self,
        app: ASGIApp,
        passthrough_paths: tuple[str, ...] = (),
        **kwargs,
    ) -> None:
        super().__init__(app, **kwargs)
        self.passthrough_paths = frozenset(passthrough_paths)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["path"] in self.passthrough_paths:
            await self.app(scope, receive, send)
            return
        await super().__call__(scope, receive, send)
