"""FastAPI application entry point for Airtable MCP."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from airtable_mcp import __version__
from airtable_mcp.api.cors import PassthroughCORSMiddleware
from airtable_mcp.api.routes import SSE_PATH, router, tools_router
from airtable_mcp.config import Settings, get_settings
from airtable_mcp.exceptions import GatewayError
from airtable_mcp.models.manifest import build_manifest
from airtable_mcp.models.records import ToolResult
from airtable_mcp.tools.airtable import AirtableClient

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings: Settings = app.state.settings

    logger.info(f"Starting Airtable MCP Server v{__version__}")
    if not settings.airtable_configured:
        logger.warning("Missing AIRTABLE_PAT or AIRTABLE_BASE_ID")
    if not settings.actions_key:
        logger.warning("ACTIONS_KEY not set; tool endpoints will answer 500")
    logger.info(
        f"Manifest stream: {len(app.state.manifest.tools)} tools, "
        f"ping every {settings.sse_ping_interval}s"
    )

    yield

    logger.info("Shutting down Airtable MCP Server")


async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    """Render a GatewayError as the ``{ok: false, error}`` envelope."""
    return JSONResponse(
        status_code=exc.status_code,
        content=ToolResult.failure(exc.error).to_response(),
    )


async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Routing 404/405s get the envelope instead of ``{"detail": ...}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content=ToolResult.failure(exc.detail).to_response(),
        headers=getattr(exc, "headers", None),
    )


def _describe_error(err: dict) -> str:
    location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
    message = err.get("msg", "invalid")
    return f"{location}: {message}" if location else message


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies get the envelope with a 400, not FastAPI's 422."""
    messages = [_describe_error(err) for err in exc.errors()]
    logger.debug(f"Rejected request body on {request.url.path}: {messages}")
    return JSONResponse(
        status_code=400,
        content=ToolResult.failure("; ".join(messages) or "invalid request").to_response(),
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Configuration to run with (loaded from the environment
            if not provided)

    Returns:
        Configured FastAPI app
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Airtable MCP",
        description="Read-only Airtable tools with an SSE tool manifest",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    app.state.settings = settings
    app.state.manifest = build_manifest(
        settings.manifest_name, settings.manifest_version
    )
    app.state.airtable = AirtableClient(settings)

    app.add_middleware(
        PassthroughCORSMiddleware,
        passthrough_paths=(SSE_PATH,),
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(GatewayError, gateway_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(router)
    app.include_router(tools_router)

    return app


def run() -> None:
    """Run the server with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        timeout_graceful_shutdown=settings.shutdown_grace_seconds,
    )


if __name__ == "__main__":
    run()
