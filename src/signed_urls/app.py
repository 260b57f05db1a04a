"""Demo service with one route guarded by signed URLs."""

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse
from starlette.routing import Route
import uvicorn

from signed_urls.common.logging import get_logger, setup_logging
from signed_urls.common.metrics import metrics_endpoint
from signed_urls.common.settings import Settings, get_settings
from signed_urls.guard import SignedUrlMiddleware
from signed_urls.signer import UrlSigner

logger = get_logger(__name__)


async def handle_secret(_request: Request) -> PlainTextResponse:
    return PlainTextResponse("Hello, secret!")


async def handle_health(_request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


def create_app(settings: Settings | None = None) -> Starlette:
    """Create the Starlette application."""
    settings = settings or get_settings()
    signer = UrlSigner.from_settings(settings)
    if not settings.secret:
        logger.warning("No signing secret configured; signed routes will answer 500")

    routes = [
        Route("/", handle_secret, methods=["GET"]),
        Route("/health", handle_health, methods=["GET"]),
        Route("/metrics", metrics_endpoint, methods=["GET"]),
    ]

    app = Starlette(routes=routes)
    app.add_middleware(
        SignedUrlMiddleware,
        signer=signer,
        exempt_paths=settings.exempt_paths,
    )
    return app


def main() -> None:
    """Entry point for the demo server."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app = create_app(settings)

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
