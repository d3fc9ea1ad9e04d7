import logging
import time

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from sponsors_api.core.cache import FetchSponsors, SponsorCache
from sponsors_api.core.config import Settings, settings
from sponsors_api.core.errors import UpstreamFetchError, register_error_handlers
from sponsors_api.routers import sponsors
from sponsors_api.services.sponsor_service import GitHubSponsorsClient

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


def create_app(config: Settings | None = None, fetch_sponsors: FetchSponsors | None = None) -> FastAPI:
    """Build the app around a single sponsor cache.

    `fetch_sponsors` defaults to the GitHub GraphQL client; tests pass their own.
    """
    config = config or settings
    github = None
    if fetch_sponsors is None:
        github = GitHubSponsorsClient(
            token=config.GITHUB_TOKEN,
            url=config.GITHUB_GRAPHQL_URL,
            timeout=config.GITHUB_TIMEOUT,
        )
        fetch_sponsors = github.fetch_sponsors

    # No docs/openapi routes: every unknown path belongs to the 501 fallback
    app = FastAPI(title=config.PROJECT_NAME, docs_url=None, redoc_url=None, openapi_url=None)
    app.state.base_url = config.base_url
    app.state.sponsor_cache = SponsorCache(fetch_sponsors, ttl_seconds=config.CACHE_TTL)

    # Logging + cache priming for every request, matched route or not
    @app.middleware("http")
    async def prime_cache(request: Request, call_next):
        method, path = request.method, request.url.path
        start = time.perf_counter()
        logger.info("%s %s", method, path)
        try:
            try:
                await app.state.sponsor_cache.ensure_fresh()
            except UpstreamFetchError as e:
                logger.error(f"error priming cache: {e}")
                return PlainTextResponse("Error fetching sponsors", status_code=500)
            return await call_next(request)
        finally:
            logger.info("%s %s -> %.1fms", method, path, (time.perf_counter() - start) * 1000)

    register_error_handlers(app)

    app.include_router(sponsors.router)
    app.include_router(sponsors.fallback_router)

    @app.on_event("startup")
    async def on_startup():
        if github is not None and not config.github_enabled:
            logger.warning("GITHUB_TOKEN not set, sponsor fetches will be rejected by GitHub")

    @app.on_event("shutdown")
    async def on_shutdown():
        if github is not None:
            await github.aclose()

    return app
