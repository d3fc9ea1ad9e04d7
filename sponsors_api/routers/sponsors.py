import logging
import re

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import RedirectResponse

from sponsors_api.core.cache import SponsorCache
from sponsors_api.core.errors import BadIndexError, RouteNotImplementedError, SponsorNotFoundError
from sponsors_api.services.render_service import PLACEHOLDER_PNG, render_markdown

# Routes match by prefix: everything after /sponsor/avatar etc. reaches the handler
router = APIRouter(prefix="/sponsor", tags=["sponsors"])
fallback_router = APIRouter()
logger = logging.getLogger(__name__)

INDEX_PATTERN = re.compile(r"\+?\d+", re.ASCII)
READ_METHODS = ["GET", "HEAD"]


def get_sponsor_cache(request: Request) -> SponsorCache:
    return request.app.state.sponsor_cache


def parse_index(index: str) -> int:
    """Positional sponsor index from the path; must be a plain non-negative integer."""
    if not INDEX_PATTERN.fullmatch(index):
        logger.warning(f"error parsing index: {index!r}")
        raise BadIndexError(index)
    return int(index)


def _index_segment(rest: str, request: Request) -> str:
    """What follows "/sponsor/<kind>/"; without that slash the whole path is the (bad) index."""
    if rest.startswith("/"):
        return rest[1:]
    return request.url.path


@router.api_route("/markdown{rest:path}", methods=READ_METHODS)
async def markdown(request: Request, rest: str):
    """Avatar/profile links for every slot, ready to paste into a README."""
    return Response(render_markdown(request.app.state.base_url), media_type="text/markdown")


@router.api_route("/avatar{rest:path}", methods=READ_METHODS)
async def avatar(request: Request, rest: str, cache: SponsorCache = Depends(get_sponsor_cache)):
    n = parse_index(_index_segment(rest, request))
    sponsors = cache.snapshot()

    # Empty slot: serve the gray pixel so the README image still renders
    if n >= len(sponsors):
        return Response(PLACEHOLDER_PNG, media_type="image/png")

    return RedirectResponse(sponsors[n].avatar_url, status_code=307)


@router.api_route("/profile{rest:path}", methods=READ_METHODS)
async def profile(request: Request, rest: str, cache: SponsorCache = Depends(get_sponsor_cache)):
    n = parse_index(_index_segment(rest, request))
    sponsors = cache.snapshot()

    if n >= len(sponsors):
        raise SponsorNotFoundError(n)

    return RedirectResponse(sponsors[n].profile_url, status_code=307)


@fallback_router.api_route(
    "/{path:path}",
    methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    include_in_schema=False,
)
async def not_implemented(path: str):
    raise RouteNotImplementedError(path)
