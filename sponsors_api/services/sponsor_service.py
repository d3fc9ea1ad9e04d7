"""GitHub Sponsors via the GraphQL API — paginated fetch of everyone sponsoring the viewer."""

import logging
from typing import Awaitable, Callable, Optional

import httpx
from pydantic import ValidationError

from sponsors_api.core.errors import UpstreamFetchError
from sponsors_api.models.schemas import Sponsor, SponsorPage

logger = logging.getLogger(__name__)

GITHUB_GRAPHQL_URL = "https://api.github.com/graphql"
PAGE_SIZE = 100

SPONSORSHIPS_QUERY = """\
query($cursor: String) {
  viewer {
    login
    sponsorshipsAsMaintainer(first: %d, after: $cursor) {
      pageInfo {
        endCursor
        hasNextPage
      }
      edges {
        cursor
        node {
          sponsorEntity {
            ... on User { name login avatarUrl }
            ... on Organization { name login avatarUrl }
          }
        }
      }
    }
  }
}
""" % PAGE_SIZE

FetchPage = Callable[[Optional[str]], Awaitable[SponsorPage]]


def parse_sponsorships(data: dict) -> SponsorPage:
    """Turn a sponsorshipsAsMaintainer GraphQL payload into a SponsorPage."""
    try:
        sponsorships = data["data"]["viewer"]["sponsorshipsAsMaintainer"]
        page_info = sponsorships["pageInfo"]
        sponsors = []
        for edge in sponsorships.get("edges") or []:
            entity = edge["node"]["sponsorEntity"]
            if entity is None:
                # Deleted accounts come back as a null entity
                logger.warning("Skipping sponsorship without a sponsor entity (cursor=%s)", edge.get("cursor"))
                continue
            sponsors.append(Sponsor.model_validate(entity))

        return SponsorPage(
            sponsors=sponsors,
            has_next_page=bool(page_info.get("hasNextPage")),
            end_cursor=page_info.get("endCursor"),
        )
    except (KeyError, TypeError, AttributeError, ValidationError) as e:
        raise UpstreamFetchError(f"Unexpected sponsorships payload: {e}") from e


class GitHubSponsorsClient:
    """Thin httpx wrapper around the sponsorships GraphQL query."""

    def __init__(
        self,
        token: str,
        url: str = GITHUB_GRAPHQL_URL,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self._http = httpx.AsyncClient(
            timeout=timeout,
            transport=transport,
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/json",
            },
        )

    async def fetch_page(self, cursor: Optional[str] = None) -> SponsorPage:
        """Fetch one page of sponsors, starting after `cursor` (None for the first page)."""
        try:
            resp = await self._http.post(
                self.url,
                json={"query": SPONSORSHIPS_QUERY, "variables": {"cursor": cursor}},
            )
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("GitHub GraphQL request failed: %s", e)
            raise UpstreamFetchError(f"GitHub API error: {e}") from e

        if isinstance(data, dict) and data.get("errors"):
            messages = "; ".join(str(err.get("message", err)) for err in data["errors"])
            logger.error("GitHub GraphQL returned errors: %s", messages)
            raise UpstreamFetchError(f"GitHub API error: {messages}")

        return parse_sponsorships(data)

    async def fetch_sponsors(self) -> list[Sponsor]:
        return await fetch_all_sponsors(self.fetch_page)

    async def aclose(self) -> None:
        await self._http.aclose()


async def fetch_all_sponsors(fetch_page: FetchPage) -> list[Sponsor]:
    """Follow the cursor page by page and return every sponsor in source order.

    The first failing page aborts the whole fetch; nothing partial is returned.
    """
    sponsors: list[Sponsor] = []
    cursor: Optional[str] = None
    pages = 0

    while True:
        page = await fetch_page(cursor)
        pages += 1
        sponsors.extend(page.sponsors)

        if not page.has_next_page:
            break
        if not page.end_cursor:
            raise UpstreamFetchError("GitHub API signaled another page without a cursor")
        cursor = page.end_cursor

    logger.info("Fetched %d sponsors in %d page(s)", len(sponsors), pages)
    return sponsors
