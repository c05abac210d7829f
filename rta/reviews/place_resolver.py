"""Maps-link place resolution and review fetching via the Google Places web service."""

from __future__ import annotations

import logging
import re
from urllib.parse import unquote_plus

import httpx

from rta.errors import ConfigError, InvalidMapsLink, NoReviewsFound, PlaceNotFound, UpstreamCallError

logger = logging.getLogger(__name__)

PLACES_API_BASE = "https://maps.googleapis.com/maps/api/place"

# Tried in order; the first match wins.
_TOKEN_PATTERNS: list[tuple[str, re.Pattern[str]]] = [
    ("place_id query", re.compile(r"[?&]place_id=([^&#]+)")),
    ("cid query", re.compile(r"[?&]cid=([^&#]+)")),
    ("place path", re.compile(r"/place/([^/@?#]+)")),
    ("place_id path", re.compile(r"(?:/place_id/|place_id:)([A-Za-z0-9_-]+)")),
]

CANONICAL_PLACE_ID_RE = re.compile(r"^ChIJ[A-Za-z0-9_-]{6,}$")


def extract_place_token(url: str) -> str | None:
    """Return the first place identifier (or place name) found in a Maps link."""
    if not url:
        return None
    for label, pattern in _TOKEN_PATTERNS:
        m = pattern.search(url)
        if m:
            token = unquote_plus(m.group(1)).strip()
            if token:
                logger.debug("Maps link matched %s pattern", label)
                return token
    return None


def is_canonical_place_id(token: str) -> bool:
    return bool(CANONICAL_PLACE_ID_RE.match(token))


class PlaceResolver:
    """Resolve Maps links to place ids and fetch their review texts."""

    def __init__(
        self,
        api_key: str | None,
        client: httpx.Client | None = None,
        max_reviews: int = 50,
        timeout: float = 15.0,
        base_url: str = PLACES_API_BASE,
    ):
        if not api_key:
            raise ConfigError("GOOGLE_PLACES_API_KEY environment variable is not set")
        self._api_key = api_key
        self._client = client or httpx.Client(follow_redirects=True, timeout=timeout)
        self._max_reviews = max_reviews
        self._base_url = base_url.rstrip("/")

    def resolve(self, url: str) -> str:
        """Return a canonical place id for the link, searching by text when needed."""
        token = extract_place_token(url)
        if not token:
            raise InvalidMapsLink("Could not find a place identifier in the Maps link")
        if is_canonical_place_id(token):
            return token
        return self._text_search(token)

    def fetch_reviews(self, place_id: str) -> list[str]:
        """Return up to ``max_reviews`` non-empty review texts for the place."""
        data = self._get("details/json", {"place_id": place_id, "fields": "reviews"})
        if data.get("status") not in (None, "OK"):
            raise UpstreamCallError(
                f"Places details error: {data.get('error_message') or data.get('status')}"
            )
        reviews = (data.get("result") or {}).get("reviews") or []
        texts = [
            str(r.get("text", "")).strip()
            for r in reviews
            if isinstance(r, dict) and str(r.get("text", "")).strip()
        ][: self._max_reviews]
        if not texts:
            raise NoReviewsFound("No reviews found for this place")
        logger.info("Fetched %d reviews for place %s", len(texts), place_id)
        return texts

    def _text_search(self, query: str) -> str:
        try:
            data = self._get("textsearch/json", {"query": query})
        except UpstreamCallError as e:
            raise PlaceNotFound(f"Could not find place for the Maps link: {e}") from e
        results = data.get("results") or []
        place_id = results[0].get("place_id") if results and isinstance(results[0], dict) else None
        if not place_id:
            raise PlaceNotFound("Could not find place for the Maps link")
        return place_id

    def _get(self, path: str, params: dict[str, str]) -> dict:
        try:
            response = self._client.get(f"{self._base_url}/{path}", params={**params, "key": self._api_key})
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise UpstreamCallError(f"Places API error: HTTP {e.response.status_code}") from e
        except (httpx.HTTPError, ValueError) as e:
            raise UpstreamCallError(f"Places API error: {e}") from e
