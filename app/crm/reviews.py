from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from app.crm.errors import ReviewSourceError
from app.crm.models import Review

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReviewClient:
    """
    Read-only client for the review backend (`GET /` and `GET /reviews/`).
    Any non-200 answer or undecodable body raises ReviewSourceError; there is no retry.
    """
    base_url: str
    timeout_seconds: float = 30
    transport: httpx.AsyncBaseTransport | None = None

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url.rstrip("/"),
            timeout=self.timeout_seconds,
            transport=self.transport,
        )

    async def _get(self, path: str) -> httpx.Response:
        try:
            async with self._client() as client:
                resp = await client.get(path)
        except httpx.HTTPError as e:
            raise ReviewSourceError(f"GET {path} failed: {e}") from e
        if resp.status_code != 200:
            raise ReviewSourceError(f"HTTP {resp.status_code} from review backend ({path}): {resp.text[:300]}")
        return resp

    async def fetch_root(self) -> str:
        resp = await self._get("/")
        return resp.text

    async def list_reviews_raw(self) -> tuple[str, list[dict[str, Any]]]:
        """Returns (media type, decoded records) for callers that want to check the envelope."""
        resp = await self._get("/reviews/")
        media_type = (resp.headers.get("content-type") or "").split(";")[0].strip()
        try:
            data = resp.json()
        except ValueError as e:
            raise ReviewSourceError("Invalid JSON from review backend (/reviews/)") from e
        if not isinstance(data, list):
            raise ReviewSourceError(f"Expected a JSON array from /reviews/, got {type(data).__name__}")
        logger.debug("Fetched %d reviews", len(data))
        return media_type, data

    async def list_reviews(self) -> list[Review]:
        _, data = await self.list_reviews_raw()
        return [Review.from_dict(row) for row in data if isinstance(row, dict)]
