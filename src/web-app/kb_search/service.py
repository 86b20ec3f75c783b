"""Knowledge article service — HTTP client for the remote search and view-count procedures.

Both procedures are exposed by the knowledge article REST endpoint as JSON
``POST`` calls:

- ``POST {endpoint}/searchArticles``      ``{searchTerm, limitSize}`` → list of records
- ``POST {endpoint}/incrementViewCount``  ``{articleId}`` → updated view count
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from kb_search.errors import RemoteCallError
from kb_search.models import DEFAULT_SEARCH_LIMIT, RawArticleRecord, to_view_count

logger = logging.getLogger(__name__)

_DEFAULT_TIMEOUT = 30.0


class KnowledgeArticleService:
    """Async client for ``SearchArticles`` and ``IncrementViewCount``."""

    def __init__(
        self,
        endpoint: str,
        token: str = "",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        # Trailing slash ensures httpx resolves relative paths correctly
        base_url = endpoint.rstrip("/") + "/"
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=_DEFAULT_TIMEOUT,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _call(self, procedure: str, payload: dict[str, Any]) -> Any:
        try:
            resp = await self._client.post(procedure, json=payload)
        except httpx.HTTPError as e:
            raise RemoteCallError(str(e) or type(e).__name__) from e

        if resp.is_error:
            body = _json_or_none(resp)
            raise RemoteCallError(
                f"{procedure} failed with HTTP {resp.status_code}",
                body=body if isinstance(body, dict) else None,
                status_code=resp.status_code,
            )

        try:
            return resp.json()
        except ValueError as e:
            raise RemoteCallError(f"{procedure} returned invalid JSON") from e

    async def search_articles(
        self, search_term: str, limit_size: int = DEFAULT_SEARCH_LIMIT
    ) -> list[RawArticleRecord]:
        """Run the remote search.

        Returns
        -------
        list[RawArticleRecord]
            In server order; an empty list when nothing matched.
        """
        data = await self._call(
            "searchArticles", {"searchTerm": search_term, "limitSize": limit_size}
        )
        if not isinstance(data, list):
            raise RemoteCallError("searchArticles returned a non-list payload")

        try:
            records = [RawArticleRecord.from_payload(item) for item in data]
        except ValueError as e:
            raise RemoteCallError(f"searchArticles returned a malformed record: {e}") from e
        logger.info(
            "searchArticles('%s', limit=%d) → %d records",
            search_term[:80],
            limit_size,
            len(records),
        )
        return records

    async def increment_view_count(self, article_id: str) -> int:
        """Increment the persisted view counter and return the new value."""
        data = await self._call("incrementViewCount", {"articleId": article_id})
        try:
            count = to_view_count(data)
        except ValueError as e:
            raise RemoteCallError(f"incrementViewCount returned an invalid count: {e}") from e
        logger.info("incrementViewCount(%s) → %d", article_id, count)
        return count


def _json_or_none(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return None
