"""Article view tracking — increment the persisted view counter when an article is opened.

Two entry points:

- :class:`ArticleViewTracker` — a result row was activated in the search
  list; bump the count, patch the row and navigate to the detail view.
- :class:`ArticleDetailView` — the detail view became visible; bump the
  count once for display.  Failures are only logged.
"""

from __future__ import annotations

import logging
from typing import Callable

from kb_search.errors import error_message
from kb_search.models import NavigationRequest, Notification
from kb_search.state import SearchState

logger = logging.getLogger(__name__)

INCREMENT_ERROR_TITLE = "Error"
INCREMENT_ERROR_FALLBACK = "Error incrementing view count"


class ArticleViewTracker:
    """Records a view for an activated search row, then navigates to it."""

    def __init__(
        self,
        service,
        state: SearchState,
        notify: Callable[[Notification], None],
        navigate: Callable[[NavigationRequest], None],
    ) -> None:
        self.service = service
        self.state = state
        self.notify = notify
        self.navigate = navigate

    async def on_article_activated(self, article_id: str | None) -> None:
        if not article_id:
            logger.debug("Ignoring activation without an article id")
            return

        self.state.set_loading(True)
        try:
            updated_count = await self.service.increment_view_count(article_id)
            if not self.state.patch_view_count(article_id, updated_count):
                logger.debug("Article %s not in current rows; nothing to patch", article_id)
            self.navigate(NavigationRequest(record_id=article_id))
        except Exception as e:
            logger.error("Failed to increment view count for %s: %s", article_id, e)
            self.notify(Notification(
                title=INCREMENT_ERROR_TITLE,
                message=error_message(e, INCREMENT_ERROR_FALLBACK),
            ))
        finally:
            self.state.set_loading(False)


class ArticleDetailView:
    """Detail view of a single article showing its view count."""

    def __init__(self, service, record_id: str) -> None:
        self.service = service
        self.record_id = record_id
        self.view_count: int | None = None

    async def connect(self) -> None:
        """Increment the view count once as the view becomes visible."""
        try:
            self.view_count = await self.service.increment_view_count(self.record_id)
        except Exception:
            logger.error("Error incrementing view count for %s", self.record_id, exc_info=True)
