"""Knowledge search session — wires config, service, state and controllers for one UI host.

The host UI supplies two callables: ``notify`` shows a toast and
``navigate`` opens an article's detail view.
"""

from __future__ import annotations

import logging
from typing import Callable

from kb_search.config import Config, config as default_config
from kb_search.models import NavigationRequest, Notification
from kb_search.search_controller import SearchController
from kb_search.service import KnowledgeArticleService
from kb_search.state import SearchState
from kb_search.view_tracker import ArticleDetailView, ArticleViewTracker

logger = logging.getLogger(__name__)


def configure_logging(level: str | None = None) -> None:
    """Apply the standard log format and quieten chatty HTTP libraries."""
    logging.basicConfig(
        level=level or default_config.log_level,
        format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
    )
    for _name in ("httpx", "httpcore"):
        logging.getLogger(_name).setLevel(logging.WARNING)


class KnowledgeSearchSession:
    """Everything one search page needs, torn down together."""

    def __init__(
        self,
        notify: Callable[[Notification], None],
        navigate: Callable[[NavigationRequest], None],
        settings: Config | None = None,
        service: KnowledgeArticleService | None = None,
    ) -> None:
        settings = settings or default_config
        self.service = service or KnowledgeArticleService(
            endpoint=settings.api_endpoint,
            token=settings.api_token,
        )
        self.state = SearchState()
        self.search = SearchController(
            self.service,
            notify,
            state=self.state,
            limit=settings.search_limit,
            debounce_seconds=settings.debounce_seconds,
        )
        self.tracker = ArticleViewTracker(self.service, self.state, notify, navigate)

    def start(self) -> None:
        self.search.start()
        logger.info("Knowledge search session started (limit=%d)", self.search.query.limit)

    async def open_detail(self, record_id: str) -> ArticleDetailView:
        view = ArticleDetailView(self.service, record_id)
        await view.connect()
        return view

    async def aclose(self) -> None:
        self.search.close()
        await self.service.aclose()
        logger.info("Knowledge search session closed")
