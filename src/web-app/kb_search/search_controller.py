"""Search controller — debounced search input driving the remote article search.

Keystrokes are debounced into a *committed* query.  Every change of the
committed query issues one remote search as an asyncio task tagged with a
sequence number; only the response carrying the latest sequence number is
allowed to touch the shared :class:`~kb_search.state.SearchState`, so a slow
response for an old term can never overwrite results for a newer one.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Sequence

from kb_search.debounce import Debouncer
from kb_search.errors import error_message
from kb_search.models import (
    DEFAULT_SEARCH_LIMIT,
    Article,
    Notification,
    RawArticleRecord,
    SearchQuery,
)
from kb_search.state import SearchState

logger = logging.getLogger(__name__)

SEARCH_DEBOUNCE_SECONDS = 0.3
SEARCH_ERROR_TITLE = "Search error"
SEARCH_ERROR_FALLBACK = "Unknown error"


class SearchController:
    """Turns raw input into throttled remote searches and renderable rows."""

    def __init__(
        self,
        service,
        notify: Callable[[Notification], None],
        state: SearchState | None = None,
        limit: int = DEFAULT_SEARCH_LIMIT,
        debounce_seconds: float = SEARCH_DEBOUNCE_SECONDS,
    ) -> None:
        self.service = service
        self.notify = notify
        self.state = state or SearchState()
        self.query = SearchQuery(term="", limit=limit)
        self._debouncer = Debouncer(debounce_seconds)
        self._seq = 0
        self._inflight: set[asyncio.Task] = set()
        self._started = False
        self._closed = False

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def term(self) -> str:
        return self.query.term

    @property
    def loading(self) -> bool:
        return self.state.loading

    @property
    def rows(self) -> tuple[Article, ...]:
        return self.state.rows

    @property
    def show_no_results(self) -> bool:
        return self.state.show_no_results

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Issue the initial query for the current (empty) term."""
        if self._started or self._closed:
            return
        self._started = True
        self._issue()

    def close(self) -> None:
        """Cancel the pending debounce and drop all state.

        In-flight remote calls are left to finish; their results are ignored.
        """
        self._closed = True
        self._debouncer.cancel()
        self.state.clear_rows()

    async def settle(self) -> None:
        """Wait until every issued search has resolved."""
        while self._inflight:
            await asyncio.gather(*list(self._inflight), return_exceptions=True)

    # ------------------------------------------------------------------
    # Input handlers
    # ------------------------------------------------------------------

    def on_input_changed(self, raw_value: str) -> None:
        """Record a keystroke and restart the debounce window."""
        if self._closed:
            return
        self._debouncer.schedule(self._commit, raw_value)

    def on_search_triggered(self, current_field_value: str | None = None) -> None:
        """Commit *current_field_value* immediately, bypassing the debounce."""
        if self._closed:
            return
        self._debouncer.cancel()
        term = self.query.term if current_field_value is None else current_field_value
        self._commit(term)

    def set_limit(self, limit: int) -> None:
        if self._closed:
            return
        query = SearchQuery(term=self.query.term, limit=limit)
        if query != self.query:
            self.query = query
            self._issue()

    def refresh(self) -> None:
        """Re-run the committed query even though it has not changed."""
        if not self._closed:
            self._issue()

    def _commit(self, term: str) -> None:
        query = SearchQuery(term=term, limit=self.query.limit)
        if query == self.query and self._started:
            logger.debug("Committed term unchanged ('%s'), not re-querying", term[:80])
            return
        self.query = query
        self._started = True
        self._issue()

    # ------------------------------------------------------------------
    # Remote search + resolution
    # ------------------------------------------------------------------

    def _issue(self) -> None:
        self._seq += 1
        seq = self._seq
        query = self.query
        logger.debug("Issuing search #%d term='%s' limit=%d", seq, query.term[:80], query.limit)
        self.handle_resolution()

        task = asyncio.ensure_future(self._run(seq, query))
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)

    async def _run(self, seq: int, query: SearchQuery) -> None:
        try:
            records = await self.service.search_articles(query.term, query.limit)
        except Exception as e:
            if self._is_current(seq):
                logger.warning("Search #%d for '%s' failed: %s", seq, query.term[:80], e)
                self.handle_resolution(error=e)
            else:
                logger.debug("Discarding stale failure for search #%d", seq)
            return

        if self._is_current(seq):
            self.handle_resolution(data=records)
        else:
            logger.debug("Discarding stale response for search #%d (latest #%d)", seq, self._seq)

    def _is_current(self, seq: int) -> bool:
        return not self._closed and seq == self._seq

    def handle_resolution(
        self,
        data: Sequence[RawArticleRecord] | None = None,
        error: BaseException | None = None,
    ) -> None:
        """Reconcile a search outcome into the shared state.

        With neither *data* nor *error* (the pending state) rows are cleared
        and ``loading`` is left as it is.
        """
        if data is not None:
            self.state.replace_rows(
                (Article.from_record(record) for record in data), loading=False
            )
        elif error is not None:
            self.state.clear_rows(loading=False)
            self.notify(Notification(
                title=SEARCH_ERROR_TITLE,
                message=error_message(error, SEARCH_ERROR_FALLBACK),
            ))
        else:
            self.state.clear_rows()
