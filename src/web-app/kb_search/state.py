"""Observable search state shared by the search controller and the view tracker."""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from kb_search.models import Article, UIState

logger = logging.getLogger(__name__)

Observer = Callable[[UIState], None]


class SearchState:
    """Holds ``loading`` and ``rows`` and publishes a snapshot on every change.

    Rows are always replaced by a new tuple, never edited in place.
    """

    def __init__(self) -> None:
        self._snapshot = UIState()
        self._observers: list[Observer] = []

    @property
    def snapshot(self) -> UIState:
        return self._snapshot

    @property
    def loading(self) -> bool:
        return self._snapshot.loading

    @property
    def rows(self) -> tuple[Article, ...]:
        return self._snapshot.rows

    @property
    def show_no_results(self) -> bool:
        return self._snapshot.show_no_results

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register *observer*; returns a callable that unsubscribes it."""
        self._observers.append(observer)

        def _unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return _unsubscribe

    def set_loading(self, loading: bool) -> None:
        self._publish(UIState(loading=loading, rows=self._snapshot.rows))

    def replace_rows(self, rows: Iterable[Article], loading: bool | None = None) -> None:
        self._publish(UIState(
            loading=self._snapshot.loading if loading is None else loading,
            rows=tuple(rows),
        ))

    def clear_rows(self, loading: bool | None = None) -> None:
        self.replace_rows((), loading=loading)

    def patch_view_count(self, article_id: str, view_count: int) -> bool:
        """Replace one row's ``view_count``; returns False if no row has *article_id*."""
        rows = self._snapshot.rows
        for idx, row in enumerate(rows):
            if row.id == article_id:
                updated = Article(id=row.id, display_name=row.display_name, view_count=view_count)
                self.replace_rows(rows[:idx] + (updated,) + rows[idx + 1:])
                return True
        return False

    def _publish(self, snapshot: UIState) -> None:
        self._snapshot = snapshot
        for observer in list(self._observers):
            try:
                observer(snapshot)
            except Exception:
                logger.error("State observer %r failed", observer, exc_info=True)
