"""画面 (UI) との境界となるセッション状態.

UI からの操作 (検索文字列・並び順・タイプ絞り込み・ページ移動) を受け取り、
表示用の出力 (ローディング・エラー・部分失敗サマリ・1ページ分) を返す。
表示内容は読み出しのたびに計算し直し、キャッシュしない。
"""

from __future__ import annotations

import logging
from dataclasses import replace

from pokedex.config import (
    CATEGORY_OPTIONS,
    INDEX_LIMIT,
    MAX_WORKERS,
    PAGE_SIZE,
    POKEAPI_LIST_URL,
)
from pokedex.errors import AllItemsFailedError, IndexFetchError
from pokedex.fetcher import retrieve
from pokedex.models import (
    ALL_CATEGORIES,
    FailureSummary,
    Item,
    QueryState,
    RetrievalResult,
    SortOrder,
    ViewResult,
)
from pokedex.query import compute_view

logger = logging.getLogger(__name__)


def display_name(item: Item) -> str:
    """カード見出し用の名前 (先頭を大文字に)."""
    return item.name.capitalize()


class PokedexSession:
    """1セッション分の状態. 書き込みはこのオブジェクトのみが行う."""

    def __init__(
        self,
        index_url: str = POKEAPI_LIST_URL,
        limit: int = INDEX_LIMIT,
        page_size: int = PAGE_SIZE,
        max_workers: int | None = MAX_WORKERS,
    ) -> None:
        self.index_url = index_url
        self.limit = limit
        self.page_size = page_size
        self.max_workers = max_workers

        self.query = QueryState()
        self.result: RetrievalResult | None = None
        self.loading = False
        self.index_error: str | None = None

    # --- 取得 ---

    def load(self) -> None:
        """一括取得を1回実行する. 取得中の再呼び出しは無視する."""
        if self.loading:
            logger.warning("取得中のため load() を無視")
            return

        self.loading = True
        try:
            result = retrieve(self.index_url, self.limit, max_workers=self.max_workers)
            self.result = result
            self.index_error = None
        except IndexFetchError as e:
            self.result = None
            self.index_error = str(e)
        except AllItemsFailedError as e:
            self.result = e.result
            self.index_error = str(e)
        finally:
            self.loading = False

    # --- UI からの操作 ---

    def set_search_text(self, text: str) -> None:
        self.query = replace(self.query, search_text=text or "", page=1)

    def set_sort_order(self, order: str | SortOrder) -> None:
        """並び順を変更する ("asc" / "desc"). ページは1に戻す."""
        self.query = replace(self.query, sort_order=SortOrder(order), page=1)

    def set_filter_category(self, category: str) -> None:
        """タイプ絞り込みを変更する. ページは1に戻す.

        Raises:
            ValueError: "all" でも既定のタイプでもない場合。
        """
        if category != ALL_CATEGORIES and category not in CATEGORY_OPTIONS:
            raise ValueError(f"Unknown category: {category}")
        self.query = replace(self.query, filter_category=category, page=1)

    def go_to_page(self, page: int) -> None:
        self.query = replace(self.query, page=max(1, page))

    def next_page(self) -> None:
        self.go_to_page(self.query.page + 1)

    def previous_page(self) -> None:
        self.go_to_page(self.query.page - 1)

    # --- UI への出力 ---

    @property
    def items(self) -> list[Item]:
        if self.result is None or self.index_error:
            return []
        return self.result.items

    @property
    def view(self) -> ViewResult:
        return compute_view(self.items, self.query, self.page_size)

    @property
    def partial_failure_summary(self) -> FailureSummary | None:
        """一部失敗時のみサマリを返す. 全件失敗・一覧失敗時は None (エラー表示側で扱う)."""
        if self.result is None or self.index_error or not self.result.failures:
            return None
        names = self.result.failed_names
        return FailureSummary(count=len(names), names=names)

    @property
    def error_message(self) -> str | None:
        if not self.index_error:
            return None
        return f"Error loading Pokemon: {self.index_error}"

    @property
    def failure_message(self) -> str | None:
        summary = self.partial_failure_summary
        if summary is None:
            return None
        return f"Failed to load {summary.count} Pokemon: {', '.join(summary.names)}"

    @property
    def page_label(self) -> str:
        return f"Page {self.query.page}"

    @property
    def empty_message(self) -> str | None:
        if self.loading or self.index_error or self.view.page_items:
            return None
        return "No Pokemon found"

    @property
    def result_summary(self) -> str:
        base = f"{self.view.total} Pokemon found"
        if self.query.search_text.strip():
            return f'{base} for "{self.query.search_text.strip()}"'
        return base
