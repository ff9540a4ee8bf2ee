"""検索・絞り込み・並び替え・ページ分割.

処理順序 (固定):
  1. 名前の部分一致検索
  2. カテゴリ (タイプ) 絞り込み
  3. 名前で安定ソート
  4. ページ切り出し

いずれも入力を変更しない純粋関数。
"""

from __future__ import annotations

import locale
from collections.abc import Iterable

from pokedex.models import ALL_CATEGORIES, Item, QueryState, SortOrder, ViewResult


def matches_search(item: Item, search_text: str) -> bool:
    """名前に検索文字列が含まれるか (大文字小文字を区別しない). 空文字は全件一致."""
    return search_text.casefold() in item.name.casefold()


def matches_category(item: Item, category: str) -> bool:
    """カテゴリ一致判定. "all" は全件一致、それ以外は完全一致 (大文字小文字を区別)."""
    return category == ALL_CATEGORIES or category in item.categories


def _name_key(item: Item) -> tuple[str, str]:
    return locale.strxfrm(item.name.casefold()), locale.strxfrm(item.name)


def sort_items(items: Iterable[Item], order: SortOrder) -> list[Item]:
    """名前でロケール考慮の安定ソート. 同名は入力順を保つ (降順でも)."""
    return sorted(items, key=_name_key, reverse=order == SortOrder.DESC)


def filter_items(items: Iterable[Item], state: QueryState) -> list[Item]:
    return [
        item for item in items
        if matches_search(item, state.search_text)
        and matches_category(item, state.filter_category)
    ]


def compute_view(items: Iterable[Item], state: QueryState, page_size: int) -> ViewResult:
    """items と state から表示する1ページを計算する.

    範囲外のページは例外にせず空ページを返す。
    """
    ordered = sort_items(filter_items(items, state), state.sort_order)
    total = len(ordered)
    has_previous = state.page > 1

    if page_size <= 0:
        return ViewResult(page_items=[], has_previous=has_previous, has_next=False, total=total)

    offset = (max(state.page, 1) - 1) * page_size
    return ViewResult(
        page_items=ordered[offset:offset + page_size],
        has_previous=has_previous,
        has_next=offset + page_size < total,
        total=total,
    )
