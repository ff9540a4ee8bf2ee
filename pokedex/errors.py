"""例外定義.

IndexFetchError / AllItemsFailedError は retrieve() の呼び出し元へ伝播する。
ItemFetchError は各アイテムの取得処理内で FetchFailure に変換され、外には出ない。
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pokedex.models import RetrievalResult


class PokedexError(Exception):
    """基底例外."""


class IndexFetchError(PokedexError):
    """一覧 (index) の取得失敗. status は通信失敗・パース失敗時 None."""

    def __init__(self, status: int | None, detail: str = ""):
        self.status = status
        self.detail = detail
        message = "Failed to fetch Pokemon list"
        if status is not None:
            message += f" (status {status})"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class ItemFetchError(PokedexError):
    """個別アイテムの取得・パース失敗."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Failed to fetch {name}: {reason}")


class AllItemsFailedError(PokedexError):
    """一覧は取得できたが、全アイテムの取得に失敗した."""

    def __init__(self, result: RetrievalResult):
        self.result = result
        super().__init__(
            f"Failed to load all {len(result.failures)} Pokemon"
        )
