"""データモデル定義."""

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class ItemReference:
    """一覧 API が返す1件分の参照."""

    name: str
    url: str  # 詳細取得先


@dataclass(frozen=True)
class Item:
    """詳細取得済みの1件 (ポケモン)."""

    id: int
    name: str
    categories: tuple[str, ...]  # types[*].type.name
    image_url: str  # sprites.front_default


@dataclass(frozen=True)
class FetchSuccess:
    item: Item


@dataclass(frozen=True)
class FetchFailure:
    name: str
    reason: str  # 短い診断文字列 (例: "HTTP 404")


FetchOutcome = FetchSuccess | FetchFailure


@dataclass
class RetrievalResult:
    """一括取得の結果.

    items は参照順、failures は完了 (settle) 順。
    """

    items: list[Item] = field(default_factory=list)
    failures: list[FetchFailure] = field(default_factory=list)

    @property
    def failed_names(self) -> list[str]:
        return [f.name for f in self.failures]


ALL_CATEGORIES = "all"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class QueryState:
    """検索・絞り込み・並び替え・ページの状態."""

    search_text: str = ""
    sort_order: SortOrder = SortOrder.ASC
    filter_category: str = ALL_CATEGORIES  # "all" or カテゴリ名
    page: int = 1  # 1始まり


@dataclass(frozen=True)
class ViewResult:
    """表示用の1ページ分."""

    page_items: list[Item]
    has_previous: bool
    has_next: bool
    total: int  # 絞り込み後の件数


@dataclass(frozen=True)
class FailureSummary:
    """部分失敗の表示用サマリ."""

    count: int
    names: list[str]
