"""query モジュールのユニットテスト."""

from pokedex.models import Item, QueryState, SortOrder
from pokedex.query import compute_view, filter_items, matches_category, matches_search, sort_items


def _item(item_id: int, name: str, *categories: str) -> Item:
    return Item(id=item_id, name=name, categories=categories, image_url=f"{name}.png")


STARTERS = [
    _item(7, "squirtle", "water"),
    _item(1, "bulbasaur", "grass", "poison"),
    _item(4, "charmander", "fire"),
]


def _names(items) -> list[str]:
    return [i.name for i in items]


class TestMatches:
    """検索・カテゴリ判定のテスト."""

    def test_search_case_insensitive(self):
        assert matches_search(_item(4, "charmander"), "CHAR")

    def test_search_empty_matches_all(self):
        assert all(matches_search(i, "") for i in STARTERS)

    def test_category_all(self):
        assert matches_category(_item(4, "charmander", "fire"), "all")

    def test_category_exact_case_sensitive(self):
        item = _item(4, "charmander", "fire")
        assert matches_category(item, "fire")
        assert not matches_category(item, "Fire")

    def test_filters_commute(self):
        """検索とカテゴリの適用順を入れ替えても結果が同じこと."""
        items = STARTERS + [_item(5, "charmeleon", "fire"), _item(8, "wartortle", "water")]
        state = QueryState(search_text="r", filter_category="fire")

        search_first = [i for i in items if matches_search(i, "r")]
        search_first = [i for i in search_first if matches_category(i, "fire")]
        category_first = [i for i in items if matches_category(i, "fire")]
        category_first = [i for i in category_first if matches_search(i, "r")]

        assert search_first == category_first == filter_items(items, state)


class TestSortItems:
    """sort_items のテスト."""

    def test_ascending(self):
        assert _names(sort_items(STARTERS, SortOrder.ASC)) == ["bulbasaur", "charmander", "squirtle"]

    def test_descending(self):
        assert _names(sort_items(STARTERS, SortOrder.DESC)) == ["squirtle", "charmander", "bulbasaur"]

    def test_stable_for_equal_names(self):
        items = [_item(1, "ditto"), _item(2, "abra"), _item(3, "ditto")]

        asc = sort_items(items, SortOrder.ASC)
        desc = sort_items(items, SortOrder.DESC)

        assert [i.id for i in asc] == [2, 1, 3]
        assert [i.id for i in desc] == [1, 3, 2]

    def test_case_insensitive(self):
        """大文字始まりの名前も大文字小文字を無視して並ぶこと."""
        items = [_item(1, "bulbasaur"), _item(63, "Abra"), _item(4, "charmander")]

        assert _names(sort_items(items, SortOrder.ASC)) == ["Abra", "bulbasaur", "charmander"]
        assert _names(sort_items(items, SortOrder.DESC)) == ["charmander", "bulbasaur", "Abra"]

    def test_case_only_difference_is_deterministic(self):
        """大文字小文字だけが違う名前は、入力順に関係なく同じ順序になること."""
        upper, lower = _item(1, "Ditto"), _item(2, "ditto")

        forward = sort_items([upper, lower], SortOrder.ASC)
        backward = sort_items([lower, upper], SortOrder.ASC)

        assert [i.id for i in forward] == [i.id for i in backward]

    def test_input_not_mutated(self):
        items = list(STARTERS)
        sort_items(items, SortOrder.ASC)
        assert items == STARTERS


class TestComputeView:
    """compute_view のテスト."""

    def test_default_view_sorted_ascending(self):
        view = compute_view(STARTERS, QueryState(), page_size=20)

        assert _names(view.page_items) == ["bulbasaur", "charmander", "squirtle"]
        assert view.has_previous is False
        assert view.has_next is False
        assert view.total == 3

    def test_search_char(self):
        view = compute_view(STARTERS, QueryState(search_text="char"), page_size=20)
        assert _names(view.page_items) == ["charmander"]

    def test_filter_fire(self):
        view = compute_view(STARTERS, QueryState(filter_category="fire"), page_size=20)
        assert _names(view.page_items) == ["charmander"]

    def test_no_match(self):
        view = compute_view(STARTERS, QueryState(search_text="xyz"), page_size=20)

        assert view.page_items == []
        assert view.has_next is False
        assert view.total == 0

    def test_pagination_first_page(self):
        items = [_item(i, f"pokemon{i:02d}", "normal") for i in range(1, 26)]

        view = compute_view(items, QueryState(page=1), page_size=20)

        assert len(view.page_items) == 20
        assert view.has_next is True
        assert view.has_previous is False

    def test_pagination_second_page(self):
        items = [_item(i, f"pokemon{i:02d}", "normal") for i in range(1, 26)]

        view = compute_view(items, QueryState(page=2), page_size=20)

        assert _names(view.page_items) == [f"pokemon{i}" for i in range(21, 26)]
        assert view.has_next is False
        assert view.has_previous is True

    def test_page_beyond_last(self):
        view = compute_view(STARTERS, QueryState(page=5), page_size=20)

        assert view.page_items == []
        assert view.has_next is False
        assert view.has_previous is True

    def test_zero_page_size(self):
        view = compute_view(STARTERS, QueryState(), page_size=0)

        assert view.page_items == []
        assert view.has_next is False

    def test_empty_items(self):
        view = compute_view([], QueryState(), page_size=20)

        assert view.page_items == []
        assert view.has_previous is False
        assert view.has_next is False

    def test_idempotent(self):
        state = QueryState(search_text="a", sort_order=SortOrder.DESC)
        assert compute_view(STARTERS, state, 2) == compute_view(STARTERS, state, 2)
