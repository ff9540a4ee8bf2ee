"""PokeAPI からの一括取得モジュール.

取得戦略:
  1. 一覧 (index) を1回取得。失敗したらそこで終了 (IndexFetchError)
  2. 各参照の詳細を全件同時に取得し、成功・失敗を個別に記録
  3. 全件の完了を待ってから items / failures に振り分ける
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed

import requests

from pokedex.config import MAX_WORKERS, REQUEST_TIMEOUT, USER_AGENT
from pokedex.errors import AllItemsFailedError, IndexFetchError, ItemFetchError
from pokedex.models import (
    FetchFailure,
    FetchOutcome,
    FetchSuccess,
    Item,
    ItemReference,
    RetrievalResult,
)

logger = logging.getLogger(__name__)

_HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept": "application/json",
}


def fetch_index(index_url: str, limit: int) -> list[ItemReference]:
    """一覧を取得して参照リストを返す.

    Raises:
        IndexFetchError: 通信失敗、非 2xx、またはパース失敗時。
    """
    try:
        resp = requests.get(
            index_url,
            params={"limit": limit},
            headers=_HEADERS,
            timeout=REQUEST_TIMEOUT,
        )
    except requests.RequestException as e:
        logger.error("一覧取得失敗: url=%s, error=%s", index_url, e)
        raise IndexFetchError(None, str(e)) from e

    if not resp.ok:
        logger.error("一覧取得失敗: url=%s, status=%s", index_url, resp.status_code)
        raise IndexFetchError(resp.status_code)

    try:
        data = resp.json()
    except ValueError as e:
        raise IndexFetchError(None, "invalid JSON") from e

    return parse_index(data, limit)


def parse_index(data: dict, limit: int) -> list[ItemReference]:
    """一覧 JSON ({"results": [{name, url}, ...]}) を参照リストに変換する."""
    results = data.get("results") if isinstance(data, dict) else None
    if not isinstance(results, list):
        raise IndexFetchError(None, "missing results")

    refs: list[ItemReference] = []
    for entry in results[:limit]:
        try:
            name = _lookup(entry, "name")
            url = _lookup(entry, "url")
        except ValueError:
            name = url = None
        if not name or not url:
            logger.warning("不正な参照をスキップ: %s", entry)
            continue
        refs.append(ItemReference(name=name, url=url))
    return refs


def parse_item(data: dict, name: str) -> Item:
    """詳細 JSON を Item に変換する.

    Raises:
        ItemFetchError: id / name の欠落、または types / sprites の型が不正な場合。
    """
    if not isinstance(data, dict):
        raise ItemFetchError(name, "invalid payload: not an object")

    item_id = data.get("id")
    item_name = data.get("name")
    if not isinstance(item_id, int) or not isinstance(item_name, str):
        raise ItemFetchError(name, "invalid payload: missing id or name")

    types = data.get("types")
    if types is None:
        types = []
    if not isinstance(types, list):
        raise ItemFetchError(name, "invalid payload: types")

    categories: list[str] = []
    try:
        for entry in types:
            type_name = _lookup(entry, "type", "name")
            if not type_name:
                raise ValueError("type.name is missing")
            categories.append(type_name)
    except ValueError as e:
        raise ItemFetchError(name, "invalid payload: types") from e

    try:
        image_url = _lookup(data, "sprites", "front_default") or ""
    except ValueError as e:
        raise ItemFetchError(name, "invalid payload: sprites") from e

    return Item(
        id=item_id,
        name=item_name,
        categories=tuple(categories),
        image_url=image_url,
    )


def _fetch_item_body(ref: ItemReference) -> Item:
    try:
        resp = requests.get(ref.url, headers=_HEADERS, timeout=REQUEST_TIMEOUT)
    except requests.RequestException as e:
        raise ItemFetchError(ref.name, str(e)) from e

    if not resp.ok:
        raise ItemFetchError(ref.name, f"HTTP {resp.status_code}")

    try:
        data = resp.json()
    except ValueError as e:
        raise ItemFetchError(ref.name, "invalid payload: not JSON") from e

    return parse_item(data, ref.name)


def fetch_item(ref: ItemReference) -> FetchOutcome:
    """1件の詳細を取得する. 失敗しても例外は投げず FetchFailure を返す."""
    try:
        return FetchSuccess(_fetch_item_body(ref))
    except ItemFetchError as e:
        logger.warning("詳細取得失敗: name=%s, reason=%s", e.name, e.reason)
        return FetchFailure(name=e.name, reason=e.reason)


def fetch_all_items(
    refs: list[ItemReference], max_workers: int | None = None
) -> list[tuple[int, FetchOutcome]]:
    """全参照の詳細を同時に取得し、全件の完了を待つ.

    Returns:
        (参照の位置, 結果) のリスト。完了順。
        1件の失敗で他の取得を中断することはない。
    """
    if not refs:
        return []

    workers = max_workers if max_workers is not None else len(refs)
    outcomes: list[tuple[int, FetchOutcome]] = []
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="pokedex-fetch") as pool:
        futures = {pool.submit(fetch_item, ref): i for i, ref in enumerate(refs)}
        for future in as_completed(futures):
            outcomes.append((futures[future], future.result()))
    return outcomes


def partition(outcomes: list[tuple[int, FetchOutcome]]) -> RetrievalResult:
    """結果を items / failures に振り分ける.

    items は参照順に並べ直す。failures は完了順のまま。
    """
    successes: list[tuple[int, Item]] = []
    failures: list[FetchFailure] = []
    for position, outcome in outcomes:
        if isinstance(outcome, FetchSuccess):
            successes.append((position, outcome.item))
        else:
            failures.append(outcome)

    successes.sort(key=lambda pair: pair[0])
    items = [item for _, item in successes]

    seen_ids: set[int] = set()
    for item in items:
        if item.id in seen_ids:
            logger.warning("重複 id を検出: id=%d, name=%s", item.id, item.name)
        seen_ids.add(item.id)

    return RetrievalResult(items=items, failures=failures)


def retrieve(index_url: str, limit: int, max_workers: int | None = MAX_WORKERS) -> RetrievalResult:
    """一覧取得 → 全件の詳細取得 → 振り分け.

    Raises:
        IndexFetchError: 一覧の取得に失敗した場合 (詳細取得は一切行わない)。
        AllItemsFailedError: 参照が1件以上あり、全件の詳細取得に失敗した場合。
    """
    start_time = time.time()
    logger.info("一覧取得: url=%s, limit=%d", index_url, limit)
    refs = fetch_index(index_url, limit)
    logger.info("参照 %d 件を取得", len(refs))

    outcomes = fetch_all_items(refs, max_workers=max_workers)
    result = partition(outcomes)

    elapsed = time.time() - start_time
    logger.info(
        "詳細取得完了: 成功=%d 件, 失敗=%d 件, 所要時間=%.1f 秒",
        len(result.items), len(result.failures), elapsed,
    )

    if refs and not result.items:
        logger.error("全 %d 件の詳細取得に失敗", len(refs))
        raise AllItemsFailedError(result)
    return result


def _lookup(d: dict, *keys: str) -> str | None:
    """ネストされた dict から文字列値を取得する.

    途中のキーが無い・値が null なら None。値はあるが文字列でなければ ValueError。
    """
    value = d
    for key in keys:
        if not isinstance(value, dict):
            if value is None:
                return None
            raise ValueError(f"{key}: expected object, got {type(value).__name__}")
        value = value.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"{keys[-1]}: expected str, got {type(value).__name__}")
    return value
