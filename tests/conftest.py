"""テスト共通のフィクスチャ. requests.get を URL ごとの応答に差し替える."""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import requests

FIXTURES_DIR = Path(__file__).parent / "fixtures"

INDEX_URL = "https://pokeapi.co/api/v2/pokemon"


def load_fixture(name: str) -> dict:
    return json.loads((FIXTURES_DIR / name).read_text(encoding="utf-8"))


def make_response(data=None, status_code: int = 200) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 300
    resp.json.return_value = data
    return resp


class FakeApi:
    """URL → 応答 (または例外) の対応表で requests.get を置き換える."""

    def __init__(self) -> None:
        self.routes: dict[str, object] = {}
        self.calls: list[str] = []

    def route(self, url: str, outcome) -> None:
        self.routes[url] = outcome

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append(url)
        outcome = self.routes.get(url)
        if outcome is None:
            return make_response(status_code=404)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def fake_api():
    api = FakeApi()
    with patch("pokedex.fetcher.requests.get", side_effect=api.get):
        yield api


@pytest.fixture
def starter_api(fake_api):
    """bulbasaur / charmander / squirtle の3件が全て取得できる状態."""
    index = load_fixture("index.json")
    fake_api.route(INDEX_URL, make_response(index))
    for ref in index["results"]:
        fake_api.route(ref["url"], make_response(load_fixture(f"{ref['name']}.json")))
    return fake_api


def connection_error(message: str = "connection refused") -> requests.ConnectionError:
    return requests.ConnectionError(message)
