"""設定モジュール — 環境変数・定数定義.

import 時にファイルやディレクトリを作成しない (ログディレクトリは main.setup_logging で作成)。
"""

import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

# .env は作業ディレクトリ (またはその親) に配置
load_dotenv(find_dotenv(usecwd=True))


def _positive_int_or_none(env_name: str) -> int | None:
    """未設定・空なら None、それ以外は 1 以上の整数であること."""
    raw = os.getenv(env_name)
    if not raw:
        return None
    value = int(raw)
    if value < 1:
        raise ValueError(f"{env_name} must be a positive integer, got {raw!r}")
    return value


# --- PokeAPI ---
POKEAPI_LIST_URL: str = os.getenv("POKEDEX_LIST_URL", "https://pokeapi.co/api/v2/pokemon")
INDEX_LIMIT = int(os.getenv("POKEDEX_INDEX_LIMIT", "100"))

# --- 表示 ---
PAGE_SIZE = int(os.getenv("POKEDEX_PAGE_SIZE", "20"))
CATEGORY_OPTIONS = ["fire", "water", "grass", "electric"]

# --- User-Agent ---
USER_AGENT = "pokedex/0.1 (+https://pokeapi.co)"

# --- リクエスト設定 ---
REQUEST_TIMEOUT = 15  # 秒
# 未設定なら参照数ぶん全件同時に取得する
MAX_WORKERS: int | None = _positive_int_or_none("POKEDEX_MAX_WORKERS")

# --- ログ ---
LOG_DIR = Path(os.getenv("POKEDEX_LOG_DIR", "logs"))
