"""ポケモン一覧取得 — メインエントリーポイント.

処理フロー:
  1. 一覧 API から参照を取得
  2. 各ポケモンの詳細を全件同時に取得 (一部失敗は許容)
  3. 既定の条件 (検索なし・全タイプ・昇順) で1ページ目を計算
  4. 結果・部分失敗サマリをログに出力
"""

from __future__ import annotations

import locale
import logging
import sys
from datetime import datetime
from pathlib import Path

from pokedex.config import LOG_DIR
from pokedex.session import PokedexSession, display_name


def setup_logging(log_dir: Path | None = None) -> None:
    """ロギングの初期設定. 標準出力と日次ログファイル (log_dir 配下、無ければ作成) に出力する."""
    log_dir = log_dir or LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"pokedex_{datetime.now():%Y%m%d}.log"
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(log_file, encoding="utf-8"),
        ],
    )


def run() -> int:
    """メイン処理. 終了コードを返す."""
    setup_logging()
    logger = logging.getLogger(__name__)
    try:
        # 名前の並び替えを環境のロケールに合わせる
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error:
        logger.warning("ロケール設定に失敗。既定の照合順序を使用します")

    logger.info("=== ポケモン一覧取得 開始 ===")
    session = PokedexSession()
    session.load()

    if session.error_message:
        logger.error(session.error_message)
        return 1

    if session.failure_message:
        logger.warning(session.failure_message)

    view = session.view
    logger.info(session.result_summary)
    for item in view.page_items:
        logger.info("  #%d %s [%s]", item.id, display_name(item), ", ".join(item.categories))
    logger.info("%s (次ページ: %s)", session.page_label, "あり" if view.has_next else "なし")
    logger.info("=== ポケモン一覧取得 完了 ===")
    return 0


if __name__ == "__main__":
    sys.exit(run())
