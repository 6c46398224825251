"""
プロファイル検証パイプラインの設定ファイル

リソース取得のタイムアウト、リダイレクト上限、SHACL検証オプション、ログ設定などを管理します。
環境変数（.envを含む）で上書きできます。
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# .envファイルを読み込み
load_dotenv(Path(__file__).parent / ".env")


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# リソース取得のタイムアウト（秒）
FETCH_TIMEOUT_SECONDS = float(os.getenv("FETCH_TIMEOUT_SECONDS", "5.0"))

# リダイレクトの最大追跡回数
MAX_REDIRECTS = int(os.getenv("MAX_REDIRECTS", "20"))

# リクエストに付与するUser-Agent
USER_AGENT = os.getenv("USER_AGENT", "profile-validator/0.1.0")

# SHACL推論モード ("none", "rdfs", "owlrl", "both")
SHACL_INFERENCE = os.getenv("SHACL_INFERENCE", "none")

# ターゲット未定義のシェイプをデータグラフの全主語に適用する
UNTARGETED_SHAPES_VALIDATE_ALL = _env_bool("UNTARGETED_SHAPES_VALIDATE_ALL", True)

# ログ設定
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = "[%(asctime)s] %(levelname)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
