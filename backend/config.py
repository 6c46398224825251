"""
バックエンド設定モジュール

環境変数やデフォルト設定を管理します。
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# プロジェクトルート
PROJECT_ROOT = Path(__file__).parent.parent

load_dotenv(PROJECT_ROOT / ".env")

# API設定
API_PREFIX = "/api"
API_VERSION = "0.1.0"

# 検証1件あたりの上限時間（秒）。0以下で無制限
VALIDATION_TIMEOUT_SECONDS = float(os.getenv("VALIDATION_TIMEOUT_SECONDS", "0"))

# CORS設定
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS",
        "http://localhost:3000,http://localhost:8000,http://127.0.0.1:3000,http://127.0.0.1:8000",
    ).split(",")
    if origin.strip()
]
