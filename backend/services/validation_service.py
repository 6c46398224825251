"""
検証サービス

アプリケーション全体で共有するHTTPクライアントと検証パイプラインを管理します。
"""

import asyncio
import logging
from typing import Optional

from backend.config import VALIDATION_TIMEOUT_SECONDS
from pipeline import Report, ResourceFetcher, ValidationPipeline


logger = logging.getLogger(__name__)


class ValidationService:
    """共有パイプラインのライフサイクルを管理するクラス"""

    def __init__(self, timeout: float = VALIDATION_TIMEOUT_SECONDS):
        self.timeout = timeout
        self.fetcher: Optional[ResourceFetcher] = None
        self.pipeline: Optional[ValidationPipeline] = None

    async def startup(self) -> None:
        """HTTPクライアントとパイプラインを作成"""
        if self.pipeline is not None:
            return
        self.fetcher = ResourceFetcher()
        self.pipeline = ValidationPipeline(self.fetcher)
        logger.info("Validation service started")

    async def shutdown(self) -> None:
        """HTTPクライアントを閉じる"""
        if self.fetcher is not None:
            await self.fetcher.aclose()
        self.fetcher = None
        self.pipeline = None
        logger.info("Validation service stopped")

    async def validate(self, pipeline: ValidationPipeline, identifier: str) -> Report:
        """
        タイムアウト付きで検証を実行

        Raises:
            asyncio.TimeoutError: 設定された上限時間を超えた
        """
        if self.timeout > 0:
            return await asyncio.wait_for(pipeline.validate(identifier), timeout=self.timeout)
        return await pipeline.validate(identifier)


# シングルトンインスタンス
validation_service = ValidationService()


def get_pipeline() -> ValidationPipeline:
    """FastAPI依存関数: 共有パイプラインを返す"""
    if validation_service.pipeline is None:
        raise RuntimeError("Validation service is not started")
    return validation_service.pipeline
