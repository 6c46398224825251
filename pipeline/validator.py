"""
SHACL検証パイプライン

リソース取得 -> プロファイル解決 -> アーティファクト取得 -> 検証コンテキストでの評価
の順に処理し、適合性レポートを返します。
"""

import asyncio
import logging
from typing import Callable, Iterable, List, Optional, Union

from .context import ContextState, ValidationContext
from .errors import EngineError, ValidatorError
from .fetcher import ResourceFetcher
from .report import Report
from .resolver import ProfileResolver


logger = logging.getLogger(__name__)


class ValidationPipeline:
    """リソースが宣言するプロファイルのSHACLシェイプで検証を行うクラス"""

    def __init__(
        self,
        fetcher: ResourceFetcher,
        resolver: Optional[ProfileResolver] = None,
        context_factory: Callable[[], ValidationContext] = ValidationContext,
    ):
        """
        Args:
            fetcher: リソース取得クライアント（並行リクエスト間で共有可能）
            resolver: プロファイル解決器。未指定の場合はfetcherから作成
            context_factory: リクエストごとに新しい検証コンテキストを作る関数
        """
        self.fetcher = fetcher
        self.resolver = resolver or ProfileResolver(fetcher)
        self.context_factory = context_factory

    async def validate(self, identifier: str) -> Report:
        """
        リソースを検証

        Args:
            identifier: 検証対象リソースのIRI

        Returns:
            Report（不適合の場合もconforms=Falseとして返す）

        Raises:
            FetchError, FormatError: リソース・プロファイル・アーティファクトの取得失敗
            ProfileMissingError, ArtifactMissingError: プロファイル解決の失敗
            EngineError: 検証コンテキストでの予期しない失敗
        """
        resource = await self.fetcher.fetch(identifier)
        artifact_iri = await self.resolver.resolve_artifact(resource)
        artifact = await self.fetcher.fetch(str(artifact_iri))

        with self.context_factory() as context:
            try:
                await asyncio.to_thread(context.load_shapes, artifact.graph)
                self._log_state(identifier, context.state)

                result = await asyncio.to_thread(context.load_data, resource.graph)
                self._log_state(identifier, context.state)
            except EngineError:
                logger.error(f"Validation engine failed for {identifier}", exc_info=True)
                raise

        self._log_state(identifier, context.state)
        logger.info(
            f"Validated {identifier} against {artifact_iri}: "
            f"conforms={result.report.conforms}, results={len(result.report.violations)}"
        )
        return result.report

    async def validate_many(self, identifiers: Iterable[str]) -> List[Union[Report, ValidatorError]]:
        """
        複数のリソースを並行に検証

        各リソースは独立したコンテキストで検証され、失敗は例外オブジェクトとして結果に含まれます。
        """
        results = await asyncio.gather(
            *(self.validate(identifier) for identifier in identifiers),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException) and not isinstance(result, ValidatorError):
                raise result
        return list(results)

    @staticmethod
    def _log_state(identifier: str, state: ContextState) -> None:
        logger.debug(f"Validation of {identifier}: {state.value}")
