"""
RDFリソース取得モジュール

コンテンツネゴシエーションでRDFリソースを取得し、グラフにデコードします。
キャッシュは持たず、呼び出しごとにネットワークから取得します。
"""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx
from rdflib import Graph

import config
from .errors import FetchError, FormatError
from .formats import FormatRegistry, GraphFormat, default_registry


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resource:
    """取得済みのRDFリソース"""
    identifier: str
    format: GraphFormat
    graph: Graph


class ResourceFetcher:
    """RDFリソースを取得するクライアント"""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        registry: FormatRegistry = default_registry,
        timeout: float = config.FETCH_TIMEOUT_SECONDS,
        max_redirects: int = config.MAX_REDIRECTS,
    ):
        """
        Args:
            client: 共有するHTTPクライアント。未指定の場合は新規に作成
            registry: 対応フォーマットのレジストリ
            timeout: リクエストタイムアウト（秒）
            max_redirects: リダイレクトの最大追跡回数
        """
        self.registry = registry
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            timeout=timeout,
            max_redirects=max_redirects,
            follow_redirects=True,
            headers={"User-Agent": config.USER_AGENT},
        )

    async def __aenter__(self) -> "ResourceFetcher":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """自身で作成したHTTPクライアントを閉じる"""
        if self._owns_client:
            await self.client.aclose()

    async def fetch(self, identifier: str) -> Resource:
        """
        リソースを取得してデコード

        Args:
            identifier: リソースのIRI

        Returns:
            Resource

        Raises:
            FetchError: 通信エラー、またはエラーステータス
            FormatError: 未対応のContent-Type、または不正な本文
        """
        try:
            response = await self.client.get(
                identifier,
                headers={"Accept": self.registry.accept_header()},
                follow_redirects=True,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"Fetch failed: {identifier} -> {e.response.status_code}")
            raise FetchError(
                identifier,
                f"HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except (httpx.RequestError, httpx.InvalidURL) as e:
            logger.error(f"Fetch request error: {identifier} - {e}")
            raise FetchError(identifier, str(e) or type(e).__name__) from e

        content_type = response.headers.get("content-type")
        fmt = self.registry.matches(content_type)
        if fmt is None:
            raise FormatError(
                identifier,
                f"no parser for content type {content_type!r}",
                media_type=content_type,
            )

        try:
            graph = fmt.decode(response.content, base=identifier)
        except Exception as e:
            raise FormatError(
                identifier,
                f"malformed {fmt.name} document: {e}",
                media_type=content_type,
            ) from e

        logger.info(f"Fetched {identifier} ({fmt.media_type}, {len(graph)} triples)")
        return Resource(identifier=identifier, format=fmt, graph=graph)
