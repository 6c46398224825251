"""
RDFフォーマットレジストリ

メディアタイプとrdflibパーサー/シリアライザーの対応を管理します。
登録順がAcceptヘッダーでの優先順になります。
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from rdflib import Dataset, Graph


@dataclass(frozen=True)
class GraphFormat:
    """RDFエンコーディングを表すデータクラス"""
    name: str  # rdflibのプラグイン名 (例: "turtle")
    media_types: Tuple[str, ...]  # 先頭が正式なメディアタイプ
    quads: bool = False  # 名前付きグラフを含むフォーマット
    writable: bool = True  # 単一グラフとしてシリアライズ可能か

    @property
    def media_type(self) -> str:
        return self.media_types[0]

    def decode(self, data: bytes, base: Optional[str] = None) -> Graph:
        """
        本文をデコードしてグラフを返す

        Args:
            data: レスポンス本文
            base: 相対IRI解決に使うベースIRI

        Returns:
            デコードされたグラフ（クアッドはデフォルトグラフに統合）
        """
        if not self.quads:
            graph = Graph()
            graph.parse(data=data, format=self.name, publicID=base)
            return graph

        dataset = Dataset()
        dataset.parse(data=data, format=self.name, publicID=base)
        graph = Graph()
        for s, p, o, _ in dataset.quads((None, None, None, None)):
            graph.add((s, p, o))
        return graph

    def encode(self, graph: Graph) -> str:
        """グラフをこのフォーマットでシリアライズ"""
        return graph.serialize(format=self.name)


def normalize_media_type(content_type: Optional[str]) -> Optional[str]:
    """Content-Typeからパラメータを除いたメディアタイプを取得"""
    if not content_type:
        return None
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type or None


class FormatRegistry:
    """メディアタイプ -> デコーダーのレジストリ"""

    def __init__(self, formats: Optional[List[GraphFormat]] = None):
        self._formats: List[GraphFormat] = []
        for fmt in formats or []:
            self.register(fmt)

    def register(self, fmt: GraphFormat) -> None:
        """フォーマットを末尾（最低優先度）に登録"""
        self._formats.append(fmt)

    def matches(self, media_type: Optional[str]) -> Optional[GraphFormat]:
        """
        メディアタイプに対応するフォーマットを検索

        Args:
            media_type: Content-Typeヘッダーの値（パラメータ付きでも可）

        Returns:
            対応するGraphFormat。未登録の場合はNone
        """
        normalized = normalize_media_type(media_type)
        if normalized is None:
            return None
        for fmt in self._formats:
            if normalized in fmt.media_types:
                return fmt
        return None

    def accept_header(self) -> str:
        """登録済みの全メディアタイプを優先順にカンマ区切りで返す"""
        return ", ".join(fmt.media_type for fmt in self._formats)

    def writable(self) -> List[GraphFormat]:
        return [fmt for fmt in self._formats if fmt.writable]

    def __iter__(self) -> Iterator[GraphFormat]:
        return iter(self._formats)

    def __len__(self) -> int:
        return len(self._formats)


TURTLE = GraphFormat("turtle", ("text/turtle", "application/x-turtle"))
RDF_XML = GraphFormat("xml", ("application/rdf+xml", "application/xml", "text/xml"))
JSON_LD = GraphFormat("json-ld", ("application/ld+json",))
N_TRIPLES = GraphFormat("nt", ("application/n-triples",))
N_QUADS = GraphFormat("nquads", ("application/n-quads", "text/x-nquads"), quads=True, writable=False)
TRIG = GraphFormat("trig", ("application/trig",), quads=True, writable=False)
N3 = GraphFormat("n3", ("text/n3", "text/rdf+n3"))
TRIX = GraphFormat("trix", ("application/trix",), quads=True, writable=False)

# 既定のレジストリ（Turtleを最優先）
default_registry = FormatRegistry([
    TURTLE,
    RDF_XML,
    JSON_LD,
    N_TRIPLES,
    N_QUADS,
    TRIG,
    N3,
    TRIX,
])
