"""
SHACL検証コンテキスト

1回の検証リクエスト専用のコンテナです。シェイプとデータをそれぞれトランザクションとして
ロードし、データのロード時にpySHACLで評価します。使用後は必ずclose()されます。
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator, Optional

from pyshacl import validate
from rdflib import Graph, Namespace
from rdflib.namespace import RDF, RDFS, OWL, SH

import config
from .errors import EngineError
from .report import Report


logger = logging.getLogger(__name__)

# SHACL-AFの語彙を含めて参照するための名前空間
SHACL = Namespace(str(SH))

# シェイプにターゲットを与える述語
TARGET_PREDICATES = (
    SHACL.targetClass,
    SHACL.targetNode,
    SHACL.targetSubjectsOf,
    SHACL.targetObjectsOf,
    SHACL.target,
)

# 他のシェイプから参照される（単独ではターゲットを持たない）シェイプの述語
SHAPE_REFERENCES = (
    SHACL.node,
    SHACL.property,
    SHACL["not"],
    SHACL.qualifiedValueShape,
)


class ContextState(str, Enum):
    """検証コンテキストの状態"""
    INIT = "init"
    ARTIFACT_LOADED = "artifact_loaded"
    CONFORMANT = "conformant"
    NON_CONFORMANT = "non_conformant"
    CLOSED = "closed"


class Outcome(str, Enum):
    """データロードの結果"""
    CONFORMANT = "conformant"
    NON_CONFORMANT = "non_conformant"


@dataclass(frozen=True)
class LoadResult:
    """データロードの結果とレポート"""
    outcome: Outcome
    report: Report

    @property
    def conforms(self) -> bool:
        return self.outcome is Outcome.CONFORMANT


def expand_untargeted_shapes(shapes: Graph, data: Graph) -> Graph:
    """
    ターゲット未定義のトップレベルのシェイプを、データグラフの全主語に適用したシェイプグラフを返す

    sh:NodeShape・sh:PropertyShapeの型宣言を持つもの、またはsh:property・sh:pathの主語を
    シェイプとみなします。他のシェイプから参照されるシェイプと、暗黙のクラスターゲットを
    持つシェイプは対象外です。
    元のシェイプグラフは変更しません。
    """
    referenced = set()
    for predicate in SHAPE_REFERENCES:
        referenced.update(shapes.objects(None, predicate))
    # sh:and / sh:or / sh:xone のリスト要素
    referenced.update(shapes.objects(None, RDF.first))

    candidates = set(shapes.subjects(RDF.type, SH.NodeShape))
    candidates.update(shapes.subjects(RDF.type, SH.PropertyShape))
    candidates.update(shapes.subjects(SHACL.property, None))
    candidates.update(shapes.subjects(SHACL.path, None))

    untargeted = []
    for shape in candidates:
        if shape in referenced:
            continue
        if any((shape, predicate, None) in shapes for predicate in TARGET_PREDICATES):
            continue
        if (shape, RDF.type, RDFS.Class) in shapes or (shape, RDF.type, OWL.Class) in shapes:
            continue
        untargeted.append(shape)

    expanded = Graph()
    expanded += shapes
    if not untargeted:
        return expanded

    subjects = set(data.subjects())
    for shape in untargeted:
        for subject in subjects:
            expanded.add((shape, SH.targetNode, subject))

    logger.debug(f"Applied {len(untargeted)} untargeted shapes to {len(subjects)} subjects")
    return expanded


class ValidationContext:
    """1回の検証で使い捨てる検証コンテキスト"""

    def __init__(
        self,
        engine: Callable = validate,
        inference: str = config.SHACL_INFERENCE,
        untargeted_validates_all: bool = config.UNTARGETED_SHAPES_VALIDATE_ALL,
    ):
        """
        Args:
            engine: SHACL評価関数（pyshacl.validate互換）
            inference: 推論モード ("none", "rdfs", "owlrl", "both")
            untargeted_validates_all: ターゲット未定義のシェイプを全主語に適用する
        """
        self.engine = engine
        self.inference = inference
        self.untargeted_validates_all = untargeted_validates_all
        self.shapes_graph: Optional[Graph] = Graph()
        self.data_graph: Optional[Graph] = Graph()
        self.state = ContextState.INIT

    def __enter__(self) -> "ValidationContext":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self.state is ContextState.CLOSED

    @contextmanager
    def _transaction(self, target: Graph) -> Iterator[Graph]:
        # ステージンググラフに書き込み、例外がなければtargetへコミット
        if self.closed:
            raise EngineError("Validation context is closed")
        staged = Graph()
        yield staged
        if self.closed:
            # 評価中にclose()された場合はコミットしない
            raise EngineError("Validation context was closed during the transaction")
        target += staged

    def _advance(self, state: ContextState) -> None:
        # CLOSEDは終端状態
        if self.closed:
            raise EngineError("Validation context is closed")
        self.state = state

    def load_shapes(self, shapes: Graph) -> None:
        """
        シェイプグラフをロード

        Raises:
            EngineError: ロード中の予期しない失敗
        """
        try:
            with self._transaction(self.shapes_graph) as staged:
                staged += shapes
        except EngineError:
            raise
        except Exception as e:
            raise EngineError(f"Failed to load shapes: {e}") from e

        self._advance(ContextState.ARTIFACT_LOADED)
        logger.debug(f"Loaded {len(shapes)} shape triples")

    def load_data(self, data: Graph) -> LoadResult:
        """
        データグラフをロードし、ロード済みのシェイプで評価

        適合しない場合はデータをコミットせず、NON_CONFORMANTの結果を返します。

        Raises:
            EngineError: 評価中の予期しない失敗（適合性判定とは無関係）
        """
        try:
            with self._transaction(self.data_graph) as staged:
                staged += data
                result = self._evaluate(staged)
                if not result.conforms:
                    # ロールバック
                    staged.remove((None, None, None))
        except EngineError:
            raise
        except Exception as e:
            raise EngineError(f"Failed to load data: {e}") from e

        self._advance(ContextState.CONFORMANT if result.conforms else ContextState.NON_CONFORMANT)
        return result

    def _evaluate(self, data: Graph) -> LoadResult:
        shapes = self.shapes_graph
        if shapes is None:
            raise EngineError("Validation context is closed")
        if self.untargeted_validates_all:
            shapes = expand_untargeted_shapes(shapes, data)

        conforms, results_graph, _ = self.engine(
            data,
            shacl_graph=shapes,
            inference=self.inference,
            abort_on_first=False,
            allow_warnings=False,
            meta_shacl=False,
            advanced=True,
            debug=False,
        )

        if conforms:
            return LoadResult(Outcome.CONFORMANT, Report.conformant())
        return LoadResult(Outcome.NON_CONFORMANT, Report.from_graph(results_graph, conforms=False))

    def close(self) -> None:
        """保持しているグラフを解放（何度呼んでもよい）"""
        if self.closed:
            return
        self.shapes_graph = None
        self.data_graph = None
        self.state = ContextState.CLOSED
