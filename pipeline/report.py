"""
SHACL検証レポート

pySHACLの結果グラフ（sh:ValidationReport）とReportデータ構造の相互変換を行います。
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from rdflib import BNode, Graph, Literal, URIRef
from rdflib.namespace import RDF, SH
from rdflib.term import Node


class Severity(str, Enum):
    """違反の重大度"""
    VIOLATION = "Violation"
    WARNING = "Warning"
    INFO = "Info"

    @property
    def iri(self) -> URIRef:
        return SH[self.value]

    @classmethod
    def from_iri(cls, iri: Optional[Node]) -> "Severity":
        """sh:resultSeverityの値から重大度を取得（未指定はViolation）"""
        for severity in cls:
            if iri == severity.iri:
                return severity
        return cls.VIOLATION


@dataclass(frozen=True)
class Violation:
    """1件の検証結果（sh:ValidationResult）"""
    focus_node: Node  # URIRef または BNode
    severity: Severity = Severity.VIOLATION
    result_path: Optional[Node] = None
    message: Optional[str] = None
    source_shape: Optional[Node] = None
    value: Optional[Node] = None


@dataclass(frozen=True)
class Report:
    """適合性レポート"""
    conforms: bool
    violations: List[Violation] = field(default_factory=list)

    @classmethod
    def conformant(cls) -> "Report":
        return cls(conforms=True, violations=[])

    @classmethod
    def from_graph(cls, graph: Graph, conforms: Optional[bool] = None) -> "Report":
        """
        sh:ValidationReportグラフからReportを生成

        Args:
            graph: pySHACLが返した結果グラフ
            conforms: 適合性フラグ。未指定の場合はsh:conformsから取得

        Returns:
            Report
        """
        if conforms is None:
            report_node = graph.value(predicate=RDF.type, object=SH.ValidationReport)
            flag = graph.value(report_node, SH.conforms) if report_node is not None else None
            conforms = bool(flag.toPython()) if isinstance(flag, Literal) else False

        violations = []
        for result in graph.subjects(RDF.type, SH.ValidationResult):
            message = graph.value(result, SH.resultMessage)
            violations.append(Violation(
                focus_node=graph.value(result, SH.focusNode),
                severity=Severity.from_iri(graph.value(result, SH.resultSeverity)),
                result_path=graph.value(result, SH.resultPath),
                message=str(message) if message is not None else None,
                source_shape=graph.value(result, SH.sourceShape),
                value=graph.value(result, SH.value),
            ))

        # 結果グラフの順序は不定なので、フォーカスノード・パスで並べる
        violations.sort(key=lambda v: (str(v.focus_node), str(v.result_path or ""), v.message or ""))

        return cls(conforms=conforms, violations=violations)

    def to_graph(self) -> Graph:
        """Reportをsh:ValidationReportグラフに変換"""
        graph = Graph()
        graph.bind("sh", SH)

        report_node = BNode()
        graph.add((report_node, RDF.type, SH.ValidationReport))
        graph.add((report_node, SH.conforms, Literal(self.conforms)))

        for violation in self.violations:
            result = BNode()
            graph.add((report_node, SH.result, result))
            graph.add((result, RDF.type, SH.ValidationResult))
            graph.add((result, SH.focusNode, violation.focus_node))
            graph.add((result, SH.resultSeverity, violation.severity.iri))
            if violation.result_path is not None:
                graph.add((result, SH.resultPath, violation.result_path))
            if violation.message is not None:
                graph.add((result, SH.resultMessage, Literal(violation.message)))
            if violation.source_shape is not None:
                graph.add((result, SH.sourceShape, violation.source_shape))
            if violation.value is not None:
                graph.add((result, SH.value, violation.value))

        return graph

    def count(self, severity: Severity = Severity.VIOLATION) -> int:
        """指定した重大度の結果数"""
        return sum(1 for v in self.violations if v.severity is severity)
