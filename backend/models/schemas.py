"""
Pydanticスキーマ定義

APIのレスポンスモデルを定義します。
"""

from typing import List, Optional

from pydantic import BaseModel, Field
from rdflib import BNode
from rdflib.term import Node

from pipeline import Report, Severity, Violation


def _term(node: Optional[Node]) -> Optional[str]:
    """RDF項を文字列に変換（空白ノードは _:id 形式）"""
    if node is None:
        return None
    if isinstance(node, BNode):
        return node.n3()
    return str(node)


class ViolationModel(BaseModel):
    """検証結果1件"""
    focusNode: str
    severity: Severity = Severity.VIOLATION
    resultPath: Optional[str] = None
    message: Optional[str] = None
    sourceShape: Optional[str] = None
    value: Optional[str] = None

    @classmethod
    def from_violation(cls, violation: Violation) -> "ViolationModel":
        return cls(
            focusNode=_term(violation.focus_node) or "",
            severity=violation.severity,
            resultPath=_term(violation.result_path),
            message=violation.message,
            sourceShape=_term(violation.source_shape),
            value=_term(violation.value),
        )


class ReportResponse(BaseModel):
    """適合性レポートレスポンス"""
    resource: str
    conforms: bool
    violations: List[ViolationModel] = Field(default_factory=list)

    @classmethod
    def from_report(cls, resource: str, report: Report) -> "ReportResponse":
        return cls(
            resource=resource,
            conforms=report.conforms,
            violations=[ViolationModel.from_violation(v) for v in report.violations],
        )


class HealthResponse(BaseModel):
    """ヘルスチェックレスポンス"""
    status: str
    version: str
