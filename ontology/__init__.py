"""
プロファイル検証オントロジーモジュール

プロファイル解決で照合する既知のIRI（W3C Profiles Vocabulary, Dublin Core, SHACL）を提供します。
"""

from rdflib import Namespace, URIRef
from rdflib.namespace import DCTERMS, SH

# 名前空間定義
PROF_NS = "http://www.w3.org/ns/dx/prof/"
PROF = Namespace(PROF_NS)
ROLE = Namespace(f"{PROF_NS}role/")

# プロファイル -> リソース記述子
PROF_HAS_RESOURCE = PROF.hasResource
# リソース記述子 -> ロール
PROF_HAS_ROLE = PROF.hasRole
# リソース記述子 -> アーティファクト
PROF_HAS_ARTIFACT = PROF.hasArtifact

# 検証用リソースを表すロール
ROLE_VALIDATION = ROLE.Validation

# SHACLで記述されたアーティファクトを表す標準
STANDARD_SHACL = URIRef("https://www.w3.org/TR/shacl/")

# リソース -> プロファイル、記述子 -> 標準 の両方に使う述語
CONFORMS_TO = DCTERMS.conformsTo

__all__ = [
    "PROF",
    "ROLE",
    "SH",
    "PROF_HAS_RESOURCE",
    "PROF_HAS_ROLE",
    "PROF_HAS_ARTIFACT",
    "ROLE_VALIDATION",
    "STANDARD_SHACL",
    "CONFORMS_TO",
]
