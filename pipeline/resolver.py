"""
プロファイル解決モジュール

リソース -> プロファイル -> 検証アーティファクト の2段階の参照をたどり、
SHACLシェイプのIRIを特定します。
"""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from rdflib import Literal, URIRef
from rdflib.namespace import XSD
from rdflib.term import Node

from ontology import (
    CONFORMS_TO,
    PROF_HAS_ARTIFACT,
    PROF_HAS_RESOURCE,
    PROF_HAS_ROLE,
    ROLE_VALIDATION,
    STANDARD_SHACL,
)
from .errors import ArtifactMissingError, ProfileMissingError
from .fetcher import Resource, ResourceFetcher


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResourceDescriptor:
    """プロファイルが公開する1つのリソース（prof:ResourceDescriptor）"""
    node: Node
    role: Optional[Node] = None
    artifact: Optional[URIRef] = None
    conforms_to: Optional[Node] = None

    def is_validation_artifact(self) -> bool:
        """SHACLで記述された検証用リソースかどうか"""
        return (
            self.role == ROLE_VALIDATION
            and self.conforms_to == STANDARD_SHACL
            and self.artifact is not None
        )


def _as_iri(value: Optional[Node]) -> Optional[URIRef]:
    # xsd:anyURIリテラルで書かれたアーティファクトも受け付ける
    if isinstance(value, URIRef):
        return value
    if isinstance(value, Literal) and value.datatype == XSD.anyURI:
        return URIRef(str(value))
    return None


def descriptors(profile: Resource) -> Iterator[ResourceDescriptor]:
    """プロファイルのリソース記述子をグラフの順に列挙"""
    graph = profile.graph
    for node in graph.objects(URIRef(profile.identifier), PROF_HAS_RESOURCE):
        yield ResourceDescriptor(
            node=node,
            role=graph.value(node, PROF_HAS_ROLE),
            artifact=_as_iri(graph.value(node, PROF_HAS_ARTIFACT)),
            conforms_to=graph.value(node, CONFORMS_TO),
        )


class ProfileResolver:
    """リソースの検証アーティファクトを解決するクラス"""

    def __init__(self, fetcher: ResourceFetcher):
        self.fetcher = fetcher

    def find_profile(self, resource: Resource) -> URIRef:
        """
        リソース自身のIRIに対するdct:conformsToを取得

        複数のプロファイルが宣言されている場合は最初の1つを使います。

        Raises:
            ProfileMissingError: プロファイルが宣言されていない
        """
        subject = URIRef(resource.identifier)
        profiles = [o for o in resource.graph.objects(subject, CONFORMS_TO) if isinstance(o, URIRef)]
        if not profiles:
            raise ProfileMissingError(resource.identifier)

        if len(profiles) > 1:
            logger.warning(
                f"Resource {resource.identifier} states {len(profiles)} profiles, using {profiles[0]}"
            )

        logger.info(f"Resolved profile {profiles[0]} for resource {resource.identifier}")
        return profiles[0]

    def select_artifact(self, profile: Resource) -> URIRef:
        """
        プロファイルの記述子から検証アーティファクトを選択

        Args:
            profile: 取得済みのプロファイル

        Returns:
            最初に条件を満たした記述子のアーティファクトIRI

        Raises:
            ArtifactMissingError: 条件を満たす記述子がない
        """
        for descriptor in descriptors(profile):
            if descriptor.is_validation_artifact():
                logger.info(f"Resolved validation artifact {descriptor.artifact} for profile {profile.identifier}")
                return descriptor.artifact
            logger.debug(f"Skipping descriptor {descriptor.node} of profile {profile.identifier}")

        raise ArtifactMissingError(profile.identifier)

    async def find_artifact(self, profile_iri: str) -> URIRef:
        """プロファイルを取得して検証アーティファクトを選択"""
        profile = await self.fetcher.fetch(str(profile_iri))
        return self.select_artifact(profile)

    async def resolve_artifact(self, resource: Resource) -> URIRef:
        """リソースのプロファイルを解決し、その検証アーティファクトを返す"""
        profile_iri = self.find_profile(resource)
        return await self.find_artifact(profile_iri)
