"""Shared fixtures: RDF documents and an in-memory HTTP transport."""

from typing import Dict, List, Optional, Tuple

import httpx
import pytest

from pipeline import ResourceFetcher


RESOURCE_IRI = "https://data.example.org/dataset/1"
PROFILE_IRI = "https://profiles.example.org/dataset-profile"
SHAPES_IRI = "https://profiles.example.org/dataset-shapes.ttl"

TURTLE = "text/turtle"

CONFORMING_RESOURCE = f"""
@prefix dct: <http://purl.org/dc/terms/> .
@prefix dcat: <http://www.w3.org/ns/dcat#> .

<{RESOURCE_IRI}> a dcat:Dataset ;
    dct:conformsTo <{PROFILE_IRI}> ;
    dct:title "Example dataset" .
"""

NON_CONFORMING_RESOURCE = f"""
@prefix dct: <http://purl.org/dc/terms/> .
@prefix dcat: <http://www.w3.org/ns/dcat#> .

<{RESOURCE_IRI}> a dcat:Dataset ;
    dct:conformsTo <{PROFILE_IRI}> .
"""

UNPROFILED_RESOURCE = f"""
@prefix dct: <http://purl.org/dc/terms/> .

<{RESOURCE_IRI}> dct:title "Example dataset" .
"""

PROFILE = f"""
@prefix dct: <http://purl.org/dc/terms/> .
@prefix prof: <http://www.w3.org/ns/dx/prof/> .
@prefix role: <http://www.w3.org/ns/dx/prof/role/> .

<{PROFILE_IRI}> a prof:Profile ;
    prof:hasResource <{PROFILE_IRI}#spec>, <{PROFILE_IRI}#shapes> .

<{PROFILE_IRI}#spec> a prof:ResourceDescriptor ;
    prof:hasRole role:Specification ;
    dct:conformsTo <https://www.w3.org/TR/html/> ;
    prof:hasArtifact <https://profiles.example.org/dataset-profile.html> .

<{PROFILE_IRI}#shapes> a prof:ResourceDescriptor ;
    prof:hasRole role:Validation ;
    dct:conformsTo <https://www.w3.org/TR/shacl/> ;
    prof:hasArtifact <{SHAPES_IRI}> .
"""

SHAPES = """
@prefix sh: <http://www.w3.org/ns/shacl#> .
@prefix dct: <http://purl.org/dc/terms/> .
@prefix dcat: <http://www.w3.org/ns/dcat#> .
@prefix ex: <https://profiles.example.org/shapes#> .

ex:DatasetShape a sh:NodeShape ;
    sh:targetClass dcat:Dataset ;
    sh:property [
        sh:path dct:title ;
        sh:minCount 1 ;
        sh:message "A dataset needs a title" ;
    ] .
"""


def make_transport(
    documents: Dict[str, Tuple[str, str]],
    calls: Optional[List[httpx.Request]] = None,
) -> httpx.MockTransport:
    """Serve ``{url: (content_type, body)}``; unknown URLs answer 404."""

    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        url = str(request.url)
        if url not in documents:
            return httpx.Response(404, text="not found")
        content_type, body = documents[url]
        return httpx.Response(200, headers={"content-type": content_type}, content=body.encode("utf-8"))

    return httpx.MockTransport(handler)


def make_fetcher(transport: httpx.MockTransport, **client_kwargs) -> ResourceFetcher:
    client = httpx.AsyncClient(transport=transport, follow_redirects=True, **client_kwargs)
    return ResourceFetcher(client=client)


@pytest.fixture
def documents():
    """A resource, its profile and the SHACL artifact the profile points to."""
    return {
        RESOURCE_IRI: (TURTLE, CONFORMING_RESOURCE),
        PROFILE_IRI: (TURTLE, PROFILE),
        SHAPES_IRI: (TURTLE, SHAPES),
    }


@pytest.fixture
def calls():
    return []


@pytest.fixture
def fetcher_for(calls):
    """Build a fetcher over the given documents, recording every request."""

    def factory(documents, **client_kwargs):
        return make_fetcher(make_transport(documents, calls), **client_kwargs)

    return factory
