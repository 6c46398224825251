"""Tests for the validation pipeline."""

import asyncio
import time

import pytest
from rdflib import Graph, URIRef

from backend.services.validation_service import ValidationService
from pipeline import (
    ArtifactMissingError,
    EngineError,
    FetchError,
    FormatError,
    ProfileMissingError,
    ValidationContext,
    ValidationPipeline,
)
from pipeline.context import ContextState
from tests.conftest import (
    NON_CONFORMING_RESOURCE,
    PROFILE_IRI,
    RESOURCE_IRI,
    SHAPES_IRI,
    TURTLE,
    UNPROFILED_RESOURCE,
)


class TrackingContext(ValidationContext):
    """Validation context that records every instance it creates."""

    created = []

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        TrackingContext.created.append(self)


class BrokenEngineContext(TrackingContext):
    def __init__(self):
        super().__init__(engine=self._explode)

    @staticmethod
    def _explode(*args, **kwargs):
        raise RuntimeError("engine exploded")


class ShapesRejectingContext(TrackingContext):
    def load_shapes(self, shapes):
        raise EngineError("shapes store unavailable")


class SlowEngineContext(TrackingContext):
    def __init__(self):
        super().__init__(engine=self._slow)

    @staticmethod
    def _slow(*args, **kwargs):
        time.sleep(1.0)
        return True, Graph(), ""


@pytest.fixture(autouse=True)
def reset_tracking():
    TrackingContext.created = []
    yield
    TrackingContext.created = []


def validate(pipeline: ValidationPipeline, identifier: str = RESOURCE_IRI):
    return asyncio.run(pipeline.validate(identifier))


def assert_all_closed():
    assert TrackingContext.created
    assert all(context.closed for context in TrackingContext.created)


class TestValidate:
    """Tests for end-to-end validation outcomes."""

    def test_conforming_resource(self, documents, fetcher_for, calls):
        """Test resource, profile and artifact are fetched in order and conform."""
        pipeline = ValidationPipeline(fetcher_for(documents), context_factory=TrackingContext)

        report = validate(pipeline)

        assert report.conforms is True
        assert report.violations == []
        assert [str(c.url) for c in calls] == [RESOURCE_IRI, PROFILE_IRI, SHAPES_IRI]
        assert_all_closed()

    def test_non_conforming_resource(self, documents, fetcher_for):
        """Test a constraint violation is returned as a report, not raised."""
        documents[RESOURCE_IRI] = (TURTLE, NON_CONFORMING_RESOURCE)
        pipeline = ValidationPipeline(fetcher_for(documents), context_factory=TrackingContext)

        report = validate(pipeline)

        assert report.conforms is False
        assert URIRef(RESOURCE_IRI) in [v.focus_node for v in report.violations]
        assert TrackingContext.created[0].state is ContextState.CLOSED
        assert_all_closed()

    def test_fresh_context_per_call(self, documents, fetcher_for):
        """Test every validation gets its own context."""
        pipeline = ValidationPipeline(fetcher_for(documents), context_factory=TrackingContext)

        validate(pipeline)
        validate(pipeline)

        assert len(TrackingContext.created) == 2
        assert TrackingContext.created[0] is not TrackingContext.created[1]
        assert_all_closed()

    def test_validate_many(self, documents, fetcher_for):
        """Test concurrent validations are isolated and failures are returned."""
        other = "https://data.example.org/dataset/2"
        documents[other] = (TURTLE, NON_CONFORMING_RESOURCE.replace(RESOURCE_IRI, other))
        pipeline = ValidationPipeline(fetcher_for(documents), context_factory=TrackingContext)

        results = asyncio.run(pipeline.validate_many([RESOURCE_IRI, other, "https://data.example.org/missing"]))

        assert results[0].conforms is True
        assert results[1].conforms is False
        assert {v.focus_node for v in results[1].violations} == {URIRef(other)}
        assert isinstance(results[2], FetchError)
        assert len(TrackingContext.created) == 2
        assert_all_closed()


class TestValidateErrors:
    """Tests for fail-fast errors and cleanup."""

    def test_profile_missing(self, documents, fetcher_for, calls):
        """Test a resource without a profile fails before any further fetch."""
        documents[RESOURCE_IRI] = (TURTLE, UNPROFILED_RESOURCE)
        pipeline = ValidationPipeline(fetcher_for(documents), context_factory=TrackingContext)

        with pytest.raises(ProfileMissingError):
            validate(pipeline)

        assert len(calls) == 1
        assert TrackingContext.created == []

    def test_artifact_missing(self, documents, fetcher_for):
        """Test a profile without a SHACL descriptor fails with ArtifactMissingError."""
        documents[PROFILE_IRI] = (TURTLE, f"<{PROFILE_IRI}> a <http://www.w3.org/ns/dx/prof/Profile> .")
        pipeline = ValidationPipeline(fetcher_for(documents), context_factory=TrackingContext)

        with pytest.raises(ArtifactMissingError):
            validate(pipeline)

        assert TrackingContext.created == []

    def test_resource_fetch_failure(self, fetcher_for):
        """Test an unreachable resource fails with FetchError."""
        pipeline = ValidationPipeline(fetcher_for({}), context_factory=TrackingContext)

        with pytest.raises(FetchError):
            validate(pipeline)

    def test_artifact_format_failure(self, documents, fetcher_for):
        """Test an artifact served as HTML fails with FormatError."""
        documents[SHAPES_IRI] = ("text/html", "<html></html>")
        pipeline = ValidationPipeline(fetcher_for(documents), context_factory=TrackingContext)

        with pytest.raises(FormatError):
            validate(pipeline)

    def test_engine_failure_still_closes_context(self, documents, fetcher_for):
        """Test an engine failure is fatal and the context is still released."""
        pipeline = ValidationPipeline(fetcher_for(documents), context_factory=BrokenEngineContext)

        with pytest.raises(EngineError):
            validate(pipeline)

        assert len(TrackingContext.created) == 1
        assert_all_closed()

    def test_shapes_load_failure_still_closes_context(self, documents, fetcher_for):
        """Test a failure while loading shapes is fatal and the context is released."""
        pipeline = ValidationPipeline(fetcher_for(documents), context_factory=ShapesRejectingContext)

        with pytest.raises(EngineError, match="shapes store unavailable"):
            validate(pipeline)

        assert len(TrackingContext.created) == 1
        assert TrackingContext.created[0].state is ContextState.CLOSED
        assert_all_closed()


class TestServiceTimeout:
    """Tests for the service-level validation deadline."""

    def test_timeout_raises(self, documents, fetcher_for):
        """Test a validation exceeding the deadline raises TimeoutError."""
        pipeline = ValidationPipeline(fetcher_for(documents), context_factory=SlowEngineContext)
        service = ValidationService(timeout=0.2)

        with pytest.raises(asyncio.TimeoutError):
            asyncio.run(service.validate(pipeline, RESOURCE_IRI))

    def test_context_stays_closed_after_timeout(self, documents, fetcher_for):
        """Test the worker finishing after the deadline cannot reopen the context."""
        pipeline = ValidationPipeline(fetcher_for(documents), context_factory=SlowEngineContext)
        service = ValidationService(timeout=0.2)

        # asyncio.run waits for the worker thread before returning
        with pytest.raises(asyncio.TimeoutError):
            asyncio.run(service.validate(pipeline, RESOURCE_IRI))

        assert len(TrackingContext.created) == 1
        context = TrackingContext.created[0]
        assert context.state is ContextState.CLOSED
        assert context.data_graph is None
        assert context.shapes_graph is None

    def test_no_timeout_when_disabled(self, documents, fetcher_for):
        """Test a zero deadline runs the validation to completion."""
        pipeline = ValidationPipeline(fetcher_for(documents), context_factory=TrackingContext)

        report = asyncio.run(ValidationService(timeout=0).validate(pipeline, RESOURCE_IRI))

        assert report.conforms is True
        assert_all_closed()
