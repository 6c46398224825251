"""
パイプラインモジュール

リソースが宣言するプロファイルを解決し、SHACL検証を行うパイプラインを提供します。
"""

from .errors import (
    ValidatorError,
    FetchError,
    FormatError,
    ProfileMissingError,
    ArtifactMissingError,
    EngineError,
)
from .formats import FormatRegistry, GraphFormat, default_registry
from .fetcher import Resource, ResourceFetcher
from .resolver import ProfileResolver, ResourceDescriptor
from .context import ValidationContext, LoadResult, Outcome
from .report import Report, Violation, Severity
from .validator import ValidationPipeline

__all__ = [
    # 例外
    "ValidatorError",
    "FetchError",
    "FormatError",
    "ProfileMissingError",
    "ArtifactMissingError",
    "EngineError",
    # 取得・解決
    "FormatRegistry",
    "GraphFormat",
    "default_registry",
    "Resource",
    "ResourceFetcher",
    "ProfileResolver",
    "ResourceDescriptor",
    # 検証
    "ValidationContext",
    "LoadResult",
    "Outcome",
    "Report",
    "Violation",
    "Severity",
    "ValidationPipeline",
]
