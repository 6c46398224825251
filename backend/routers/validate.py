"""
検証APIルーター

/api/validate エンドポイントを提供します。
レスポンスはAcceptヘッダーに応じてJSONまたはRDF（sh:ValidationReport）で返します。
"""

import asyncio
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response

from backend.models.schemas import ReportResponse
from backend.services import get_pipeline, validation_service
from pipeline import (
    ArtifactMissingError,
    EngineError,
    FetchError,
    FormatError,
    GraphFormat,
    ProfileMissingError,
    ValidationPipeline,
    default_registry,
)


router = APIRouter(prefix="/validate", tags=["validate"])

JSON_MEDIA_TYPES = ("application/json", "*/*", "application/*")


def negotiate_format(accept: Optional[str]) -> Optional[GraphFormat]:
    """
    Acceptヘッダーから応答のRDFフォーマットを選択

    Returns:
        RDFフォーマット。JSONで返す場合はNone
    """
    if not accept:
        return None

    candidates = []
    for index, part in enumerate(accept.split(",")):
        media_type, _, params = part.partition(";")
        q = 1.0
        for param in params.split(";"):
            key, _, value = param.strip().partition("=")
            if key.strip() == "q":
                try:
                    q = float(value)
                except ValueError:
                    q = 0.0
        if q > 0:
            candidates.append((-q, index, media_type.strip().lower()))

    for _, _, media_type in sorted(candidates):
        if media_type in JSON_MEDIA_TYPES:
            return None
        fmt = default_registry.matches(media_type)
        if fmt is not None and fmt.writable:
            return fmt

    return None


@router.get("", response_model=ReportResponse)
async def validate_resource(
    request: Request,
    resource: str = Query(
        description="検証対象リソースのIRI",
    ),
    pipeline: ValidationPipeline = Depends(get_pipeline),
):
    """
    リソースを検証

    リソースが宣言するプロファイルからSHACLシェイプを特定し、適合性レポートを返します。
    """
    try:
        report = await validation_service.validate(pipeline, resource)
    except (ProfileMissingError, ArtifactMissingError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    except (FetchError, FormatError) as e:
        raise HTTPException(status_code=502, detail=str(e))
    except asyncio.TimeoutError:
        raise HTTPException(
            status_code=504,
            detail=f"Validation of {resource} timed out",
        )
    except EngineError as e:
        # トレースバックはパイプライン側で記録済み
        raise HTTPException(
            status_code=500,
            detail=f"Failed to validate resource: {str(e)}",
        )

    fmt = negotiate_format(request.headers.get("accept"))
    if fmt is None:
        return ReportResponse.from_report(resource, report)

    return Response(
        content=fmt.encode(report.to_graph()),
        media_type=fmt.media_type,
    )
