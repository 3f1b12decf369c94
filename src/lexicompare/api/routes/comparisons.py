"""Source comparison and conflict resolution routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from lexicompare.api.dependencies import get_comparison_service
from lexicompare.api.schemas import (
    APIResponse,
    ComparisonCreate,
    ConflictResolve,
    TextCompareRequest,
)
from lexicompare.engine.value_objects import SourceRef
from lexicompare.services.comparison_service import (
    ComparisonOptions,
    ComparisonService,
)

router = APIRouter(prefix="/api", tags=["comparisons"])

# Ad hoc texts have no stored identity.
_AD_HOC_TYPE = "text"


@router.post("/compare/text")
async def compare_text(
    body: TextCompareRequest,
    service: ComparisonService = Depends(get_comparison_service),
) -> APIResponse:
    """Compare two literal texts without persisting the result."""
    result = await service.compare_refs(
        SourceRef(type=_AD_HOC_TYPE, id=0, text=body.text_a),
        SourceRef(type=_AD_HOC_TYPE, id=1, text=body.text_b),
        matter_id=body.matter_id,
        comparison_kind=body.comparison_kind,
        detect=body.detect_conflicts,
        min_severity=body.min_severity,
    )
    return APIResponse(success=True, data=result.to_dict())


@router.post("/comparisons")
async def create_comparison(
    body: ComparisonCreate,
    service: ComparisonService = Depends(get_comparison_service),
) -> APIResponse:
    """Compare two stored sources, optionally saving the result."""
    result = await service.compare(
        ComparisonOptions(
            matter_id=body.matter_id,
            source_a_type=body.source_a_type,
            source_a_id=body.source_a_id,
            source_b_type=body.source_b_type,
            source_b_id=body.source_b_id,
            comparison_kind=body.comparison_kind,
            detect_conflicts=body.detect_conflicts,
            min_severity=body.min_severity,
        )
    )
    data = result.to_dict()
    if body.save:
        data["id"] = await service.save(result, actor_id=body.created_by)
    return APIResponse(success=True, data=data)


@router.get("/comparisons/{comparison_id}")
async def get_comparison(
    comparison_id: str,
    service: ComparisonService = Depends(get_comparison_service),
) -> APIResponse:
    comparison = await service.get(comparison_id)
    return APIResponse(success=True, data=comparison.to_dict())


@router.get("/matters/{matter_id}/comparisons")
async def list_matter_comparisons(
    matter_id: int,
    service: ComparisonService = Depends(get_comparison_service),
) -> APIResponse:
    """Stored comparisons for a matter, newest first."""
    comparisons = await service.list_for_matter(matter_id)
    return APIResponse(
        success=True,
        data=[c.to_dict() for c in comparisons],
        metadata={"count": len(comparisons)},
    )


@router.post("/comparisons/{comparison_id}/conflicts/{index}/resolve")
async def resolve_conflict(
    comparison_id: str,
    index: int,
    body: ConflictResolve,
    service: ComparisonService = Depends(get_comparison_service),
) -> APIResponse:
    comparison = await service.resolve_conflict(
        comparison_id, index, body.notes, body.actor_id
    )
    return APIResponse(success=True, data=comparison.to_dict())
