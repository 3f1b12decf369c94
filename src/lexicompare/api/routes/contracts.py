"""Contract version and clause comparison routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from lexicompare.api.dependencies import get_contract_service
from lexicompare.api.schemas import (
    APIResponse,
    ChangeReview,
    ContractCompareRequest,
    VersionCreate,
)
from lexicompare.engine.value_objects import Clause
from lexicompare.services.contract_service import ContractService

router = APIRouter(prefix="/api", tags=["contracts"])


@router.post("/contracts/{document_id}/versions")
async def create_version(
    document_id: str,
    body: VersionCreate,
    service: ContractService = Depends(get_contract_service),
) -> APIResponse:
    """Store a clause snapshot as the document's new current version."""
    version = await service.create_version(
        document_id,
        [Clause(**c.model_dump()) for c in body.clauses],
        created_by=body.created_by,
        label=body.version_label,
        change_summary=body.change_summary,
    )
    return APIResponse(success=True, data=version.to_dict())


@router.get("/contracts/{document_id}/versions")
async def list_versions(
    document_id: str,
    service: ContractService = Depends(get_contract_service),
) -> APIResponse:
    versions = await service.list_versions(document_id)
    return APIResponse(
        success=True,
        data=[v.to_dict() for v in versions],
        metadata={"count": len(versions)},
    )


@router.post("/contracts/{document_id}/comparisons")
async def compare_versions(
    document_id: str,
    body: ContractCompareRequest,
    service: ContractService = Depends(get_contract_service),
) -> APIResponse:
    comparison = await service.compare_versions(
        document_id,
        body.version_a_id,
        body.version_b_id,
        created_by=body.created_by,
        comparison_type=body.comparison_type,
    )
    return APIResponse(success=True, data=comparison.to_dict())


@router.get("/contracts/{document_id}/comparisons")
async def list_contract_comparisons(
    document_id: str,
    service: ContractService = Depends(get_contract_service),
) -> APIResponse:
    comparisons = await service.list_comparisons(document_id)
    return APIResponse(
        success=True,
        data=[c.to_dict() for c in comparisons],
        metadata={"count": len(comparisons)},
    )


@router.get("/contract-comparisons/{comparison_id}")
async def get_contract_comparison(
    comparison_id: str,
    service: ContractService = Depends(get_contract_service),
) -> APIResponse:
    comparison = await service.get_comparison(comparison_id)
    return APIResponse(success=True, data=comparison.to_dict())


@router.post("/contract-comparisons/{comparison_id}/changes/{ordinal}/review")
async def review_change(
    comparison_id: str,
    ordinal: int,
    body: ChangeReview,
    service: ContractService = Depends(get_contract_service),
) -> APIResponse:
    change = await service.review_change(
        comparison_id,
        ordinal,
        body.status,
        reviewer_id=body.reviewer_id,
        notes=body.notes,
    )
    return APIResponse(success=True, data=change.to_dict())
