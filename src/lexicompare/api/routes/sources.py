"""Source text registration and lookup routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from lexicompare.api.dependencies import Repos, get_repos
from lexicompare.api.schemas import APIResponse, SourceUpsert
from lexicompare.errors import SourceNotFound
from lexicompare.models.source import SourceText

router = APIRouter(prefix="/api/sources", tags=["sources"])


@router.post("")
async def upsert_source(
    body: SourceUpsert,
    repos: Repos = Depends(get_repos),
) -> APIResponse:
    """Create or replace the text stored for a (type, id) source."""
    source = await repos.source.upsert(
        SourceText(
            source_type=body.source_type.value,
            source_id=body.source_id,
            matter_id=body.matter_id,
            text=body.text,
            citation=body.citation,
            page_number=body.page_number,
            line_start=body.line_start,
            event_date=body.event_date,
        )
    )
    return APIResponse(success=True, data=source.to_dict())


@router.get("/{source_type}/{source_id}")
async def get_source(
    source_type: str,
    source_id: int,
    repos: Repos = Depends(get_repos),
) -> APIResponse:
    source = await repos.source.get(source_type, source_id)
    if source is None:
        raise SourceNotFound(source_type, source_id)
    return APIResponse(success=True, data=source.to_dict())
