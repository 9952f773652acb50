from typing import List

from fastapi import APIRouter, Depends, HTTPException
from result import is_err

from ..app_context import AppContext, get_context, get_current_user_id
from ..models import DraftDetail, DraftSummary, DraftVersionSQL, Transcript

router = APIRouter(tags=["Drafts"])


@router.get("/drafts", response_model=List[DraftSummary])
def list_drafts(
    user_id: str = Depends(get_current_user_id),
    context: AppContext = Depends(get_context),
):
    """Lists the drafts of the user, newest first."""
    return context.db.list_drafts(user_id)


@router.get("/drafts/{draft_id}", response_model=DraftDetail)
def get_draft(
    draft_id: str,
    user_id: str = Depends(get_current_user_id),
    context: AppContext = Depends(get_context),
):
    draft = context.db.get_draft(user_id, draft_id)
    if is_err(draft):
        raise HTTPException(status_code=404, detail=draft.err())

    brand = context.db.get_brand(user_id, draft.ok_value.brand_id)
    brand_name = brand.ok_value.name if brand.is_ok() else None
    return DraftDetail.from_sql_model(draft.ok_value, brand_name=brand_name)


@router.delete("/drafts/{draft_id}")
def delete_draft(
    draft_id: str,
    user_id: str = Depends(get_current_user_id),
    context: AppContext = Depends(get_context),
) -> bool:
    """Deletes the draft together with its versions and feedback."""
    res = context.db.delete_draft(user_id, draft_id)
    if is_err(res):
        raise HTTPException(status_code=404, detail=res.err())
    return True


@router.get("/drafts/{draft_id}/revisions", response_model=List[DraftVersionSQL])
def list_revisions(
    draft_id: str,
    user_id: str = Depends(get_current_user_id),
    context: AppContext = Depends(get_context),
):
    revisions = context.db.list_revisions(user_id, draft_id)
    if is_err(revisions):
        raise HTTPException(status_code=404, detail=revisions.err())
    return revisions.ok_value


@router.get("/drafts/{draft_id}/transcript", response_model=Transcript)
async def get_transcript(
    draft_id: str,
    user_id: str = Depends(get_current_user_id),
    context: AppContext = Depends(get_context),
):
    """
    Returns the conversation of a draft: the original request, every version
    and the feedback given on it, in chronological order.
    """
    transcript = await context.event_source.load_transcript(user_id, draft_id)
    if is_err(transcript):
        raise HTTPException(status_code=404, detail=transcript.err())
    return transcript.ok_value
