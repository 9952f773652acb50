from fastapi import APIRouter, Depends, HTTPException
from fastapi.concurrency import run_in_threadpool
from result import is_err

from ..app_context import AppContext, get_context, get_current_user_id
from ..generation import process_campaign_request
from ..models import CampaignRequest, CampaignResult

router = APIRouter(tags=["Campaign"])


@router.post("/api/campaign", response_model=CampaignResult)
async def generate_campaign_email(
    request: CampaignRequest,
    user_id: str = Depends(get_current_user_id),
    context: AppContext = Depends(get_context),
):
    """Generates the first version of a new draft, or a revision when a
    draft_id and feedback_text are given."""
    result = await run_in_threadpool(
        process_campaign_request, context.db, user_id, request, context.settings
    )

    if is_err(result):
        detail = result.err()
        status_code = 404 if "not found" in detail else 500
        raise HTTPException(status_code=status_code, detail=detail)

    return result.ok_value
