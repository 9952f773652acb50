from typing import List

from fastapi import APIRouter, Depends, HTTPException
from result import is_err

from ..app_context import AppContext, get_context, get_current_user_id
from ..models import (
    EmailFeedbackSQL,
    FeedbackFilter,
    FeedbackOverview,
    FeedbackValidityUpdate,
)

router = APIRouter(tags=["Feedback"])


@router.get("/feedbacks", response_model=List[FeedbackOverview])
def list_feedbacks(
    filter: FeedbackFilter = FeedbackFilter.all,
    user_id: str = Depends(get_current_user_id),
    context: AppContext = Depends(get_context),
):
    return context.db.list_user_feedbacks(user_id, feedback_filter=filter)


@router.patch("/feedbacks/{feedback_id}", response_model=EmailFeedbackSQL)
def set_feedback_validity(
    feedback_id: str,
    update: FeedbackValidityUpdate,
    user_id: str = Depends(get_current_user_id),
    context: AppContext = Depends(get_context),
):
    """Marks feedback as valid or invalid, invalid feedback can be deleted."""
    res = context.db.set_feedback_validity(user_id, feedback_id, update.is_valid)
    if is_err(res):
        raise HTTPException(status_code=404, detail=res.err())
    return res.ok_value


@router.delete("/api/feedback/{feedback_id}")
def delete_feedback(
    feedback_id: str,
    user_id: str = Depends(get_current_user_id),
    context: AppContext = Depends(get_context),
) -> bool:
    res = context.db.delete_feedback(user_id, feedback_id)
    if is_err(res):
        raise HTTPException(status_code=404, detail=res.err())
    return True
