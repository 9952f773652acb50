from fastapi import APIRouter, Depends

from ..app_context import AppContext, get_context, get_current_user_id
from ..models import ProfileInput, ProfileSQL

router = APIRouter(tags=["Profile"])


@router.get("/profile", response_model=ProfileSQL)
def get_profile(
    user_id: str = Depends(get_current_user_id),
    context: AppContext = Depends(get_context),
):
    return context.db.get_profile(user_id)


@router.put("/profile", response_model=ProfileSQL)
def update_profile(
    profile: ProfileInput,
    user_id: str = Depends(get_current_user_id),
    context: AppContext = Depends(get_context),
):
    return context.db.upsert_profile(user_id, profile)
