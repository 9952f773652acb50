from typing import List

from fastapi import APIRouter, Depends, HTTPException
from result import is_err

from ..app_context import AppContext, get_context, get_current_user_id
from ..models import BrandInput, BrandSQL

router = APIRouter(tags=["Brands"])


@router.get("/brands", response_model=List[BrandSQL])
def list_brands(
    user_id: str = Depends(get_current_user_id),
    context: AppContext = Depends(get_context),
):
    return context.db.list_brands(user_id)


@router.post("/brands", response_model=BrandSQL)
def create_brand(
    brand: BrandInput,
    user_id: str = Depends(get_current_user_id),
    context: AppContext = Depends(get_context),
):
    return context.db.create_brand(user_id, brand)


@router.put("/brands/{brand_id}", response_model=BrandSQL)
def update_brand(
    brand_id: str,
    brand: BrandInput,
    user_id: str = Depends(get_current_user_id),
    context: AppContext = Depends(get_context),
):
    res = context.db.update_brand(user_id, brand_id, brand)
    if is_err(res):
        raise HTTPException(status_code=404, detail=res.err())
    return res.ok_value


@router.delete("/brands/{brand_id}")
def delete_brand(
    brand_id: str,
    user_id: str = Depends(get_current_user_id),
    context: AppContext = Depends(get_context),
) -> bool:
    """Deletes the brand and every draft written for it."""
    res = context.db.delete_brand(user_id, brand_id)
    if is_err(res):
        raise HTTPException(status_code=404, detail=res.err())
    return True
