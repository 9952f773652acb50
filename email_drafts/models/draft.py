from datetime import datetime
from enum import StrEnum
from typing import Optional

from pydantic import BaseModel
from sqlmodel import JSON, Column, Field, SQLModel

from ..utils import new_id, utc_now


class EmailType(StrEnum):
    product = "product"
    sales = "sales"
    news = "news"
    community = "community"


class DraftSQL(SQLModel, table=True):
    __tablename__ = "drafts"

    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(index=True)
    brand_id: str = Field(foreign_key="brands.id", index=True)
    email_type: EmailType
    product_info: dict = Field(default_factory=dict, sa_column=Column(JSON))
    user_input: str
    current_version: int = 1
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class DraftVersionSQL(SQLModel, table=True):
    """One immutable generated snapshot of a draft."""

    __tablename__ = "draft_versions"

    id: str = Field(default_factory=new_id, primary_key=True)
    draft_id: str = Field(foreign_key="drafts.id", index=True)
    version: int
    content: str
    created_at: datetime = Field(default_factory=utc_now)


class DraftSummary(BaseModel):
    id: str
    brand_id: str
    brand_name: str
    email_type: EmailType
    user_input: str
    current_version: int
    created_at: datetime


class DraftDetail(BaseModel):
    id: str
    brand_id: str
    brand_name: Optional[str] = None
    email_type: EmailType
    product_info: dict
    user_input: str
    current_version: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_sql_model(
        cls, draft: DraftSQL, brand_name: Optional[str] = None
    ) -> "DraftDetail":
        return cls(
            id=draft.id,
            brand_id=draft.brand_id,
            brand_name=brand_name,
            email_type=draft.email_type,
            product_info=draft.product_info or {},
            user_input=draft.user_input,
            current_version=draft.current_version,
            created_at=draft.created_at,
            updated_at=draft.updated_at,
        )
