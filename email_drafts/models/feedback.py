from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel
from sqlmodel import Field, SQLModel

from ..utils import new_id, utc_now
from .draft import EmailType


class FeedbackFilter(StrEnum):
    all = "all"
    valid = "valid"
    invalid = "invalid"


class EmailFeedbackSQL(SQLModel, table=True):
    __tablename__ = "email_feedbacks"

    id: str = Field(default_factory=new_id, primary_key=True)
    draft_id: str = Field(foreign_key="drafts.id", index=True)
    user_id: str = Field(index=True)
    feedback_text: str
    is_valid: bool = True
    created_at: datetime = Field(default_factory=utc_now)

    @property
    def text(self) -> str:
        return self.feedback_text


class FeedbackOverview(BaseModel):
    """A feedback entry joined with the draft and brand it belongs to."""

    id: str
    draft_id: str
    feedback_text: str
    is_valid: bool
    created_at: datetime
    email_type: EmailType
    brand_name: str

    @property
    def group_key(self) -> str:
        return f"{self.brand_name}-{self.email_type}"


class FeedbackValidityUpdate(BaseModel):
    is_valid: bool
