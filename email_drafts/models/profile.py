from datetime import datetime
from typing import Optional

from pydantic import BaseModel
from sqlmodel import Field, SQLModel

from ..utils import new_id, utc_now


class ProfileSQL(SQLModel, table=True):
    __tablename__ = "profiles"

    id: str = Field(default_factory=new_id, primary_key=True)
    user_id: str = Field(index=True, unique=True)
    display_name: Optional[str] = None
    bio: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class ProfileInput(BaseModel):
    display_name: Optional[str] = None
    bio: Optional[str] = None
