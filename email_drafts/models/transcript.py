from datetime import datetime
from enum import StrEnum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field


class Role(StrEnum):
    user = "user"
    assistant = "assistant"


class OriginalRequestMessage(BaseModel):
    kind: Literal["original"] = "original"
    id: str = "initial"
    role: Literal["user"] = "user"
    text: str
    is_error: bool = False


class RevisionMessage(BaseModel):
    kind: Literal["revision"] = "revision"
    id: str
    role: Literal["assistant"] = "assistant"
    text: str
    is_error: bool = False
    version: int


class AnnotationMessage(BaseModel):
    kind: Literal["annotation"] = "annotation"
    id: str
    role: Literal["user"] = "user"
    text: str
    is_error: bool
    annotation_ref: str


class PendingMessage(BaseModel):
    """Appended by the conversation view before the server has answered."""

    kind: Literal["pending"] = "pending"
    id: str
    role: Role
    text: str
    is_error: bool = False


DisplayMessage = Annotated[
    Union[OriginalRequestMessage, RevisionMessage, AnnotationMessage, PendingMessage],
    Field(discriminator="kind"),
]


class Transcript(BaseModel):
    draft_id: str
    current_version: int
    messages: list[DisplayMessage]


class RevisionRecord(BaseModel):
    """Plain revision input for the transcript builder."""

    version: int
    content: str
    created_at: datetime


class AnnotationRecord(BaseModel):
    """Plain annotation input for the transcript builder."""

    id: str
    text: str
    is_valid: bool
    created_at: datetime
    draft_id: Optional[str] = None
