from enum import StrEnum
from typing import Awaitable, Callable, Iterable, Optional

from loguru import logger
from pydantic import BaseModel
from result import Result, is_err

from .models import DisplayMessage, PendingMessage, Role
from .utils import new_id


class NotificationVariant(StrEnum):
    default = "default"
    destructive = "destructive"


class Notification(BaseModel):
    title: str
    description: str
    variant: NotificationVariant = NotificationVariant.default


class ConversationView:
    """In-memory message list of one open draft.

    Built once from a transcript, afterwards only appended to (optimistic
    sends) or shrunk by annotation reference (deletes).
    """

    def __init__(self, messages: Optional[Iterable[DisplayMessage]] = None):
        self.messages: list[DisplayMessage] = list(messages or [])

    @classmethod
    def from_transcript(cls, messages: Iterable[DisplayMessage]) -> "ConversationView":
        return cls(messages)

    def append(self, message: DisplayMessage) -> None:
        self.messages.append(message)

    def remove_annotation(self, annotation_ref: str) -> int:
        kept = [
            m for m in self.messages if getattr(m, "annotation_ref", None) != annotation_ref
        ]
        removed = len(self.messages) - len(kept)
        self.messages = kept
        return removed

    async def submit(
        self, text: str, send: Callable[[str], Awaitable[Result[str, str]]]
    ) -> Optional[Notification]:
        # the user message stays even when sending fails
        self.append(PendingMessage(id=f"user-{new_id()}", role=Role.user, text=text))

        result = await send(text)
        if is_err(result):
            logger.error(f"Submitting feedback failed: {result.err()}")
            return Notification(
                title="Error submitting feedback",
                description="Please try again.",
                variant=NotificationVariant.destructive,
            )

        self.append(
            PendingMessage(
                id=f"assistant-{new_id()}", role=Role.assistant, text=result.ok_value
            )
        )
        return None

    async def delete_annotation(
        self, annotation_ref: str, delete: Callable[[str], Awaitable[Result]]
    ) -> Notification:
        result = await delete(annotation_ref)
        if is_err(result):
            logger.error(f"Deleting feedback {annotation_ref} failed: {result.err()}")
            return Notification(
                title="Error deleting feedback",
                description="Please try again.",
                variant=NotificationVariant.destructive,
            )

        self.remove_annotation(annotation_ref)
        return Notification(
            title="Feedback deleted", description="The feedback has been removed."
        )
