import asyncio
from dataclasses import dataclass

from loguru import logger
from result import Ok, Result, is_err
from sqlalchemy.exc import SQLAlchemyError

from .database import DraftsDB
from .models import DraftVersionSQL, EmailFeedbackSQL, Transcript
from .transcript import build_transcript, revision_sequence_issues
from .utils import return_error_and_log


@dataclass
class DraftEvents:
    revisions: list[DraftVersionSQL]
    annotations: list[EmailFeedbackSQL]


class DraftEventSource:
    """Fetches the versions and feedback of a draft for the transcript."""

    def __init__(self, db: DraftsDB):
        self.db = db

    async def fetch_events(self, user_id: str, draft_id: str) -> Result[DraftEvents, str]:
        try:
            revisions, annotations = await asyncio.gather(
                asyncio.to_thread(self.db.list_revisions, user_id, draft_id),
                asyncio.to_thread(self.db.list_feedbacks, user_id, draft_id),
            )
        except SQLAlchemyError as exc:
            logger.exception(f"Fetching history of draft {draft_id} failed")
            return return_error_and_log(
                f"Fetching history of draft {draft_id} failed with: {exc}"
            )

        # no partial transcripts, either failure fails the load
        if is_err(revisions):
            return revisions
        if is_err(annotations):
            return annotations

        return Ok(
            DraftEvents(revisions=revisions.ok_value, annotations=annotations.ok_value)
        )

    async def load_transcript(self, user_id: str, draft_id: str) -> Result[Transcript, str]:
        draft = await asyncio.to_thread(self.db.get_draft, user_id, draft_id)
        if is_err(draft):
            return draft

        events = await self.fetch_events(user_id, draft_id)
        if is_err(events):
            return events

        revisions = events.ok_value.revisions
        for issue in revision_sequence_issues(revisions):
            logger.warning(f"Draft {draft_id}: {issue}")

        messages = build_transcript(
            draft.ok_value.user_input, revisions, events.ok_value.annotations
        )
        logger.debug(
            f"Built transcript for draft {draft_id} with {len(messages)} messages"
        )
        return Ok(
            Transcript(
                draft_id=draft_id,
                current_version=draft.ok_value.current_version,
                messages=messages,
            )
        )
