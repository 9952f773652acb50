"""Rebuilds the conversation of a draft from its versions and feedback.

Versions and feedback are stored independently, without a link from a
feedback entry to the version it critiques. Feedback is attributed to a
version by time: it belongs to the version created last before it and is
shown before the version generated next.
"""

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .models import (
    AnnotationMessage,
    DisplayMessage,
    OriginalRequestMessage,
    RevisionMessage,
)


class Revision(Protocol):
    version: int
    content: str
    created_at: datetime


class Annotation(Protocol):
    id: str
    text: str
    is_valid: bool
    created_at: datetime


def in_window(
    timestamp: datetime, opened_at: datetime, closed_at: Optional[datetime]
) -> bool:
    """Open interval test, closed_at None means unbounded."""
    if timestamp <= opened_at:
        return False
    return closed_at is None or timestamp < closed_at


def build_transcript(
    original_request: str,
    revisions: Sequence[Revision],
    annotations: Sequence[Annotation],
) -> list[DisplayMessage]:
    """
    Interleaves versions and feedback into one chronological message list.

    Args:
        original_request: The free text the draft was created from.
        revisions: Versions of the draft, ascending by version number.
        annotations: Feedback entries of the draft, in any order.

    Returns:
        The original request, then every version followed by the feedback
        created strictly after it and strictly before the next version.
        Feedback stamped exactly on a version boundary is left out.
    """
    ordered_annotations = sorted(annotations, key=lambda a: a.created_at)
    messages: list[DisplayMessage] = [OriginalRequestMessage(text=original_request)]

    for index, revision in enumerate(revisions):
        messages.append(
            RevisionMessage(
                id=f"version-{revision.version}",
                text=revision.content,
                version=revision.version,
            )
        )

        closed_at = (
            revisions[index + 1].created_at if index + 1 < len(revisions) else None
        )
        for annotation in ordered_annotations:
            if not in_window(annotation.created_at, revision.created_at, closed_at):
                continue
            messages.append(
                AnnotationMessage(
                    id=f"feedback-{annotation.id}",
                    text=annotation.text,
                    is_error=not annotation.is_valid,
                    annotation_ref=annotation.id,
                )
            )

    return messages


def revision_sequence_issues(revisions: Sequence[Revision]) -> list[str]:
    """Lists integrity problems of a version sequence, the builder ignores them."""
    issues = []
    for expected, revision in enumerate(revisions, start=1):
        if revision.version < 1:
            issues.append(f"version {revision.version} is not positive")
        elif revision.version != expected:
            issues.append(f"expected version {expected}, found {revision.version}")

    for previous, current in zip(revisions, revisions[1:]):
        if current.version == previous.version:
            issues.append(f"version {current.version} appears more than once")
        if current.created_at <= previous.created_at:
            issues.append(
                f"version {current.version} is not newer than version {previous.version}"
            )
    return issues
