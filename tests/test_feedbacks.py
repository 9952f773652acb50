import pytest

from email_drafts.api import Application
from email_drafts.models import FeedbackOverview, Transcript
from tests.utils import (
    OTHER_USER_HEADERS,
    create_draft,
    first_test_brand,
    get_test_client,
    send_feedback,
    temp_test_dir,
    test_app,
)

# in here for ruff
test_app
temp_test_dir


async def feedback_ids(client) -> list[str]:
    resp = await client.get("/feedbacks")
    return [FeedbackOverview.model_validate(f).id for f in resp.json()]


@pytest.mark.asyncio
async def test_list_and_filter_feedbacks(test_app: Application):
    brand = first_test_brand(test_app)

    async with get_test_client(test_app) as client:
        draft = await create_draft(client, brand.id)
        await send_feedback(client, draft.draft_id, "too long")
        await send_feedback(client, draft.draft_id, "wrong product")

        resp = await client.get("/feedbacks")
        feedbacks = [FeedbackOverview.model_validate(f) for f in resp.json()]
        assert [f.feedback_text for f in feedbacks] == ["wrong product", "too long"]
        assert feedbacks[0].brand_name == "Acme"
        assert feedbacks[0].group_key == "Acme-product"

        resp = await client.patch(
            f"/feedbacks/{feedbacks[0].id}", json={"is_valid": False}
        )
        assert resp.status_code == 200
        assert resp.json()["is_valid"] is False

        resp = await client.get("/feedbacks?filter=invalid")
        assert [f["feedback_text"] for f in resp.json()] == ["wrong product"]

        resp = await client.get("/feedbacks?filter=valid")
        assert [f["feedback_text"] for f in resp.json()] == ["too long"]


@pytest.mark.asyncio
async def test_invalid_feedback_is_flagged_in_transcript(test_app: Application):
    brand = first_test_brand(test_app)

    async with get_test_client(test_app) as client:
        draft = await create_draft(client, brand.id)
        await send_feedback(client, draft.draft_id, "too long")
        (feedback_id,) = await feedback_ids(client)

        await client.patch(f"/feedbacks/{feedback_id}", json={"is_valid": False})

        resp = await client.get(f"/drafts/{draft.draft_id}/transcript")
        transcript = Transcript.model_validate(resp.json())
        annotation = next(m for m in transcript.messages if m.kind == "annotation")
        assert annotation.is_error is True
        assert annotation.annotation_ref == feedback_id


@pytest.mark.asyncio
async def test_delete_feedback_keeps_versions(test_app: Application):
    brand = first_test_brand(test_app)

    async with get_test_client(test_app) as client:
        draft = await create_draft(client, brand.id)
        await send_feedback(client, draft.draft_id, "too long")
        (feedback_id,) = await feedback_ids(client)

        resp = await client.delete(f"/api/feedback/{feedback_id}")
        assert resp.status_code == 200

        resp = await client.get(f"/drafts/{draft.draft_id}/transcript")
        transcript = Transcript.model_validate(resp.json())
        assert [m.kind for m in transcript.messages] == [
            "original",
            "revision",
            "revision",
        ]
        assert transcript.current_version == 2

        resp = await client.delete(f"/api/feedback/{feedback_id}")
        assert resp.status_code == 404


@pytest.mark.asyncio
async def test_feedback_of_other_users_cannot_be_changed(test_app: Application):
    brand = first_test_brand(test_app)

    async with get_test_client(test_app) as client:
        draft = await create_draft(client, brand.id)
        await send_feedback(client, draft.draft_id, "too long")
        (feedback_id,) = await feedback_ids(client)

    async with get_test_client(test_app, headers=OTHER_USER_HEADERS) as other:
        resp = await other.delete(f"/api/feedback/{feedback_id}")
        assert resp.status_code == 404

        resp = await other.patch(f"/feedbacks/{feedback_id}", json={"is_valid": False})
        assert resp.status_code == 404

        resp = await other.get("/feedbacks")
        assert resp.json() == []

    async with get_test_client(test_app) as client:
        assert await feedback_ids(client) == [feedback_id]
