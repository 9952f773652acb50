import pytest

from email_drafts.api import Application
from email_drafts.models import DraftDetail, DraftSummary, Transcript
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


@pytest.mark.asyncio
async def test_first_draft_creates_version_one(test_app: Application):
    brand = first_test_brand(test_app)

    async with get_test_client(test_app) as client:
        result = await create_draft(
            client,
            brand.id,
            products_details={"name": "Rocket Skates", "key_features": ["fast"]},
        )

        assert result.version == 1
        assert result.success
        assert "Rocket Skates" in result.email_draft_result
        assert "The Acme Team" in result.email_draft_result

        resp = await client.get(f"/drafts/{result.draft_id}")
        assert resp.status_code == 200
        draft = DraftDetail.model_validate(resp.json())
        assert draft.current_version == 1
        assert draft.brand_name == "Acme"
        assert draft.product_info["products_details"]["name"] == "Rocket Skates"

        resp = await client.get(f"/drafts/{result.draft_id}/transcript")
        assert resp.status_code == 200
        transcript = Transcript.model_validate(resp.json())
        assert [(m.role, m.text) for m in transcript.messages] == [
            ("user", "Write a launch email"),
            ("assistant", result.email_draft_result),
        ]


@pytest.mark.asyncio
async def test_feedback_creates_next_version_and_shows_in_transcript(
    test_app: Application,
):
    brand = first_test_brand(test_app)

    async with get_test_client(test_app) as client:
        first = await create_draft(client, brand.id)
        second = await send_feedback(client, first.draft_id, "too long")
        third = await send_feedback(client, first.draft_id, "add a deadline")

        assert second.draft_id == first.draft_id
        assert (second.version, third.version) == (2, 3)
        assert second.email_draft_result.endswith(
            'Revised based on your feedback: "too long"\n---'
        )

        resp = await client.get(f"/drafts/{first.draft_id}/transcript")
        transcript = Transcript.model_validate(resp.json())

        assert transcript.current_version == 3
        assert [m.kind for m in transcript.messages] == [
            "original",
            "revision",
            "annotation",
            "revision",
            "annotation",
            "revision",
        ]
        assert transcript.messages[2].text == "too long"
        assert transcript.messages[2].is_error is False
        assert transcript.messages[4].text == "add a deadline"

        resp = await client.get(f"/drafts/{first.draft_id}/revisions")
        assert [r["version"] for r in resp.json()] == [1, 2, 3]


@pytest.mark.asyncio
async def test_drafts_are_listed_newest_first(test_app: Application):
    brand = first_test_brand(test_app)

    async with get_test_client(test_app) as client:
        older = await create_draft(client, brand.id, user_input="first")
        newer = await create_draft(
            client, brand.id, user_input="second", email_type="news"
        )

        resp = await client.get("/drafts")
        drafts = [DraftSummary.model_validate(d) for d in resp.json()]
        assert [d.id for d in drafts] == [newer.draft_id, older.draft_id]
        assert drafts[0].brand_name == "Acme"
        assert drafts[0].email_type == "news"


@pytest.mark.asyncio
async def test_drafts_of_other_users_are_invisible(test_app: Application):
    brand = first_test_brand(test_app)

    async with get_test_client(test_app) as client:
        result = await create_draft(client, brand.id)

    async with get_test_client(test_app, headers=OTHER_USER_HEADERS) as other:
        resp = await other.get(f"/drafts/{result.draft_id}/transcript")
        assert resp.status_code == 404

        resp = await other.post(
            "/api/campaign",
            json={"draft_id": result.draft_id, "feedback_text": "mine now"},
        )
        assert resp.status_code == 404

        resp = await other.post(
            "/api/campaign",
            json={"brand_id": brand.id, "email_type": "sales", "user_input": "hi"},
        )
        assert resp.status_code == 404

        resp = await other.get("/drafts")
        assert resp.json() == []


@pytest.mark.asyncio
async def test_campaign_request_validation(test_app: Application):
    brand = first_test_brand(test_app)

    async with get_test_client(test_app) as client:
        resp = await client.post(
            "/api/campaign", json={"brand_id": brand.id, "email_type": "product"}
        )
        assert resp.status_code == 422

        resp = await client.post(
            "/api/campaign",
            json={"brand_id": brand.id, "email_type": "poetry", "user_input": "hi"},
        )
        assert resp.status_code == 422

        resp = await client.post("/api/campaign", json={"draft_id": "abc"})
        assert resp.status_code == 422


@pytest.mark.asyncio
async def test_requests_without_identity_are_rejected(test_app: Application):
    async with get_test_client(test_app, headers={}) as client:
        resp = await client.get("/drafts")
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Not authenticated"


@pytest.mark.asyncio
async def test_deleting_a_draft_removes_its_history(test_app: Application):
    brand = first_test_brand(test_app)

    async with get_test_client(test_app) as client:
        result = await create_draft(client, brand.id)
        await send_feedback(client, result.draft_id, "too long")

        resp = await client.delete(f"/drafts/{result.draft_id}")
        assert resp.status_code == 200

        resp = await client.get(f"/drafts/{result.draft_id}/transcript")
        assert resp.status_code == 404

        resp = await client.get("/feedbacks")
        assert resp.json() == []

        resp = await client.delete(f"/drafts/{result.draft_id}")
        assert resp.status_code == 404
