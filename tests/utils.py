import os
from typing import Optional

import pytest
from httpx import ASGITransport, AsyncClient

from email_drafts.api import Application, create_app
from email_drafts.models import BrandSQL, CampaignResult, EmailType
from email_drafts.settings import Settings
from email_drafts.testing import TEST_USER_ID

AUTH_HEADERS = {"X-User-Id": TEST_USER_ID}
OTHER_USER_HEADERS = {"X-User-Id": "someone-else"}


def get_test_client(test_app, headers: Optional[dict] = None) -> AsyncClient:
    return AsyncClient(
        transport=ASGITransport(app=test_app.app),
        base_url="http://test",
        headers=AUTH_HEADERS if headers is None else headers,
    )


@pytest.fixture(scope="function")
def temp_test_dir(tmp_path_factory) -> str:
    d = tmp_path_factory.mktemp("test_db")
    os.environ["TEST_DB_PATH"] = str(d)
    return str(d)


@pytest.fixture(scope="function")
def test_app(temp_test_dir: str) -> Application:
    test_settings = Settings(
        TEST_BACKEND="True",
        TEST_DB_PATH=temp_test_dir,
        LOAD_TEST_DATA=True,
        LOG_LEVEL="DEBUG",
    )
    return create_app(settings=test_settings)


def first_test_brand(test_app: Application) -> BrandSQL:
    brands = test_app.context.db.list_brands(TEST_USER_ID)
    return next(b for b in brands if b.name == "Acme")


async def create_draft(
    client: AsyncClient,
    brand_id: str,
    user_input: str = "Write a launch email",
    email_type: EmailType = EmailType.product,
    **details,
) -> CampaignResult:
    resp = await client.post(
        "/api/campaign",
        json={
            "brand_id": brand_id,
            "email_type": str(email_type),
            "user_input": user_input,
            **details,
        },
    )
    assert resp.status_code == 200, resp.text
    return CampaignResult.model_validate(resp.json())


async def send_feedback(
    client: AsyncClient, draft_id: str, feedback_text: str
) -> CampaignResult:
    resp = await client.post(
        "/api/campaign",
        json={"draft_id": draft_id, "feedback_text": feedback_text},
    )
    assert resp.status_code == 200, resp.text
    return CampaignResult.model_validate(resp.json())
