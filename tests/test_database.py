from datetime import datetime, timezone

from result import is_ok

from email_drafts.api import Application
from email_drafts.models import DraftSQL, EmailType, ProfileInput
from email_drafts.testing import TEST_USER_ID
from tests.utils import first_test_brand, temp_test_dir, test_app

# in here for ruff
test_app
temp_test_dir


def as_utc(ts: datetime) -> datetime:
    return ts if ts.tzinfo is not None else ts.replace(tzinfo=timezone.utc)


def test_draft_timestamps_survive_a_round_trip(test_app: Application):
    db = test_app.context.db
    before = datetime.now(timezone.utc)

    draft = DraftSQL(
        user_id=TEST_USER_ID,
        brand_id=first_test_brand(test_app).id,
        email_type=EmailType.news,
        user_input="Monthly roundup",
    )
    db.create_draft(draft, "Subject: Newsletter")
    after = datetime.now(timezone.utc)

    stored = db.get_draft(TEST_USER_ID, draft.id)
    assert is_ok(stored)
    assert before <= as_utc(stored.ok_value.created_at) <= after

    revisions = db.list_revisions(TEST_USER_ID, draft.id)
    assert is_ok(revisions)
    (first,) = revisions.ok_value
    assert before <= as_utc(first.created_at) <= after


def test_updates_stamp_updated_at(test_app: Application):
    db = test_app.context.db
    created = db.get_profile(TEST_USER_ID)

    updated = db.upsert_profile(TEST_USER_ID, ProfileInput(display_name="Road Runner"))

    assert updated.display_name == "Road Runner"
    assert as_utc(updated.updated_at) >= as_utc(created.created_at)
