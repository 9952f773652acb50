from loguru import logger

from .database import DraftsDB
from .models import BrandInput, BrandSQL

TEST_USER_ID = "test-user"

TEST_BRANDS = [
    BrandInput(name="Acme", description="Tools for every coyote."),
    BrandInput(name="Globex", description=None),
]


def load_test_brands(db: DraftsDB, user_id: str = TEST_USER_ID) -> list[BrandSQL]:
    if db.list_brands(user_id):
        return db.list_brands(user_id)

    brands = [db.create_brand(user_id, brand) for brand in TEST_BRANDS]
    logger.info(f"Loaded {len(brands)} test brands for {user_id}")
    return brands
