import sys
from typing import Optional

from fastapi import FastAPI
from loguru import logger

from .app_context import AppContext, Application
from .database import DraftsDB
from .endpoints import brands, campaign, drafts, feedbacks, profiles
from .event_source import DraftEventSource
from .settings import Settings
from .testing import load_test_brands


def create_app(settings: Optional[Settings] = None) -> Application:
    # Override settings if a test configuration is provided.
    if settings is None:
        settings = Settings()

    logger.remove()
    logger.add(sys.stdout, level=settings.LOG_LEVEL)
    if settings.log_path is not None:
        logger.add(settings.log_path, level=settings.LOG_LEVEL, rotation="10 MB")

    app = FastAPI(title="Email Draft API")

    app.include_router(campaign.router)
    app.include_router(drafts.router)
    app.include_router(feedbacks.router)
    app.include_router(brands.router)
    app.include_router(profiles.router)

    if settings.TEST_BACKEND == "True":
        db = DraftsDB(base_dir=settings.TEST_DB_PATH, settings=settings)
        if settings.LOAD_TEST_DATA:
            load_test_brands(db)
    elif settings.TEST_BACKEND == "False":
        db = DraftsDB(base_dir=settings.DEFAULT_DB_DIR, settings=settings)
    else:
        raise ValueError("TEST_BACKEND must be 'True' or 'False'")

    return Application(
        app=app,
        context=AppContext(
            db=db,
            event_source=DraftEventSource(db),
            settings=settings,
        ),
        settings=settings,
    )
