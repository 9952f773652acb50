import time
from functools import wraps
from pathlib import Path
from typing import Callable, List, Optional, ParamSpec, TypeVar

from loguru import logger
from result import Ok, Result
from sqlmodel import Session, SQLModel, create_engine, select

from email_drafts.models import (
    BrandInput,
    BrandSQL,
    DraftSQL,
    DraftSummary,
    DraftVersionSQL,
    EmailFeedbackSQL,
    FeedbackFilter,
    FeedbackOverview,
    ProfileInput,
    ProfileSQL,
)
from email_drafts.settings import Settings
from email_drafts.utils import LogLevel, return_error_and_log, utc_now

P = ParamSpec("P")
R = TypeVar("R")
TABLE_TYPE = TypeVar("TABLE_TYPE", bound=SQLModel)


def timed_db_call(fn: Callable[P, R]) -> Callable[P, R]:
    @wraps(fn)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        start = time.perf_counter()
        result = fn(*args, **kwargs)
        elapsed_ms = (time.perf_counter() - start) * 1000

        args_rendered = [type(arg).__name__ for arg in args[1:]]
        kwargs_rendered = {k: type(v).__name__ for k, v in kwargs.items()}
        logger.debug(
            f"{fn.__qualname__}(args={args_rendered}, kwargs={kwargs_rendered}) took {elapsed_ms:.2f}ms"
        )
        return result

    return wrapper


class DraftsDB:
    """Storage of profiles, brands, drafts, versions and feedback.

    Every domain query is scoped to the requesting user, rows of other users
    behave as if they did not exist.
    """

    def __init__(self, base_dir: str, settings: Settings):
        self.settings: Settings = settings

        self.path = Path(base_dir)
        self.path.mkdir(parents=True, exist_ok=True)

        self.db_path = self.path / "drafts.db"
        self.engine = create_engine(
            f"sqlite:///{self.db_path}",
            echo=False,
            connect_args={"check_same_thread": False},
        )
        SQLModel.metadata.create_all(self.engine)

    @timed_db_call
    def query_first_item(
        self, table: type[TABLE_TYPE], *where_clauses
    ) -> Optional[TABLE_TYPE]:
        with Session(self.engine, expire_on_commit=False) as session:
            statement = select(table)
            for clause in where_clauses:
                statement = statement.where(clause)

            return session.exec(statement=statement).first()

    @timed_db_call
    def add_values(self, values: list[SQLModel]) -> None:
        with Session(self.engine, expire_on_commit=False) as session:
            session.add_all(values)
            session.commit()

    @timed_db_call
    def add_value(self, value: SQLModel) -> None:
        with Session(self.engine, expire_on_commit=False) as session:
            session.add(value)
            session.commit()

    @timed_db_call
    def query_table(
        self, table_model: type[TABLE_TYPE], *where_clauses, order_by=None
    ) -> List[TABLE_TYPE]:
        with Session(self.engine, expire_on_commit=False) as session:
            statement = select(table_model)
            for clause in where_clauses:
                statement = statement.where(clause)
            if order_by is not None:
                statement = statement.order_by(order_by)
            results = session.exec(statement).all()
        return list(results)

    @timed_db_call
    def delete_records(self, table_model: type[SQLModel], *where_clauses) -> int:
        with Session(self.engine, expire_on_commit=False) as session:
            stmt = select(table_model)
            for clause in where_clauses:
                stmt = stmt.where(clause)
            records = session.exec(stmt).all()
            for record in records:
                session.delete(record)
            session.commit()
        return len(records)

    # profiles

    def get_profile(self, user_id: str) -> ProfileSQL:
        profile = self.query_first_item(ProfileSQL, ProfileSQL.user_id == user_id)
        if profile is None:
            profile = ProfileSQL(user_id=user_id)
            self.add_value(profile)
            logger.info(f"Created profile for user {user_id}")
        return profile

    def upsert_profile(self, user_id: str, data: ProfileInput) -> ProfileSQL:
        profile = self.get_profile(user_id)
        profile.display_name = data.display_name
        profile.bio = data.bio
        profile.updated_at = utc_now()
        self.add_value(profile)
        return profile

    # brands

    def list_brands(self, user_id: str) -> List[BrandSQL]:
        return self.query_table(
            BrandSQL, BrandSQL.user_id == user_id, order_by=BrandSQL.created_at.desc()
        )

    def get_brand(self, user_id: str, brand_id: str) -> Result[BrandSQL, str]:
        brand = self.query_first_item(
            BrandSQL, BrandSQL.id == brand_id, BrandSQL.user_id == user_id
        )
        if brand is None:
            return return_error_and_log(
                f"Brand {brand_id} not found.", level=LogLevel.warning
            )
        return Ok(brand)

    def create_brand(self, user_id: str, data: BrandInput) -> BrandSQL:
        brand = BrandSQL(user_id=user_id, name=data.name, description=data.description)
        self.add_value(brand)
        logger.info(f"Created brand {brand.id} for user {user_id}")
        return brand

    def update_brand(
        self, user_id: str, brand_id: str, data: BrandInput
    ) -> Result[BrandSQL, str]:
        found = self.get_brand(user_id, brand_id)
        if found.is_err():
            return found

        brand = found.ok_value
        brand.name = data.name
        brand.description = data.description
        brand.updated_at = utc_now()
        self.add_value(brand)
        return Ok(brand)

    def delete_brand(self, user_id: str, brand_id: str) -> Result[int, str]:
        found = self.get_brand(user_id, brand_id)
        if found.is_err():
            return found

        drafts = self.query_table(
            DraftSQL, DraftSQL.brand_id == brand_id, DraftSQL.user_id == user_id
        )
        for draft in drafts:
            self._delete_draft_rows(draft.id)
        self.delete_records(BrandSQL, BrandSQL.id == brand_id)
        logger.info(f"Deleted brand {brand_id} with {len(drafts)} drafts")
        return Ok(len(drafts))

    # drafts

    @timed_db_call
    def list_drafts(self, user_id: str) -> List[DraftSummary]:
        with Session(self.engine, expire_on_commit=False) as session:
            stmt = (
                select(DraftSQL, BrandSQL.name)
                .join(BrandSQL, DraftSQL.brand_id == BrandSQL.id)
                .where(DraftSQL.user_id == user_id)
                .order_by(DraftSQL.created_at.desc())
            )
            rows = session.exec(stmt).all()

        return [
            DraftSummary(
                id=draft.id,
                brand_id=draft.brand_id,
                brand_name=brand_name,
                email_type=draft.email_type,
                user_input=draft.user_input,
                current_version=draft.current_version,
                created_at=draft.created_at,
            )
            for draft, brand_name in rows
        ]

    def get_draft(self, user_id: str, draft_id: str) -> Result[DraftSQL, str]:
        draft = self.query_first_item(
            DraftSQL, DraftSQL.id == draft_id, DraftSQL.user_id == user_id
        )
        if draft is None:
            return return_error_and_log(
                f"Draft {draft_id} not found.", level=LogLevel.warning
            )
        return Ok(draft)

    def create_draft(self, draft: DraftSQL, content: str) -> DraftVersionSQL:
        first_version = DraftVersionSQL(draft_id=draft.id, version=1, content=content)
        draft.current_version = 1
        self.add_values([draft, first_version])
        logger.info(f"Created draft {draft.id} for user {draft.user_id}")
        return first_version

    def delete_draft(self, user_id: str, draft_id: str) -> Result[str, str]:
        found = self.get_draft(user_id, draft_id)
        if found.is_err():
            return found

        self._delete_draft_rows(draft_id)
        return Ok(draft_id)

    def _delete_draft_rows(self, draft_id: str) -> None:
        self.delete_records(DraftVersionSQL, DraftVersionSQL.draft_id == draft_id)
        self.delete_records(EmailFeedbackSQL, EmailFeedbackSQL.draft_id == draft_id)
        self.delete_records(DraftSQL, DraftSQL.id == draft_id)

    # versions

    def list_revisions(
        self, user_id: str, draft_id: str
    ) -> Result[List[DraftVersionSQL], str]:
        found = self.get_draft(user_id, draft_id)
        if found.is_err():
            return found

        return Ok(
            self.query_table(
                DraftVersionSQL,
                DraftVersionSQL.draft_id == draft_id,
                order_by=DraftVersionSQL.version,
            )
        )

    def add_revision(self, draft: DraftSQL, content: str) -> DraftVersionSQL:
        revision = DraftVersionSQL(
            draft_id=draft.id, version=draft.current_version + 1, content=content
        )
        draft.current_version = revision.version
        draft.updated_at = utc_now()
        self.add_values([revision, draft])
        logger.info(f"Stored version {revision.version} of draft {draft.id}")
        return revision

    # feedback

    def list_feedbacks(
        self, user_id: str, draft_id: str
    ) -> Result[List[EmailFeedbackSQL], str]:
        found = self.get_draft(user_id, draft_id)
        if found.is_err():
            return found

        return Ok(
            self.query_table(
                EmailFeedbackSQL,
                EmailFeedbackSQL.draft_id == draft_id,
                EmailFeedbackSQL.user_id == user_id,
                order_by=EmailFeedbackSQL.created_at,
            )
        )

    def add_feedback(
        self, draft: DraftSQL, feedback_text: str, is_valid: bool = True
    ) -> EmailFeedbackSQL:
        feedback = EmailFeedbackSQL(
            draft_id=draft.id,
            user_id=draft.user_id,
            feedback_text=feedback_text,
            is_valid=is_valid,
        )
        self.add_value(feedback)
        return feedback

    @timed_db_call
    def list_user_feedbacks(
        self, user_id: str, feedback_filter: FeedbackFilter = FeedbackFilter.all
    ) -> List[FeedbackOverview]:
        with Session(self.engine, expire_on_commit=False) as session:
            stmt = (
                select(EmailFeedbackSQL, DraftSQL.email_type, BrandSQL.name)
                .join(DraftSQL, EmailFeedbackSQL.draft_id == DraftSQL.id)
                .join(BrandSQL, DraftSQL.brand_id == BrandSQL.id)
                .where(EmailFeedbackSQL.user_id == user_id)
            )
            if feedback_filter == FeedbackFilter.valid:
                stmt = stmt.where(EmailFeedbackSQL.is_valid == True)  # noqa: E712
            elif feedback_filter == FeedbackFilter.invalid:
                stmt = stmt.where(EmailFeedbackSQL.is_valid == False)  # noqa: E712
            rows = session.exec(stmt.order_by(EmailFeedbackSQL.created_at.desc())).all()

        return [
            FeedbackOverview(
                id=feedback.id,
                draft_id=feedback.draft_id,
                feedback_text=feedback.feedback_text,
                is_valid=feedback.is_valid,
                created_at=feedback.created_at,
                email_type=email_type,
                brand_name=brand_name,
            )
            for feedback, email_type, brand_name in rows
        ]

    def get_feedback(
        self, user_id: str, feedback_id: str
    ) -> Result[EmailFeedbackSQL, str]:
        feedback = self.query_first_item(
            EmailFeedbackSQL,
            EmailFeedbackSQL.id == feedback_id,
            EmailFeedbackSQL.user_id == user_id,
        )
        if feedback is None:
            return return_error_and_log(
                f"Feedback {feedback_id} not found.", level=LogLevel.warning
            )
        return Ok(feedback)

    def set_feedback_validity(
        self, user_id: str, feedback_id: str, is_valid: bool
    ) -> Result[EmailFeedbackSQL, str]:
        found = self.get_feedback(user_id, feedback_id)
        if found.is_err():
            return found

        feedback = found.ok_value
        feedback.is_valid = is_valid
        self.add_value(feedback)
        return Ok(feedback)

    def delete_feedback(self, user_id: str, feedback_id: str) -> Result[str, str]:
        found = self.get_feedback(user_id, feedback_id)
        if found.is_err():
            return found

        self.delete_records(EmailFeedbackSQL, EmailFeedbackSQL.id == feedback_id)
        logger.info(f"Deleted feedback {feedback_id}")
        return Ok(feedback_id)
