from loguru import logger
from result import Ok, Result, is_err

from ..database import DraftsDB
from ..models import (
    BrandDetails,
    BrandSQL,
    CampaignParameters,
    CampaignRequest,
    CampaignResult,
    DraftSQL,
    EmailGenerationRequest,
)
from ..settings import Settings
from ..utils import return_error_and_log
from .templates import generate_email_content, generate_revised_email_content


def build_generation_request(
    draft: DraftSQL, brand: BrandSQL
) -> EmailGenerationRequest:
    parameters = CampaignParameters.model_validate(draft.product_info or {})
    return EmailGenerationRequest(
        **parameters.model_dump(),
        email_type=draft.email_type,
        user_input=draft.user_input,
        brand_details=BrandDetails(
            brand_name=brand.name, brand_description=brand.description
        ),
    )


def create_first_draft(
    db: DraftsDB, user_id: str, request: CampaignRequest, settings: Settings
) -> Result[CampaignResult, str]:
    brand = db.get_brand(user_id, request.brand_id)
    if is_err(brand):
        return brand

    draft = DraftSQL(
        user_id=user_id,
        brand_id=request.brand_id,
        email_type=request.email_type,
        user_input=request.user_input,
        product_info=request.parameters().model_dump(),
        current_version=1,
    )
    content = generate_email_content(
        build_generation_request(draft, brand.ok_value), settings=settings.generation
    )
    first_version = db.create_draft(draft, content)

    return Ok(
        CampaignResult(
            draft_id=draft.id,
            email_draft_result=content,
            version=first_version.version,
        )
    )


def revise_draft(
    db: DraftsDB, user_id: str, request: CampaignRequest, settings: Settings
) -> Result[CampaignResult, str]:
    draft = db.get_draft(user_id, request.draft_id)
    if is_err(draft):
        return draft
    draft: DraftSQL = draft.ok_value

    brand = db.get_brand(user_id, draft.brand_id)
    if is_err(brand):
        return brand

    # feedback is stored before the new version so it lands in the window
    # of the version it critiques
    db.add_feedback(draft, request.feedback_text)

    content = generate_revised_email_content(
        build_generation_request(draft, brand.ok_value),
        feedback_text=request.feedback_text,
        settings=settings.generation,
    )
    revision = db.add_revision(draft, content)

    return Ok(
        CampaignResult(
            draft_id=draft.id, email_draft_result=content, version=revision.version
        )
    )


def process_campaign_request(
    db: DraftsDB, user_id: str, request: CampaignRequest, settings: Settings
) -> Result[CampaignResult, str]:
    logger.debug(
        f"Received campaign request from {user_id}: {request.model_dump_json(indent=2)}"
    )

    try:
        if request.is_new_draft:
            logger.info("Creating new draft...")
            result = create_first_draft(db, user_id, request, settings)
        else:
            logger.info(f"Processing feedback for draft {request.draft_id}...")
            result = revise_draft(db, user_id, request, settings)
    except Exception as exc:
        logger.exception("campaign request failed")
        return return_error_and_log(f"Campaign request failed with: {exc}")

    if result.is_ok():
        logger.success(
            f"Processed campaign request, draft {result.ok_value.draft_id} "
            f"is at version {result.ok_value.version}"
        )
    return result
