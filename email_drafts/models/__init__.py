from .brand import BrandInput, BrandSQL
from .campaign import (
    BrandDetails,
    CampaignParameters,
    CampaignRequest,
    CampaignResult,
    CommunityDetails,
    EmailGenerationRequest,
    NewsDetails,
    ProductDetails,
    SalesDetails,
)
from .draft import DraftDetail, DraftSQL, DraftSummary, DraftVersionSQL, EmailType
from .feedback import (
    EmailFeedbackSQL,
    FeedbackFilter,
    FeedbackOverview,
    FeedbackValidityUpdate,
)
from .profile import ProfileInput, ProfileSQL
from .transcript import (
    AnnotationMessage,
    AnnotationRecord,
    DisplayMessage,
    OriginalRequestMessage,
    PendingMessage,
    RevisionMessage,
    RevisionRecord,
    Role,
    Transcript,
)

__all__ = [
    "BrandSQL",
    "BrandInput",
    "ProfileSQL",
    "ProfileInput",
    "EmailType",
    "DraftSQL",
    "DraftVersionSQL",
    "DraftSummary",
    "DraftDetail",
    "EmailFeedbackSQL",
    "FeedbackFilter",
    "FeedbackOverview",
    "FeedbackValidityUpdate",
    "BrandDetails",
    "ProductDetails",
    "SalesDetails",
    "NewsDetails",
    "CommunityDetails",
    "CampaignParameters",
    "EmailGenerationRequest",
    "CampaignRequest",
    "CampaignResult",
    "Role",
    "OriginalRequestMessage",
    "RevisionMessage",
    "AnnotationMessage",
    "PendingMessage",
    "DisplayMessage",
    "Transcript",
    "RevisionRecord",
    "AnnotationRecord",
]
