from typing import Optional

from pydantic import BaseModel, Field, model_validator

from .draft import EmailType


class BrandDetails(BaseModel):
    brand_name: str = ""
    brand_description: Optional[str] = None


class ProductDetails(BaseModel):
    name: Optional[str] = None
    price: Optional[float] = None
    key_features: list[str] = Field(default_factory=list)


class SalesDetails(BaseModel):
    target_audience: Optional[str] = None
    special_offer: Optional[str] = None


class NewsDetails(BaseModel):
    website_url: Optional[str] = None
    keywords: list[str] = Field(default_factory=list)


class CommunityDetails(BaseModel):
    community_topics: Optional[str] = None
    key_highlights: Optional[str] = None


class CampaignParameters(BaseModel):
    """The structured form fields that are kept on the draft as product_info."""

    products_details: ProductDetails = Field(default_factory=ProductDetails)
    sales_details: SalesDetails = Field(default_factory=SalesDetails)
    news_details: NewsDetails = Field(default_factory=NewsDetails)
    community: CommunityDetails = Field(default_factory=CommunityDetails)


class EmailGenerationRequest(CampaignParameters):
    email_type: str
    user_input: str
    brand_details: BrandDetails = Field(default_factory=BrandDetails)


class CampaignRequest(CampaignParameters):
    """Body of POST /api/campaign.

    Without draft_id a new draft is created, with draft_id the feedback_text
    is stored and a new version is generated.
    """

    draft_id: Optional[str] = None
    brand_id: Optional[str] = None
    email_type: Optional[EmailType] = None
    user_input: Optional[str] = None
    feedback_text: Optional[str] = None

    @property
    def is_new_draft(self) -> bool:
        return not self.draft_id

    @model_validator(mode="after")
    def check_required_fields(self) -> "CampaignRequest":
        if self.is_new_draft:
            if not self.brand_id or self.email_type is None:
                raise ValueError("brand_id and email_type are required for a new draft")
            if not (self.user_input or "").strip():
                raise ValueError("user_input is required for a new draft")
        elif not (self.feedback_text or "").strip():
            raise ValueError("feedback_text is required to revise a draft")
        return self

    def parameters(self) -> CampaignParameters:
        return CampaignParameters(
            products_details=self.products_details,
            sales_details=self.sales_details,
            news_details=self.news_details,
            community=self.community,
        )


class CampaignResult(BaseModel):
    draft_id: str
    email_draft_result: str
    version: int
    success: bool = True
