from decimal import Decimal

from langchain_core.prompts import PromptTemplate

from ..models import EmailGenerationRequest, EmailType
from ..settings import GenerationSettings

PRODUCT_TEMPLATE = PromptTemplate.from_template(
    "Subject: Introducing {product_title} - {brand_name}\n\n"
    "Dear Valued Customer,\n\n"
    "{user_input}\n\n"
    "We're excited to announce {product_mention}{price_mention}.\n\n"
    "{features_block}\n\n"
    "{about_block}\n\n"
    "{sign_off},\n"
    "The {brand_name} Team"
)

SALES_TEMPLATE = PromptTemplate.from_template(
    "Subject: Special Offer for {audience_title} - {brand_name}\n\n"
    "Dear {audience_greeting},\n\n"
    "{user_input}\n\n"
    "{offer_block}\n\n"
    "{description_block}\n\n"
    "Don't miss out on this limited-time opportunity!\n\n"
    "{sign_off},\n"
    "The {brand_name} Team"
)

NEWS_TEMPLATE = PromptTemplate.from_template(
    "Subject: Newsletter - {brand_name}\n\n"
    "Dear Subscriber,\n\n"
    "{user_input}\n\n"
    "{topics_block}\n\n"
    "{website_block}\n\n"
    "{description_block}\n\n"
    "Stay informed,\n"
    "The {brand_name} Team"
)

COMMUNITY_TEMPLATE = PromptTemplate.from_template(
    "Subject: {community_title} - {brand_name}\n\n"
    "Dear Community Member,\n\n"
    "{user_input}\n\n"
    "{highlights_block}\n\n"
    "{description_block}\n\n"
    "Together we grow,\n"
    "The {brand_name} Team"
)

DEFAULT_TEMPLATE = PromptTemplate.from_template(
    "Subject: Update from {brand_name}\n\n"
    "{greeting},\n\n"
    "{user_input}\n\n"
    "{description_block}\n\n"
    "{sign_off},\n"
    "The {brand_name} Team"
)

REVISION_TEMPLATE = PromptTemplate.from_template(
    '{content}\n\n---\nRevised based on your feedback: "{feedback_text}"\n---'
)


# stands in for an optional block with nothing to say
_EMPTY_BLOCK = "\x00"


def _block(text: str) -> str:
    return text or _EMPTY_BLOCK


def _drop_empty_blocks(text: str) -> str:
    return text.replace("\n\n" + _EMPTY_BLOCK, "")


def _format_price(price: float) -> str:
    # shortest round-trip digits, never rounded and never in exponent form
    digits = format(Decimal(repr(price)), "f")
    if "." in digits:
        digits = digits.rstrip("0").rstrip(".")
    return digits


def generate_email_content(
    request: EmailGenerationRequest, settings: GenerationSettings = GenerationSettings()
) -> str:
    brand = request.brand_details
    description = brand.brand_description or ""
    common = {
        "brand_name": brand.brand_name,
        "user_input": request.user_input,
        "description_block": _block(description),
    }

    if request.email_type == EmailType.product:
        product = request.products_details
        features = [f.strip() for f in product.key_features if f.strip()]
        content = PRODUCT_TEMPLATE.format(
            brand_name=brand.brand_name,
            user_input=request.user_input,
            product_title=product.name or "Our New Product",
            product_mention=product.name or "our latest product",
            price_mention=f" for just ${_format_price(product.price)}"
            if product.price
            else "",
            features_block=_block(
                "Key Features:\n"
                + "\n".join(f"{settings.feature_bullet} {f}" for f in features)
                if features
                else ""
            ),
            about_block=_block(
                f"About {brand.brand_name}:\n{description}" if description else ""
            ),
            sign_off=settings.default_sign_off,
        )
    elif request.email_type == EmailType.sales:
        sales = request.sales_details
        content = SALES_TEMPLATE.format(
            **common,
            audience_title=sales.target_audience or "You",
            audience_greeting=sales.target_audience or "Valued Customer",
            offer_block=_block(
                f"Take advantage of our exclusive {sales.special_offer}!"
                if sales.special_offer
                else ""
            ),
            sign_off=settings.default_sign_off,
        )
    elif request.email_type == EmailType.news:
        news = request.news_details
        content = NEWS_TEMPLATE.format(
            **common,
            topics_block=_block(
                f"Topics covered: {', '.join(news.keywords)}" if news.keywords else ""
            ),
            website_block=_block(
                f"Visit us at: {news.website_url}" if news.website_url else ""
            ),
        )
    elif request.email_type == EmailType.community:
        community = request.community
        content = COMMUNITY_TEMPLATE.format(
            **common,
            community_title=community.community_topics or "Community Update",
            highlights_block=_block(
                f"Highlights:\n{community.key_highlights}"
                if community.key_highlights
                else ""
            ),
        )
    else:
        content = DEFAULT_TEMPLATE.format(
            **common,
            greeting=settings.default_greeting,
            sign_off=settings.default_sign_off,
        )

    return _drop_empty_blocks(content)


def generate_revised_email_content(
    request: EmailGenerationRequest,
    feedback_text: str,
    settings: GenerationSettings = GenerationSettings(),
) -> str:
    return REVISION_TEMPLATE.format(
        content=generate_email_content(request, settings=settings),
        feedback_text=feedback_text,
    )
