from .campaign import build_generation_request, process_campaign_request
from .templates import generate_email_content, generate_revised_email_content

__all__ = [
    "build_generation_request",
    "process_campaign_request",
    "generate_email_content",
    "generate_revised_email_content",
]
