from . import brands, campaign, drafts, feedbacks, profiles

__all__ = ["brands", "campaign", "drafts", "feedbacks", "profiles"]
