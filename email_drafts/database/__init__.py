from .drafts_db import DraftsDB

__all__ = ["DraftsDB"]
