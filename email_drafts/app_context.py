from dataclasses import dataclass
from typing import Optional

from fastapi import FastAPI, Header, HTTPException, Request

from email_drafts.database import DraftsDB
from email_drafts.event_source import DraftEventSource
from email_drafts.settings import Settings


@dataclass
class AppContext:
    db: DraftsDB
    event_source: DraftEventSource
    settings: Settings


class Application:
    def __init__(self, app: FastAPI, context: AppContext, settings: Settings):
        self.app: FastAPI = app
        self.context: AppContext = context
        self.settings: Settings = settings
        app.state.context = context


def get_context(request: Request) -> AppContext:
    context = getattr(request.app.state, "context", None)
    if context is None:
        raise ValueError("Application not instantiated")
    return context


def get_current_user_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    """Identity of the caller, resolved by the auth proxy in front of the API."""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return x_user_id
