"""
Pydantic models for push-notification device tokens.
"""

from pydantic import BaseModel, Field
from typing import Optional


class SaveTokenRequest(BaseModel):
    """Body of POST /save-token. Presence of token is checked by the registry."""
    token: Optional[str] = Field(None, description="FCM registration token")


class OkResponse(BaseModel):
    ok: bool = True
