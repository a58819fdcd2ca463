"""
User models for the seed-only credential store.
Not exercised by the HTTP API.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from enum import Enum
from typing import Optional


class UserRole(str, Enum):
    CLINIC = "clinic"
    REPORTER = "reporter"


class UserCreate(BaseModel):
    """Model for creating a new user."""
    username: str = Field(..., min_length=1, max_length=100, description="Unique login name")
    password: str = Field(..., min_length=1, description="Plaintext password, hashed before storage")
    role: UserRole = Field(default=UserRole.REPORTER, description="clinic or reporter")


class UserRecord(BaseModel):
    """Stored user, without the password hash."""
    id: str = Field(..., description="Firestore document ID")
    username: str
    role: UserRole
    created_at: Optional[datetime] = None
