# futurehire/models/identity.py
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def normalize_email(email: str) -> str:
    # uniqueness of identities is case-insensitive
    return email.strip().lower()


class TestAttempt(BaseModel):
    # not a pytest test class
    __test__ = False

    test_id: str
    result: Dict[str, Any] = Field(default_factory=dict)
    submitted_at: datetime = Field(default_factory=utcnow)


class IdentityPublic(BaseModel):
    """Everything about an identity that may leave the service."""
    id: str
    name: str
    email: str
    mobile: Optional[str] = None
    preferences: Dict[str, Any] = Field(default_factory=dict)
    test_history: List[TestAttempt] = Field(default_factory=list)
    resume_analysis: Optional[Dict[str, Any]] = None
    created_at: datetime


class Identity(IdentityPublic):
    password_hash: str = Field(repr=False)

    def public(self) -> IdentityPublic:
        return IdentityPublic(**self.model_dump(exclude={"password_hash"}))


class UserSummary(BaseModel):
    id: str
    name: str
    email: str
