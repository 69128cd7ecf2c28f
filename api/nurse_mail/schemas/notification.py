"""Pydantic schemas for the notification endpoints."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class _Recipient(BaseModel):
    email: str = Field(..., max_length=254, description="Recipient email address")
    name: str = Field(..., min_length=1, max_length=200, description="Recipient display name")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        v = v.strip()
        if "@" not in v or v.startswith("@") or v.endswith("@"):
            raise ValueError(f"Invalid email address: {v}")
        return v


class VerificationEmailRequest(_Recipient):
    token: str = Field(
        ...,
        min_length=1,
        max_length=512,
        description="Single-use verification token generated by the registration flow",
    )


class WelcomeEmailRequest(_Recipient):
    pass


class DispatchResponse(BaseModel):
    status: str = Field(..., description="sent | sent_with_warning")
    template: str
    warning: Optional[str] = None
