"""User profile models."""

from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from learnhub.core.db import TimestampedModel


class UserProfile(TimestampedModel):
    """Personal details linked one-to-one with a user account."""

    user_id: UUID
    first_name: str
    last_name: str
    email: EmailStr
    bio: str = ""


class ProfileView(BaseModel):
    """User profile (API representation)."""

    user_id: UUID = Field(..., description="Owner user ID")
    first_name: str = Field(..., description="First name")
    last_name: str = Field(..., description="Last name")
    email: EmailStr = Field(..., description="Contact email")
    bio: str = Field(..., description="Short biography")

    @classmethod
    def from_domain(cls, profile: UserProfile) -> "ProfileView":
        return cls(
            user_id=profile.user_id,
            first_name=profile.first_name,
            last_name=profile.last_name,
            email=profile.email,
            bio=profile.bio,
        )
