from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from learnhub.core.db import TimestampedModel


class User(TimestampedModel):
    """User domain model with credentials."""

    name: str
    email: str  # login identifier, unique
    password_hash: str  # bcrypt hash
    is_instructor: bool = False
    learner_courses: list[UUID] = Field(default_factory=list)  # Courses the user is enrolled in
    instructor_courses: list[UUID] = Field(default_factory=list)  # Courses the user teaches


class UserView(BaseModel):
    """User account information (API representation)."""

    id: UUID = Field(..., description="User ID")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Email address used to log in")
    is_instructor: bool = Field(..., description="Whether the user can create courses")
    learner_courses: list[UUID] = Field(..., description="IDs of courses the user is enrolled in")
    instructor_courses: list[UUID] = Field(..., description="IDs of courses the user teaches")
    created_at: datetime = Field(..., description="Registration timestamp")

    @classmethod
    def from_domain(cls, user: User) -> "UserView":
        """Create view model from domain model."""
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            is_instructor=user.is_instructor,
            learner_courses=user.learner_courses,
            instructor_courses=user.instructor_courses,
            created_at=user.created_at,
        )
