"""Course content models: courses built from modules and assessments."""

from enum import StrEnum
from typing import Annotated, Literal, Self
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from learnhub.core.db import TimestampedModel

MIN_OPTIONS = 2
MAX_OPTIONS = 26  # One per letter, A-Z


class ModuleType(StrEnum):
    """Media type of a learning module."""

    AUDIO = "Audio"
    VIDEO = "Video"
    MARKDOWN = "Markdown"


class Chapter(BaseModel):
    """Named position inside an audio or video module."""

    title: str = Field(..., min_length=1, description="Chapter title")
    time_index: float | None = Field(None, ge=0, description="Offset in seconds from the start of the media")


class Question(BaseModel):
    """Multiple choice question."""

    question: str = Field(..., min_length=1, description="Question text")
    options: list[str] = Field(..., description=f"Answer options ({MIN_OPTIONS} to {MAX_OPTIONS})")
    correct_option: int = Field(..., description="Index of the correct option")
    answer: int | None = Field(None, description="Index of the option the learner picked")
    explanation: str | None = Field(None, description="Explanation shown after answering")

    @model_validator(mode="after")
    def check_indexes(self) -> Self:
        if not MIN_OPTIONS <= len(self.options) <= MAX_OPTIONS:
            raise ValueError(f"The number of options must be between {MIN_OPTIONS} and {MAX_OPTIONS}")
        if not 0 <= self.correct_option < len(self.options):
            raise ValueError(f"The correct option must be between 0 and {len(self.options) - 1}")
        if self.answer is not None and not 0 <= self.answer < len(self.options):
            raise ValueError(f"The answer number must be between 0 and {len(self.options) - 1}")
        return self


class Module(BaseModel):
    """Lesson component holding audio, video or markdown content."""

    kind: Literal["module"] = "module"
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    type: ModuleType
    chapters: list[Chapter] = Field(default_factory=list, description="Required for Audio and Video, forbidden for Markdown")
    url: str | None = Field(None, description="Location of the module content")
    completed: bool = False

    @model_validator(mode="after")
    def check_chapters(self) -> Self:
        if self.type in (ModuleType.AUDIO, ModuleType.VIDEO) and not self.chapters:
            raise ValueError("Chapters field is required when type is Audio or Video")
        if self.type == ModuleType.MARKDOWN and self.chapters:
            raise ValueError("Chapters field cannot be present when type is Markdown")
        return self


class Assessment(BaseModel):
    """Quiz component made of questions."""

    kind: Literal["assessment"] = "assessment"
    title: str = Field(..., min_length=1)
    questions: list[Question] = Field(default_factory=list)
    current_question: int = 0

    @model_validator(mode="after")
    def check_current_question(self) -> Self:
        if not 0 <= self.current_question <= len(self.questions):
            raise ValueError(f"Current question must be at least 0 and no greater than {len(self.questions)}")
        return self


Component = Annotated[Module | Assessment, Field(discriminator="kind")]


class CourseContent(BaseModel):
    """Editable part of a course."""

    title: str = Field(..., min_length=1, description="Course title")
    description: str = Field("", description="Course description")
    components: list[Component] = Field(default_factory=list, description="Modules and assessments in order")
    current_component: int = Field(0, description="Index of the component in progress")
    credential_earned: int | None = Field(None, ge=0, description="Credential points awarded on completion")

    @model_validator(mode="after")
    def check_current_component(self) -> Self:
        if not 0 <= self.current_component <= len(self.components):
            raise ValueError(f"Current component must be at least 0 and no greater than {len(self.components)}")
        return self


class Course(TimestampedModel, CourseContent):
    """Course document owned by an instructor."""

    instructor_id: UUID
