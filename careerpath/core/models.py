"""Typed records shared by the generation services and the user store.

Field aliases keep the camelCase keys used on the wire and in storage
(``stepNumber``, ``joinDate``, ``completedSteps`` ...); every model accepts
either spelling on input and dumps by alias via :func:`to_wire`.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

RESOURCE_CATEGORIES: tuple[str, ...] = ("videos", "documents", "projects", "practice")


class UserRecord(BaseModel):
    """One signed-up user. Keyed by ``email`` inside the user directory."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    email: str
    password: str
    join_date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), alias="joinDate")
    selected_career: Optional[str] = Field(default=None, alias="selectedCareer")
    completed_steps: List[int] = Field(default_factory=list, alias="completedSteps")

    @field_validator("completed_steps", mode="after")
    @classmethod
    def normalize_steps(cls, value: List[int]) -> List[int]:
        if any(index < 0 for index in value):
            raise ValueError("completed step indices must be non-negative")
        return sorted(set(value))

    def has_completed(self, index: int) -> bool:
        return index in self.completed_steps


class CareerStep(BaseModel):
    """One ordered unit of a curriculum."""

    model_config = ConfigDict(populate_by_name=True)

    step_number: int = Field(..., ge=1, alias="stepNumber")
    title: str = Field(..., min_length=1)
    duration: str
    description: str = Field(..., min_length=1)
    skills: List[str] = Field(..., min_length=1)

    @field_validator("title", "description", mode="before")
    @classmethod
    def strip_text(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("duration", mode="before")
    @classmethod
    def coerce_duration(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("skills", mode="after")
    @classmethod
    def drop_blank_skills(cls, value: List[str]) -> List[str]:
        skills = [skill.strip() for skill in value if skill.strip()]
        if not skills:
            raise ValueError("skills must contain at least one non-blank entry")
        return skills


class ResourceItem(BaseModel):
    """A single learning resource (video, document, project or practice platform)."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1)
    description: str = ""
    url: Optional[str] = None
    search_query: Optional[str] = Field(default=None, alias="searchQuery")
    difficulty: str = "beginner"
    duration: str = ""

    @field_validator("url", "search_query", mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("difficulty", "duration", "description", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class ResourceBundle(BaseModel):
    """The four-category resource collection for one step."""

    videos: List[ResourceItem] = Field(default_factory=list)
    documents: List[ResourceItem] = Field(default_factory=list)
    projects: List[ResourceItem] = Field(default_factory=list)
    practice: List[ResourceItem] = Field(default_factory=list)

    def total(self) -> int:
        return sum(len(getattr(self, category)) for category in RESOURCE_CATEGORIES)


def to_wire(model: BaseModel) -> Dict[str, Any]:
    """Dump a model with its wire (camelCase) keys, dropping unset optionals."""
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


__all__ = [
    "RESOURCE_CATEGORIES",
    "CareerStep",
    "ResourceBundle",
    "ResourceItem",
    "UserRecord",
    "to_wire",
]
