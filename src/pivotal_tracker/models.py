from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .core.errors import TrackerApiError
from .core.xmldoc import XmlElement

StoryType = Literal["feature", "bug", "chore", "release"]


# --- Input Models ---


class StoryCreateInput(BaseModel):
    story_type: StoryType = "feature"
    name: str = Field(min_length=1)
    description: str = ""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class TaskCreateInput(BaseModel):
    story_id: int = Field(gt=0)
    description: str = Field(min_length=1)

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class LabelsInput(BaseModel):
    story_id: int = Field(gt=0)
    labels: List[str] = Field(min_length=1)

    model_config = ConfigDict(extra="forbid")

    @field_validator("labels")
    @classmethod
    def _clean_labels(cls, v: List[str]) -> List[str]:
        cleaned = [label.strip() for label in v if label and label.strip()]
        if not cleaned:
            raise ValueError("labels must contain at least one non-empty label")
        for label in cleaned:
            if "," in label:
                raise ValueError(f"label {label!r} must not contain a comma")
        return cleaned


# --- Summary Models (built from XML documents) ---


def raise_for_api_errors(doc: XmlElement) -> XmlElement:
    """Raise TrackerApiError when doc is an <errors> document; return doc otherwise."""
    if doc.tag == "errors":
        raise TrackerApiError([e.text for e in doc.findall("error") if e.text])
    return doc


def _split_labels(raw: Any) -> List[str]:
    if not raw:
        return []
    return [s.strip() for s in str(raw).split(",") if s.strip()]


class StorySummary(BaseModel):
    id: int
    name: str = ""
    story_type: Optional[str] = None
    current_state: Optional[str] = None
    labels: List[str] = Field(default_factory=list)
    url: Optional[str] = None

    model_config = ConfigDict(extra="ignore")

    @classmethod
    def from_xml(cls, story: XmlElement) -> "StorySummary":
        raise_for_api_errors(story)
        return cls(
            id=int(story.child_text("id")),
            name=story.text_of("name", "") or "",
            story_type=story.text_of("story_type"),
            current_state=story.text_of("current_state"),
            labels=_split_labels(story.text_of("labels")),
            url=story.text_of("url"),
        )


class TaskSummary(BaseModel):
    id: int
    description: str = ""
    complete: bool = False

    model_config = ConfigDict(extra="ignore")

    @classmethod
    def from_xml(cls, task: XmlElement) -> "TaskSummary":
        raise_for_api_errors(task)
        return cls(
            id=int(task.child_text("id")),
            description=task.text_of("description", "") or "",
            complete=(task.text_of("complete") or "").lower() == "true",
        )


class ProjectSummary(BaseModel):
    id: int
    name: str = ""

    model_config = ConfigDict(extra="ignore")

    @classmethod
    def from_xml(cls, project: XmlElement) -> "ProjectSummary":
        raise_for_api_errors(project)
        return cls(
            id=int(project.child_text("id")),
            name=project.text_of("name", "") or "",
        )


def summaries(collection: XmlElement, tag: str, model: Any) -> List[Dict[str, Any]]:
    """Dump every <tag> child of a collection document through model.from_xml."""
    raise_for_api_errors(collection)
    elements = [collection] if collection.tag == tag else collection.findall(tag)
    return [model.from_xml(e).model_dump() for e in elements]


__all__ = [
    "StoryType",
    "StoryCreateInput",
    "TaskCreateInput",
    "LabelsInput",
    "StorySummary",
    "TaskSummary",
    "ProjectSummary",
    "summaries",
    "raise_for_api_errors",
]
