from __future__ import annotations

from typing import Any, Dict, List, Optional

from pivotal_tracker.core.client import PivotalTrackerClient
from pivotal_tracker.models import (
    LabelsInput,
    StoryCreateInput,
    StorySummary,
    TaskCreateInput,
    TaskSummary,
    summaries,
)


def add_story(
    client: PivotalTrackerClient,
    name: str,
    description: str = "",
    story_type: str = "feature",
) -> Dict[str, Any]:
    """
    Create a story in the configured project.
    story_type is one of feature, bug, chore, release.
    """
    data = StoryCreateInput(story_type=story_type, name=name, description=description)
    story = client.add_story(data.story_type, data.name, data.description)
    return StorySummary.from_xml(story).model_dump()


def add_task(
    client: PivotalTrackerClient, story_id: int, description: str
) -> Dict[str, Any]:
    """Add a task to an existing story."""
    data = TaskCreateInput(story_id=story_id, description=description)
    task = client.add_task(data.story_id, data.description)
    return TaskSummary.from_xml(task).model_dump()


def add_labels(
    client: PivotalTrackerClient, story_id: int, labels: List[str]
) -> Dict[str, Any]:
    """Set the labels of a story; returns the updated story."""
    data = LabelsInput(story_id=story_id, labels=labels)
    story = client.add_labels(data.story_id, data.labels)
    return StorySummary.from_xml(story).model_dump()


def list_stories(
    client: PivotalTrackerClient, filter: Optional[str] = None
) -> Dict[str, Any]:
    """
    List stories of the configured project.
    filter uses Tracker's search syntax, e.g. "state:started label:bug".
    """
    doc = client.get_stories((filter or "").strip() or None)
    items = summaries(doc, "story", StorySummary)
    return {"items": items, "total": len(items), "filter": filter or None}
