from __future__ import annotations

from typing import Any, Dict

from pivotal_tracker.core.client import PivotalTrackerClient
from pivotal_tracker.models import ProjectSummary, summaries


def list_projects(client: PivotalTrackerClient) -> Dict[str, Any]:
    """List projects visible to the authenticated user."""
    doc = client.get_projects()
    items = summaries(doc, "project", ProjectSummary)
    return {"items": items, "total": len(items), "current_project": client.project}
