import logging
import os
from typing import Iterable, Optional

from dotenv import load_dotenv

from .errors import AuthenticationError, ConfigurationError, ResponseParseError
from .rest import RestClient
from .xmldoc import XmlElement, parse_xml

API_URL = "https://www.pivotaltracker.com/services/v3"
TOKEN_HEADER = "X-TrackerToken"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class PivotalTrackerClient:
    """
    Client for the Pivotal Tracker v3 REST API, bound to one project.
    - Builds request paths and form bodies, delegates to RestClient
    - Parses XML responses into XmlElement documents
    - Each method is one request/response round trip (authenticate is two)
    """

    def __init__(
        self,
        project: str,
        *,
        api_url: str = API_URL,
        token: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        rest: Optional[RestClient] = None,
        logger: Optional[logging.Logger] = None,
    ):
        project = str(project or "").strip()
        if not project:
            raise ConfigurationError("project must be provided.")

        self.project = project
        self.log = logger or logging.getLogger("pivotal_tracker.client")
        self._owns_rest = rest is None
        self.rest = rest or RestClient(api_url, timeout_seconds=timeout_seconds)
        self.rest.add_header("Content-type", FORM_CONTENT_TYPE)
        if token:
            self.rest.add_header(TOKEN_HEADER, token)

    @classmethod
    def from_env(cls, **kwargs) -> "PivotalTrackerClient":
        load_dotenv()
        project = os.getenv("PIVOTAL_TRACKER_PROJECT", "").strip()
        api_url = os.getenv("PIVOTAL_TRACKER_API_URL", "").strip() or API_URL
        token = os.getenv("PIVOTAL_TRACKER_TOKEN", "").strip() or None
        if not project:
            raise ConfigurationError("Missing PIVOTAL_TRACKER_PROJECT in environment.")
        kwargs.setdefault("api_url", api_url)
        kwargs.setdefault("token", token)
        return cls(project, **kwargs)

    def close(self) -> None:
        if self._owns_rest:
            self.rest.close()

    def __enter__(self) -> "PivotalTrackerClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def _stories_path(self) -> str:
        return f"/projects/{self.project}/stories"

    def authenticate(self, username: str, password: str) -> None:
        """Fetch a token for the credentials and send it on every later request."""
        self.rest.add_header(TOKEN_HEADER, self.get_token(username, password))
        self.log.info("pt.authenticated", extra={"project": self.project})

    def get_token(self, username: str, password: str) -> str:
        body = self.rest.post(
            "/tokens/active", {"username": username, "password": password}
        )
        try:
            guid = parse_xml(body).child_text("guid")
        except ResponseParseError as exc:
            raise AuthenticationError(
                f"Could not read an API token for {username!r}: {exc}"
            ) from exc
        if not guid:
            raise AuthenticationError(f"Empty API token returned for {username!r}.")
        return guid

    def add_story(self, story_type: str, name: str, description: str) -> XmlElement:
        return parse_xml(
            self.rest.post(
                self._stories_path,
                {
                    "story": {
                        "story_type": story_type,
                        "name": name,
                        "description": description,
                    }
                },
            )
        )

    def add_task(self, story_id: int | str, description: str) -> XmlElement:
        return parse_xml(
            self.rest.post(
                f"{self._stories_path}/{story_id}/tasks",
                {"task": {"description": description}},
            )
        )

    def add_labels(self, story_id: int | str, labels: Iterable[str]) -> XmlElement:
        return parse_xml(
            self.rest.put(
                f"{self._stories_path}/{story_id}",
                {"story": {"labels": ",".join(labels)}},
            )
        )

    def get_stories(self, filter: Optional[str] = None) -> XmlElement:
        return parse_xml(
            self.rest.get(self._stories_path, {"filter": filter} if filter else None)
        )

    def get_projects(self) -> XmlElement:
        return parse_xml(self.rest.get("/projects"))


__all__ = ["PivotalTrackerClient", "API_URL", "TOKEN_HEADER"]
