"""Data models for classified webhook events."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict


class EventKind(str, Enum):
    """Kinds of webhook events ghping acts on."""
    COMMENT = "comment"
    ASSIGNMENT = "assignment"
    BUILD_SUCCESS = "build_success"
    BUILD_FAILURE = "build_failure"
    UNRECOGNIZED = "unrecognized"


class ResourceKind(str, Enum):
    """GitHub resource an assignment or comment belongs to."""
    PULL_REQUEST = "pull_request"
    ISSUE = "issue"

    @property
    def label(self) -> str:
        """Human-readable name, e.g. 'pull request'."""
        return self.value.replace("_", " ")


class WebhookEvent(BaseModel):
    """A classified view over a raw webhook payload."""
    model_config = ConfigDict(frozen=True)

    kind: EventKind


class CommentEvent(WebhookEvent):
    """Someone commented on a pull request or issue."""
    kind: EventKind = EventKind.COMMENT
    body: str = ""
    url: Optional[str] = None  # Comment html_url
    commenter: Optional[str] = None  # GitHub login
    context_url: Optional[str] = None  # PR/issue html_url
    owner: Optional[str] = None  # PR/issue author's GitHub login


class AssignmentEvent(WebhookEvent):
    """Someone got assigned to a pull request or issue."""
    kind: EventKind = EventKind.ASSIGNMENT
    resource: ResourceKind
    url: Optional[str] = None
    assignee: Optional[str] = None  # GitHub login


class BuildEvent(WebhookEvent):
    """A CI build finished for a commit."""
    kind: EventKind
    commit_url: Optional[str] = None
    committer: Optional[str] = None  # GitHub login
    sha: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.kind == EventKind.BUILD_SUCCESS


class UnrecognizedEvent(WebhookEvent):
    """Payload ghping has nothing to say about."""
    kind: EventKind = EventKind.UNRECOGNIZED
