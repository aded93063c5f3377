"""
Webhook payload classification.

Turns a decoded GitHub or CI webhook body into typed events. Supported:
- issue_comment / pull_request_review_comment (any payload with a `comment`)
- pull_request.assigned / issues.assigned
- status events with state `success` or `failure`

A single payload can match more than one rule; every match is returned.
"""

import logging
from typing import Any, Dict, List, Optional
from ghping.triggers.models import (
    EventKind,
    ResourceKind,
    WebhookEvent,
    CommentEvent,
    AssignmentEvent,
    BuildEvent,
    UnrecognizedEvent,
)

logger = logging.getLogger(__name__)


def _get(data: Any, *keys: str) -> Any:
    """Walk nested mappings, returning None as soon as a level is missing."""
    for key in keys:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data


def classify(payload: Dict[str, Any]) -> List[WebhookEvent]:
    """
    Classify a webhook payload.

    Returns every event the payload represents, in the order comment,
    assignment, build. Returns [UnrecognizedEvent()] when nothing matches.
    """
    if not isinstance(payload, dict):
        logger.info("Webhook payload is not a JSON object, ignoring")
        return [UnrecognizedEvent()]

    events: List[WebhookEvent] = []

    if payload.get("comment") is not None:
        events.append(_comment_event(payload))

    if payload.get("action") == "assigned":
        assignment = _assignment_event(payload)
        if assignment:
            events.append(assignment)

    state = payload.get("state")
    if state == "success":
        events.append(_build_event(payload, EventKind.BUILD_SUCCESS))
    if state == "failure":
        events.append(_build_event(payload, EventKind.BUILD_FAILURE))

    if not events:
        logger.debug(f"Unrecognized webhook (action={payload.get('action')}, state={state})")
        return [UnrecognizedEvent()]

    logger.info(f"Classified webhook as: {', '.join(e.kind.value for e in events)}")
    return events


def classify_event(payload: Dict[str, Any]) -> WebhookEvent:
    """Classify a payload, keeping only the first matching event."""
    return classify(payload)[0]


def detect_resource(payload: Dict[str, Any]) -> Optional[ResourceKind]:
    """Which resource a payload is about, preferring pull requests."""
    if payload.get("pull_request") is not None:
        return ResourceKind.PULL_REQUEST
    if payload.get("issue") is not None:
        return ResourceKind.ISSUE
    return None


def _comment_event(payload: Dict[str, Any]) -> CommentEvent:
    comment = payload["comment"]
    context = payload.get("pull_request")
    if context is None:
        context = payload.get("issue")

    return CommentEvent(
        body=_get(comment, "body") or "",
        url=_get(comment, "html_url"),
        commenter=_get(comment, "user", "login"),
        context_url=_get(context, "html_url"),
        owner=_get(context, "user", "login"),
    )


def _assignment_event(payload: Dict[str, Any]) -> Optional[AssignmentEvent]:
    resource = detect_resource(payload)
    if resource is None:
        logger.info("Neither pull request nor issue detected in assignment, skipping")
        return None

    data = payload[resource.value]
    assignee = _get(data, "assignee", "login") or _get(payload, "assignee", "login")

    return AssignmentEvent(
        resource=resource,
        url=_get(data, "html_url"),
        assignee=assignee,
    )


def _build_event(payload: Dict[str, Any], kind: EventKind) -> BuildEvent:
    return BuildEvent(
        kind=kind,
        commit_url=_get(payload, "commit", "html_url"),
        committer=_get(payload, "commit", "committer", "login"),
        sha=payload.get("sha"),
    )
