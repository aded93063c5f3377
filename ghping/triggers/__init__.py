"""Webhook event classification for ghping."""

from ghping.triggers.models import (
    EventKind,
    ResourceKind,
    WebhookEvent,
    CommentEvent,
    AssignmentEvent,
    BuildEvent,
    UnrecognizedEvent,
)
from ghping.triggers.classifier import classify, classify_event
from ghping.triggers.mentions import extract_mentions

__all__ = [
    "EventKind",
    "ResourceKind",
    "WebhookEvent",
    "CommentEvent",
    "AssignmentEvent",
    "BuildEvent",
    "UnrecognizedEvent",
    "classify",
    "classify_event",
    "extract_mentions",
]
