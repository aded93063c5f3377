"""Notification routing for ghping - from webhook payload to Slack pings."""

from ghping.routing.models import NotificationIntent, RoutingResult, ChatUser
from ghping.routing.engine import RoutingEngine
from ghping.routing.processor import process_webhook, dispatch, NotificationSink

__all__ = [
    "NotificationIntent",
    "RoutingResult",
    "ChatUser",
    "RoutingEngine",
    "process_webhook",
    "dispatch",
    "NotificationSink",
]
