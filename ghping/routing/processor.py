"""
Webhook processor.

Runs the routing engine for one payload and hands the results to a sink:
1. Alert operators about GitHub logins nobody configured
2. Deliver each notification, in order
"""

import logging
from typing import Any, Dict, Protocol
from ghping.routing.engine import RoutingEngine
from ghping.routing.models import NotificationIntent, RoutingResult

logger = logging.getLogger(__name__)


class NotificationSink(Protocol):
    """Something that can send notifications, e.g. SlackNotifier."""

    async def deliver(self, intent: NotificationIntent) -> None:
        ...

    async def alert_operator(self, message: str) -> None:
        ...


def unresolved_handle_message(handle: str) -> str:
    return f"Could not find an engineer with GitHub handle {handle}, please configure ghping."


async def process_webhook(
    payload: Dict[str, Any],
    engine: RoutingEngine,
    sink: NotificationSink
) -> RoutingResult:
    """
    Route a webhook payload and dispatch the result.

    Delivery failures are logged, never raised: a missed ping is better
    than a failing webhook receiver.
    """
    result = engine.process(payload)
    await dispatch(result, sink)
    return result


async def dispatch(result: RoutingResult, sink: NotificationSink) -> None:
    """Send operator alerts, then notifications, for a routing result."""
    for handle in result.unresolved_handles:
        try:
            await sink.alert_operator(unresolved_handle_message(handle))
        except Exception as e:
            logger.error(f"Failed to alert operators about {handle}: {e}", exc_info=True)

    for intent in result.intents:
        try:
            await sink.deliver(intent)
        except Exception as e:
            logger.error(f"Failed to deliver notification to {intent.recipient_chat_handle}: {e}", exc_info=True)

    logger.info(f"GitHub hook processed: {len(result.intents)} notification(s)")
