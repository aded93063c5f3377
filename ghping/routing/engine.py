"""
Notification routing engine.

Decides who gets pinged about a webhook event, how, and with what message:
1. Classify the payload
2. Resolve GitHub logins to engineers
3. Apply each engineer's preferences
4. Emit one NotificationIntent per recipient

Pure in-memory work; delivery happens elsewhere (see ghping.routing.processor).
"""

import logging
from typing import Any, Callable, Dict, List, Optional
from ghping.directory import EngineerDirectory, EngineerRecord
from ghping.policy.preferences import PreferenceEvaluator, DeliveryShape
from ghping.routing.models import NotificationIntent, RoutingResult, ChatUser
from ghping.triggers.classifier import classify
from ghping.triggers.mentions import extract_mentions
from ghping.triggers.models import (
    WebhookEvent,
    CommentEvent,
    AssignmentEvent,
    BuildEvent,
)

logger = logging.getLogger(__name__)

BUILD_PASSED_MESSAGE = ":white_check_mark: Your commit has passed its CI build."
BUILD_FAILED_MESSAGE = ":x: Your commit failed some tests."


class RoutingEngine:
    """Turns webhook payloads into notification intents."""

    def __init__(
        self,
        directory: EngineerDirectory,
        evaluator: Optional[PreferenceEvaluator] = None,
        extract: Callable[[str], List[str]] = extract_mentions,
        resolve_chat_user: Optional[Callable[[str], Optional[ChatUser]]] = None
    ):
        """
        Args:
            directory: Engineer directory, shared read-only
            evaluator: Preference policy (default PreferenceEvaluator())
            extract: Mention extractor for comment bodies
            resolve_chat_user: Optional Slack lookup used to embed a clickable
                mention of the commenter in direct messages
        """
        self.directory = directory
        self.evaluator = evaluator or PreferenceEvaluator()
        self.extract = extract
        self.resolve_chat_user = resolve_chat_user

    def handle_webhook(self, payload: Dict[str, Any]) -> List[NotificationIntent]:
        """Route a raw webhook payload to the notifications it should produce."""
        return self.process(payload).intents

    def process(self, payload: Dict[str, Any]) -> RoutingResult:
        """Classify a payload and route every event it represents."""
        result = RoutingResult()
        for event in classify(payload):
            result.extend(self.route(event))
        return result

    def route(self, event: WebhookEvent) -> RoutingResult:
        """Route a single classified event."""
        if isinstance(event, CommentEvent):
            return self._route_comment(event)
        if isinstance(event, AssignmentEvent):
            return self._route_assignment(event)
        if isinstance(event, BuildEvent):
            return self._route_build(event)
        return RoutingResult()

    def _resolve(self, handle: Optional[str], role: str, result: RoutingResult) -> Optional[EngineerRecord]:
        """Look up a GitHub login, noting it on the result when unknown."""
        engineer = self.directory.find_by_github_handle(handle)
        if engineer is None:
            logger.warning(f"No engineer configured for {role} '{handle}'")
            if handle and handle not in result.unresolved_handles:
                result.unresolved_handles.append(handle)
        return engineer

    def _route_comment(self, event: CommentEvent) -> RoutingResult:
        result = RoutingResult()
        logger.info(f"Routing comment {event.url}")

        # Might be a new engineer around that hasn't set up their config
        commenter = self._resolve(event.commenter, "commenter", result)
        owner = self._resolve(event.owner, "owner", result)
        if commenter is None or owner is None:
            return result

        candidates: Dict[str, EngineerRecord] = {}

        # The owner hears about discussion on their PR, but not about their own comments
        owner_included = (
            owner.name != commenter.name
            and self.evaluator.should_notify_for_comment(owner, is_pr_owner=True, is_explicitly_mentioned=False)
        )
        if owner_included:
            candidates[owner.name] = owner

        mentioned = set()
        for handle in self.extract(event.body):
            engineer = self.directory.find_by_github_handle(handle)
            if engineer is None:
                logger.debug(f"Mention @{handle} is not a configured engineer")
                continue
            mentioned.add(engineer.name)
            candidates.setdefault(engineer.name, engineer)

        logger.info(f"Engineers to ping: {list(candidates)}")

        for engineer in candidates.values():
            if not self.evaluator.wants_comments(engineer):
                logger.info(f"{engineer.name} turned comment notifications off")
                continue

            is_owner = owner_included and engineer.name == owner.name
            if not self.evaluator.should_notify_for_comment(engineer, is_owner, engineer.name in mentioned):
                continue

            if not engineer.chat_handle:
                logger.warning(f"{engineer.name} has no Slack username, skipping")
                continue

            shape = self.evaluator.location_for_comment(engineer)
            if shape == DeliveryShape.SHARED_CHANNEL:
                body = f"@{engineer.chat_handle}, new PR mention: {event.url or ''}\n{event.body}"
            else:
                body = f"New PR comment from {self._chat_reference(commenter)}:\n{event.url or ''}\n{event.body}"

            result.intents.append(NotificationIntent(
                recipient_chat_handle=engineer.chat_handle,
                shape=shape,
                body=body,
            ))

        return result

    def _route_assignment(self, event: AssignmentEvent) -> RoutingResult:
        result = RoutingResult()
        logger.info(f"Someone got assigned to a {event.resource.label}")

        assignee = self._resolve(event.assignee, "assignee", result)
        if assignee is None:
            return result

        message = f"*Heads up!* You've been assigned to review a {event.resource.label}:\n{event.url or ''}"
        self._direct_message(assignee, message, result)
        return result

    def _route_build(self, event: BuildEvent) -> RoutingResult:
        result = RoutingResult()
        outcome = "success" if event.passed else "failure"
        logger.info(f"CI build {outcome} for commit {event.sha}")

        committer = self._resolve(event.committer, "committer", result)
        if committer is None:
            return result

        if not self.evaluator.should_notify_for_build(committer, event.passed):
            logger.info(f"{committer.name} does not want build {outcome} notifications")
            return result

        status = BUILD_PASSED_MESSAGE if event.passed else BUILD_FAILED_MESSAGE
        self._direct_message(committer, f"{status}\n{event.commit_url or ''}", result)
        return result

    def _direct_message(self, engineer: EngineerRecord, body: str, result: RoutingResult) -> None:
        if not engineer.chat_handle:
            logger.warning(f"{engineer.name} has no Slack username, skipping")
            return
        result.intents.append(NotificationIntent(
            recipient_chat_handle=engineer.chat_handle,
            shape=DeliveryShape.DIRECT_MESSAGE,
            body=body,
        ))

    def _chat_reference(self, engineer: EngineerRecord) -> str:
        """Slack mention for an engineer, clickable when we can resolve them."""
        handle = engineer.chat_handle or engineer.name
        if self.resolve_chat_user and engineer.chat_handle:
            user = self.resolve_chat_user(engineer.chat_handle)
            if user:
                return user.mention
        return f"@{handle}"
