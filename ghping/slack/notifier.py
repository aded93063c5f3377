"""
Slack notification sink.

Delivers NotificationIntents through the Slack Web API:
- direct messages go to the recipient's Slack user
- shared channel pings go to #eng-pr (configurable)
- anything we can't deliver is reported to the operator channel
"""

import logging
from typing import Any, Dict, Optional
import httpx
from ghping.policy.preferences import DeliveryShape
from ghping.routing.models import NotificationIntent, ChatUser

logger = logging.getLogger(__name__)

SLACK_API_URL = "https://slack.com/api"


class SlackError(Exception):
    """Slack answered with ok: false."""

    def __init__(self, method: str, error: str):
        super().__init__(f"Slack API error on {method}: {error}")
        self.method = method
        self.error = error


def missing_user_message(username: str) -> str:
    return f"Could not find user with name {username}, please configure ghping."


class SlackNotifier:
    """Sends ghping notifications to Slack and resolves Slack usernames."""

    def __init__(
        self,
        token: Optional[str],
        shared_channel: str = "eng-pr",
        operator_channel: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0
    ):
        self.token = token
        self.shared_channel = shared_channel
        self.operator_channel = operator_channel or shared_channel
        self.transport = transport
        self.timeout = timeout
        self._users: Dict[str, ChatUser] = {}

    def _headers(self) -> dict:
        """Get Slack API headers."""
        if not self.token:
            raise ValueError("SLACK_BOT_TOKEN not configured")
        return {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json; charset=utf-8"
        }

    async def _call(self, method: str, payload: Optional[Dict[str, Any]] = None, params: Optional[Dict[str, Any]] = None) -> dict:
        """Call a Slack Web API method, raising SlackError when ok is false."""
        headers = self._headers()

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            if payload is None:
                response = await client.get(f"{SLACK_API_URL}/{method}", headers=headers, params=params)
            else:
                response = await client.post(f"{SLACK_API_URL}/{method}", headers=headers, json=payload)
            response.raise_for_status()
            result = response.json()

        # Slack reports errors with a 200 status
        if not result.get("ok"):
            raise SlackError(method, result.get("error", "unknown_error"))

        return result

    async def refresh_users(self) -> int:
        """
        Reload the Slack user cache used by resolve_chat_user.

        Users are indexed by username, display name and real name
        (case-insensitive). Returns the number of users loaded.
        """
        users: Dict[str, ChatUser] = {}
        cursor = None
        count = 0

        while True:
            params = {"limit": 200}
            if cursor:
                params["cursor"] = cursor
            result = await self._call("users.list", params=params)

            for member in result.get("members", []):
                if member.get("deleted"):
                    continue
                user = ChatUser(id=member["id"], name=member.get("name", ""))
                profile = member.get("profile", {})
                for key in (member.get("name"), profile.get("display_name"), member.get("real_name")):
                    if key:
                        users.setdefault(key.lower(), user)
                count += 1

            cursor = result.get("response_metadata", {}).get("next_cursor")
            if not cursor:
                break

        self._users = users
        logger.info(f"Loaded {count} Slack users")
        return count

    def resolve_chat_user(self, handle: str) -> Optional[ChatUser]:
        """Find a Slack user by name in the cached user list."""
        if not handle:
            return None
        return self._users.get(handle.lstrip("@").lower())

    async def post_message(self, channel: str, text: str, **extra: Any) -> dict:
        """Post a message to a Slack channel or user."""
        payload = {"channel": channel, "text": text, **extra}
        logger.info(f"Posting to Slack {channel}: {text[:50]}...")
        result = await self._call("chat.postMessage", payload)
        logger.info(f"Successfully posted to Slack: {result.get('ts')}")
        return result

    async def alert_operator(self, message: str) -> None:
        """Tell #eng-pr (or the operator channel) about a problem."""
        await self.post_message(f"#{self.operator_channel}", message)

    async def send_dm(self, username: str, content: str) -> bool:
        """
        DM a Slack user by username.

        Falls back to alerting the operator channel when the user can't be found.
        """
        user = self.resolve_chat_user(username)
        if user is None:
            # Might be a Slack user who joined after the cache was loaded
            try:
                await self.refresh_users()
            except (SlackError, httpx.HTTPError) as e:
                logger.warning(f"Could not refresh Slack users: {e}")
            user = self.resolve_chat_user(username)

        if user is None:
            logger.warning(f"Could not find Slack user {username}")
            await self.alert_operator(missing_user_message(username))
            return False

        await self.post_message(user.id, content)
        return True

    async def deliver(self, intent: NotificationIntent) -> None:
        if intent.shape == DeliveryShape.SHARED_CHANNEL:
            await self.post_message(f"#{self.shared_channel}", intent.body, link_names=True)
        else:
            await self.send_dm(intent.recipient_chat_handle, intent.body)
