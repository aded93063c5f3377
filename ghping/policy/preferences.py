"""
Per-engineer notification preferences.

The only place that knows what an UNSET preference means:
- comment frequency defaults to all_discussion
- ping location defaults to a direct message
- build frequency defaults to everything
"""

from enum import Enum
from ghping.directory.models import (
    EngineerRecord,
    CommentFrequency,
    PingLocation,
    BuildFrequency,
)


class DeliveryShape(str, Enum):
    """How a notification reaches its recipient."""
    DIRECT_MESSAGE = "direct_message"
    SHARED_CHANNEL = "shared_channel"


class PreferenceEvaluator:
    """Decides whether, and how, an engineer hears about an event."""

    def comment_frequency(self, engineer: EngineerRecord) -> CommentFrequency:
        frequency = engineer.pr_preference.frequency
        if frequency == CommentFrequency.UNSET:
            return CommentFrequency.ALL_DISCUSSION
        return frequency

    def build_frequency(self, engineer: EngineerRecord) -> BuildFrequency:
        frequency = engineer.build_preference.frequency
        if frequency == BuildFrequency.UNSET:
            return BuildFrequency.EVERYTHING
        return frequency

    def wants_comments(self, engineer: EngineerRecord) -> bool:
        """False when the engineer turned comment notifications off."""
        return self.comment_frequency(engineer) != CommentFrequency.OFF

    def should_notify_for_comment(
        self,
        engineer: EngineerRecord,
        is_pr_owner: bool,
        is_explicitly_mentioned: bool
    ) -> bool:
        """
        Check if a comment should ping this engineer.

        Args:
            engineer: Candidate recipient
            is_pr_owner: Engineer owns the PR/issue and is not the commenter
            is_explicitly_mentioned: Engineer was @mentioned in the comment
        """
        frequency = self.comment_frequency(engineer)

        if frequency == CommentFrequency.OFF:
            return False
        if frequency == CommentFrequency.ONLY_MENTIONS:
            return is_explicitly_mentioned
        return is_pr_owner or is_explicitly_mentioned

    def location_for_comment(self, engineer: EngineerRecord) -> DeliveryShape:
        if engineer.pr_preference.location == PingLocation.SHARED_CHANNEL:
            return DeliveryShape.SHARED_CHANNEL
        return DeliveryShape.DIRECT_MESSAGE

    def should_notify_for_build(self, engineer: EngineerRecord, passed: bool) -> bool:
        """Check if a build outcome should ping the committer."""
        frequency = self.build_frequency(engineer)

        if frequency == BuildFrequency.OFF:
            return False
        if frequency == BuildFrequency.ONLY_PASSES:
            return passed
        if frequency == BuildFrequency.ONLY_FAILURES:
            return not passed
        return True
