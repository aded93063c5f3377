"""Slack delivery for ghping."""

from ghping.slack.notifier import SlackNotifier, SlackError

__all__ = [
    "SlackNotifier",
    "SlackError",
]
