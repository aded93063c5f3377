"""ghping - GitHub and CI webhook notifications routed to Slack."""

__version__ = "0.1.0"
