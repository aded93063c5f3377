"""Notification preference policy for ghping."""

from ghping.policy.preferences import PreferenceEvaluator, DeliveryShape

__all__ = [
    "PreferenceEvaluator",
    "DeliveryShape",
]
