"""Shared fixtures for ghping tests."""

import pytest
from ghping.directory import (
    EngineerDirectory,
    EngineerRecord,
    PrPreference,
    BuildPreference,
)


def engineer(name, slack, github, frequency=None, location=None, build=None):
    return EngineerRecord(
        name=name,
        chat_handle=slack,
        github_handle=github,
        pr_preference=PrPreference(frequency=frequency, location=location),
        build_preference=BuildPreference(frequency=build),
    )


@pytest.fixture
def directory():
    """A small team with a mix of preferences."""
    return EngineerDirectory([
        engineer("Bob Builder", "bob", "bob"),
        engineer("Dave Owner", "dave", "dave", frequency="all_discussion", location="dm"),
        engineer("Carol Reviewer", "carol", "carol", frequency="only_mentions", location="eng-pr"),
        engineer("Erin Quiet", "erin", "erin-gh", frequency="off"),
        engineer("Frank Failures", "frank", "frank-gh", build="only_failures"),
        engineer("Gina Passes", "gina", "gina-gh", build="only_passes"),
        engineer("Hank Silent", "hank", "hank-gh", build="off"),
    ])


@pytest.fixture
def comment_payload():
    """An issue comment from bob on dave's issue mentioning carol."""
    return {
        "action": "created",
        "comment": {
            "body": "@carol thanks!",
            "html_url": "U",
            "user": {"login": "bob"},
        },
        "issue": {
            "html_url": "U2",
            "user": {"login": "dave"},
        },
    }
