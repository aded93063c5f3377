"""Tests for webhook payload classification."""

from ghping.triggers import (
    classify,
    classify_event,
    EventKind,
    ResourceKind,
    CommentEvent,
    AssignmentEvent,
    BuildEvent,
    UnrecognizedEvent,
)


def status_payload(state, login="frank-gh"):
    return {
        "sha": "abc123",
        "state": state,
        "commit": {
            "html_url": "https://github.com/acme/repo/commit/abc123",
            "committer": {"login": login},
        },
    }


class TestCommentClassification:

    def test_issue_comment(self, comment_payload):
        events = classify(comment_payload)

        assert len(events) == 1
        event = events[0]
        assert isinstance(event, CommentEvent)
        assert event.kind == EventKind.COMMENT
        assert event.body == "@carol thanks!"
        assert event.url == "U"
        assert event.commenter == "bob"
        assert event.context_url == "U2"
        assert event.owner == "dave"

    def test_pull_request_preferred_over_issue(self, comment_payload):
        comment_payload["pull_request"] = {"html_url": "PR", "user": {"login": "carol"}}

        event = classify_event(comment_payload)

        assert event.context_url == "PR"
        assert event.owner == "carol"

    def test_comment_without_context(self):
        event = classify_event({"comment": {"body": "hi", "user": {"login": "bob"}}})

        assert isinstance(event, CommentEvent)
        assert event.owner is None
        assert event.context_url is None

    def test_null_comment_is_not_a_comment(self):
        assert isinstance(classify_event({"comment": None}), UnrecognizedEvent)


class TestAssignmentClassification:

    def test_pull_request_assignment(self):
        payload = {
            "action": "assigned",
            "pull_request": {
                "html_url": "https://github.com/acme/repo/pull/7",
                "assignee": {"login": "dave"},
            },
        }

        event = classify_event(payload)

        assert isinstance(event, AssignmentEvent)
        assert event.resource == ResourceKind.PULL_REQUEST
        assert event.resource.label == "pull request"
        assert event.assignee == "dave"
        assert event.url == "https://github.com/acme/repo/pull/7"

    def test_issue_assignment_falls_back_to_top_level_assignee(self):
        payload = {
            "action": "assigned",
            "issue": {"html_url": "https://github.com/acme/repo/issues/3"},
            "assignee": {"login": "carol"},
        }

        event = classify_event(payload)

        assert event.resource == ResourceKind.ISSUE
        assert event.assignee == "carol"

    def test_assignment_without_resource_is_dropped(self):
        assert classify({"action": "assigned"}) == [UnrecognizedEvent()]

    def test_other_actions_ignored(self):
        payload = {"action": "opened", "pull_request": {"html_url": "x"}}
        assert isinstance(classify_event(payload), UnrecognizedEvent)


class TestBuildClassification:

    def test_success(self):
        event = classify_event(status_payload("success"))

        assert isinstance(event, BuildEvent)
        assert event.kind == EventKind.BUILD_SUCCESS
        assert event.passed is True
        assert event.committer == "frank-gh"
        assert event.sha == "abc123"

    def test_failure(self):
        event = classify_event(status_payload("failure"))

        assert event.kind == EventKind.BUILD_FAILURE
        assert event.passed is False

    def test_pending_is_unrecognized(self):
        assert isinstance(classify_event(status_payload("pending")), UnrecognizedEvent)

    def test_missing_committer(self):
        payload = status_payload("failure")
        payload["commit"]["committer"] = None

        event = classify_event(payload)

        assert event.committer is None


class TestClassify:

    def test_unrecognized_payloads(self):
        assert classify({}) == [UnrecognizedEvent()]
        assert classify({"zen": "Keep it logically awesome."}) == [UnrecognizedEvent()]
        assert classify(["not", "a", "dict"]) == [UnrecognizedEvent()]

    def test_multiple_kinds_in_one_payload(self, comment_payload):
        comment_payload.update(status_payload("failure"))

        kinds = [event.kind for event in classify(comment_payload)]

        assert kinds == [EventKind.COMMENT, EventKind.BUILD_FAILURE]

    def test_classification_is_idempotent(self, comment_payload):
        assert classify(comment_payload) == classify(comment_payload)
