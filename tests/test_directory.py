"""Tests for the engineer directory and roster loading."""

import pytest
from pydantic import ValidationError
from ghping.directory import (
    EngineerDirectory,
    EngineerRecord,
    CommentFrequency,
    PingLocation,
    BuildFrequency,
    ConfigError,
    load_engineers,
)
from ghping.directory.config import parse_engineers


ROSTER = """
engineers:
  "Taylor Lapeyre":
    usernames:
      slack: taylor
      github: taylorlapeyre
    github_preferences:
      frequency: only_mentions
      ping_location: eng_pr
    travis_preferences:
      frequency: only_failures
  "Sam New":
    usernames:
      slack: sam
      github: samgh
    travis_preferences:
      frequency: all_discussion
"""


class TestEngineerDirectory:

    def test_lookups(self, directory):
        assert directory.find_by_github_handle("erin-gh").name == "Erin Quiet"
        assert directory.find_by_chat_handle("erin").name == "Erin Quiet"
        assert directory.find_by_name("Erin Quiet").github_handle == "erin-gh"

    def test_unknown_handles_return_none(self, directory):
        assert directory.find_by_github_handle("nobody") is None
        assert directory.find_by_chat_handle("nobody") is None
        assert directory.find_by_name("Nobody") is None
        assert directory.find_by_github_handle(None) is None
        assert directory.find_by_github_handle("") is None

    def test_lookup_by_name_is_not_a_handle_lookup(self, directory):
        assert directory.find_by_name("bob") is None
        assert directory.find_by_github_handle("Bob Builder") is None

    def test_records_without_handles(self):
        directory = EngineerDirectory([EngineerRecord(name="Ghost")])

        assert directory.find_by_github_handle("ghost") is None
        assert directory.find_by_name("Ghost").chat_handle is None

    def test_first_match_wins(self):
        directory = EngineerDirectory([
            EngineerRecord(name="First", github_handle="same"),
            EngineerRecord(name="Second", github_handle="same"),
        ])

        assert directory.find_by_github_handle("same").name == "First"

    def test_duplicate_names_rejected(self):
        with pytest.raises(ValueError):
            EngineerDirectory([EngineerRecord(name="A"), EngineerRecord(name="A")])

    def test_size_and_iteration(self, directory):
        assert len(directory) == 7
        assert [e.name for e in directory] == directory.names

    def test_records_are_immutable(self, directory):
        with pytest.raises(ValidationError):
            directory.find_by_name("Bob Builder").chat_handle = "robert"


class TestLoadEngineers:

    def test_load_roster(self, tmp_path):
        path = tmp_path / "engineers.yaml"
        path.write_text(ROSTER)

        engineers = {e.name: e for e in load_engineers(path)}

        taylor = engineers["Taylor Lapeyre"]
        assert taylor.chat_handle == "taylor"
        assert taylor.github_handle == "taylorlapeyre"
        assert taylor.pr_preference.frequency == CommentFrequency.ONLY_MENTIONS
        assert taylor.pr_preference.location == PingLocation.SHARED_CHANNEL
        assert taylor.build_preference.frequency == BuildFrequency.ONLY_FAILURES

        sam = engineers["Sam New"]
        assert sam.pr_preference.frequency == CommentFrequency.UNSET
        assert sam.pr_preference.location == PingLocation.UNSET
        assert sam.build_preference.frequency == BuildFrequency.EVERYTHING

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_engineers(tmp_path / "missing.yaml")

    def test_empty_roster(self, tmp_path):
        path = tmp_path / "engineers.yaml"
        path.write_text("engineers: {}\n")

        with pytest.raises(ConfigError):
            load_engineers(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "engineers.yaml"
        path.write_text("engineers: [unclosed\n")

        with pytest.raises(ConfigError):
            load_engineers(path)

    def test_unquoted_off_in_roster(self, tmp_path):
        path = tmp_path / "engineers.yaml"
        path.write_text(
            "engineers:\n"
            "  Erin:\n"
            "    usernames: {slack: erin, github: erin-gh}\n"
            "    github_preferences:\n"
            "      frequency: off\n"
            "    travis_preferences:\n"
            "      frequency: off\n"
        )

        erin = load_engineers(path)[0]

        assert erin.pr_preference.frequency == CommentFrequency.OFF
        assert erin.build_preference.frequency == BuildFrequency.OFF

    def test_yaml_true_is_not_a_preference(self, tmp_path):
        path = tmp_path / "engineers.yaml"
        path.write_text("engineers:\n  Erin:\n    github_preferences:\n      frequency: on\n")

        with pytest.raises(ConfigError):
            load_engineers(path)

    def test_invalid_preference(self):
        config = {"Pat": {"usernames": {"slack": "pat"}, "github_preferences": {"frequency": "sometimes"}}}

        with pytest.raises(ConfigError):
            parse_engineers(config)

    def test_preference_tokens_are_case_insensitive(self):
        config = {"Pat": {"github_preferences": {"frequency": "Only_Mentions", "ping_location": "ENG-PR"}}}

        pat = parse_engineers(config)[0]

        assert pat.pr_preference.frequency == CommentFrequency.ONLY_MENTIONS
        assert pat.pr_preference.location == PingLocation.SHARED_CHANNEL
