"""Unit tests for event payload parsing and loading."""

import json

import pytest
from pydantic import ValidationError

from preview_bot.exceptions import MalformedEventError
from preview_bot.models.enums import EventAction
from preview_bot.models.event import load_event_payload, parse_event
from tests.fixtures import HEAD_SHA, make_event_payload


class TestParseEvent:
    """Tests for parse_event."""

    def test_parses_opened_event(self, event_payload):
        """
        Why: The flows need the repo name, PR number and head SHA
        What: Tests that a GitHub-shaped payload becomes a typed event
        How: Parses the standard fixture payload
        """
        event = parse_event(event_payload)

        assert event.action is EventAction.OPENED
        assert event.raw_action == "opened"
        assert event.repository.name == "docs-site"
        assert event.repository.full_name == "acme/docs-site"
        assert event.pull_request.number == 42
        assert event.pull_request.head_sha == HEAD_SHA
        assert event.pull_request.short_sha == "abc1234"
        assert str(event) == "PR #42 from acme/docs-site (action: opened)"

    def test_unknown_action_is_other(self):
        event = parse_event(make_event_payload(action="labeled"))

        assert event.action is EventAction.OTHER
        assert event.raw_action == "labeled"

    @pytest.mark.parametrize("field", ["action", "repository", "pull_request"])
    def test_missing_required_field(self, event_payload, field):
        """
        Why: Malformed events must stop the run before any side effect
        What: Tests each required top-level field is enforced
        How: Removes the field and checks the reported missing fields
        """
        del event_payload[field]

        with pytest.raises(MalformedEventError) as exc_info:
            parse_event(event_payload)

        assert exc_info.value.missing_fields == [field]
        assert exc_info.value.step == "intake"

    def test_empty_payload_lists_all_fields(self):
        with pytest.raises(MalformedEventError) as exc_info:
            parse_event({})

        assert exc_info.value.missing_fields == [
            "action",
            "repository",
            "pull_request",
        ]

    def test_non_object_payload(self):
        with pytest.raises(MalformedEventError, match="JSON object"):
            parse_event(["opened"])

    def test_invalid_nested_field(self, event_payload):
        """Missing head SHA is reported by its location."""
        del event_payload["pull_request"]["head"]

        with pytest.raises(MalformedEventError, match="pull_request.head"):
            parse_event(event_payload)

    def test_repository_name_with_separator_rejected(self, event_payload):
        event_payload["repository"]["name"] = "../escape"

        with pytest.raises(MalformedEventError, match="repository.name"):
            parse_event(event_payload)

    @pytest.mark.parametrize("name", [".", ".."])
    def test_dot_repository_names_rejected(self, event_payload, name):
        """
        Why: The repository name becomes a directory in the preview repository
        What: Tests that "." and ".." are reported as a malformed event
        How: Parses payloads with those names
        """
        event_payload["repository"]["name"] = name

        with pytest.raises(MalformedEventError, match="repository.name"):
            parse_event(event_payload)

    def test_non_positive_pr_number_rejected(self, event_payload):
        event_payload["pull_request"]["number"] = 0

        with pytest.raises(MalformedEventError):
            parse_event(event_payload)

    def test_event_is_immutable(self, event_payload):
        event = parse_event(event_payload)

        with pytest.raises(ValidationError):
            event.raw_action = "closed"


class TestLoadEventPayload:
    """Tests for load_event_payload source selection."""

    def test_environment_takes_priority(self, tmp_path):
        """
        Why: GitHub Actions sets GITHUB_EVENT_PAYLOAD; it must win
        What: Tests source order environment > argument > file
        How: Supplies all three sources with different actions
        """
        event_file = tmp_path / "event.json"
        event_file.write_text(json.dumps({"action": "closed"}), encoding="utf-8")

        payload = load_event_payload(
            env_payload=json.dumps({"action": "opened"}),
            argument=json.dumps({"action": "synchronize"}),
            event_file=event_file,
        )

        assert payload == {"action": "opened"}

    def test_argument_before_file(self, tmp_path):
        event_file = tmp_path / "event.json"
        event_file.write_text(json.dumps({"action": "closed"}), encoding="utf-8")

        payload = load_event_payload(
            argument=json.dumps({"action": "synchronize"}), event_file=event_file
        )

        assert payload == {"action": "synchronize"}

    def test_reads_event_file(self, tmp_path, event_payload):
        event_file = tmp_path / "event.json"
        event_file.write_text(json.dumps(event_payload), encoding="utf-8")

        assert load_event_payload(event_file=event_file) == event_payload

    def test_no_source_returns_empty_object(self):
        assert load_event_payload() == {}

    def test_invalid_json(self):
        with pytest.raises(MalformedEventError, match="not JSON"):
            load_event_payload(argument="{not json")

    def test_unreadable_file(self, tmp_path):
        with pytest.raises(MalformedEventError, match="Cannot read event file"):
            load_event_payload(event_file=tmp_path / "missing.json")
