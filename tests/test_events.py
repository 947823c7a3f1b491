"""
Tests for GitHub event decoding.
"""

import json

from octocov_config.events import GitHubEvent, decode_github_event


class TestDecodeGitHubEvent:
    """Test decoding the workflow event from the environment."""

    def test_name_and_payload(self, tmp_path):
        """Test a complete event."""
        event_path = tmp_path / "event.json"
        event_path.write_text(json.dumps({"ref": "refs/heads/main"}), encoding="utf-8")

        event = decode_github_event(
            {"GITHUB_EVENT_NAME": "push", "GITHUB_EVENT_PATH": str(event_path)},
        )

        assert event == GitHubEvent("push", {"ref": "refs/heads/main"})

    def test_no_variables(self):
        """Test that outside of CI the event is empty."""
        assert decode_github_event({}) == GitHubEvent("", {})

    def test_missing_payload_file(self, tmp_path):
        """Test that an unreadable payload leaves the payload empty."""
        event = decode_github_event(
            {"GITHUB_EVENT_NAME": "schedule", "GITHUB_EVENT_PATH": str(tmp_path / "none.json")},
        )
        assert event.name == "schedule"
        assert event.payload == {}

    def test_invalid_payload(self, tmp_path):
        """Test that malformed JSON leaves the payload empty."""
        event_path = tmp_path / "event.json"
        event_path.write_text("{not json", encoding="utf-8")

        event = decode_github_event({"GITHUB_EVENT_PATH": str(event_path)})

        assert event.payload == {}
