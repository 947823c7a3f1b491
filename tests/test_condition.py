"""
Tests for datastore condition gating.
"""

from datetime import datetime, timedelta, timezone
import logging

import pytest

from octocov_config.condition import build_context, evaluate_condition
from octocov_config.config import Config, DatastoreConfig
from octocov_config.events import GitHubEvent

# 2024-06-02 was a Sunday
SUNDAY_AFTERNOON = datetime(2024, 6, 2, 15, 30, tzinfo=timezone.utc)


@pytest.fixture()
def context():
    return build_context(
        now=SUNDAY_AFTERNOON,
        event=GitHubEvent("push", {"ref": "refs/heads/main"}),
        env={"CI": "true"},
    )


class TestBuildContext:
    """Test condition context assembly."""

    def test_time_fields(self, context):
        """Test date and time fields in UTC."""
        assert context["year"] == 2024
        assert context["month"] == 6
        assert context["day"] == 2
        assert context["hour"] == 15
        assert context["weekday"] == 0

    def test_weekday_counts_from_sunday(self):
        """Test that Saturday is 6 and Monday is 1."""
        saturday = SUNDAY_AFTERNOON - timedelta(days=1)
        monday = SUNDAY_AFTERNOON + timedelta(days=1)
        assert build_context(now=saturday)["weekday"] == 6
        assert build_context(now=monday)["weekday"] == 1

    def test_time_is_converted_to_utc(self):
        """Test that an aware time in another zone is read in UTC."""
        tokyo = timezone(timedelta(hours=9))
        now = datetime(2024, 6, 3, 2, 0, tzinfo=tokyo)
        context = build_context(now=now)
        assert (context["day"], context["hour"], context["weekday"]) == (2, 17, 0)

    def test_event_and_env(self, context):
        """Test the github and env fields."""
        assert context["github"] == {
            "event_name": "push",
            "event": {"ref": "refs/heads/main"},
        }
        assert context["env"] == {"CI": "true"}

    def test_defaults(self):
        """Test an empty event and environment."""
        context = build_context()
        assert context["github"] == {"event_name": "", "event": {}}
        assert context["env"] == {}


class TestEvaluateCondition:
    """Test the soft-failing condition gate."""

    def test_empty_condition_passes_silently(self, context, caplog):
        """Test that an empty condition passes without diagnostics."""
        with caplog.at_level(logging.DEBUG):
            assert evaluate_condition("", context) is True
        assert caplog.records == []

    def test_true_condition(self, context):
        """Test a satisfied condition."""
        assert evaluate_condition("github.event_name == 'push' && env.CI == 'true'", context)

    def test_false_condition_logs_skip(self, context, caplog):
        """Test that a false condition is reported as a skip."""
        with caplog.at_level(logging.WARNING):
            assert evaluate_condition("1 == 2", context) is False

        assert len(caplog.records) == 1
        record = caplog.records[0]
        assert record.levelno == logging.WARNING
        assert "Skip storing the report" in record.getMessage()
        assert "(1 == 2)" in record.getMessage()

    def test_non_boolean_result_does_not_pass(self, context, caplog):
        """Test that a non-boolean result is treated as not met."""
        with caplog.at_level(logging.WARNING):
            assert evaluate_condition("github.event_name", context) is False
            assert evaluate_condition("1", context) is False
        assert all("Skip storing the report" in r.getMessage() for r in caplog.records)

    @pytest.mark.parametrize(
        "cond",
        [
            "github.event.pull_request.draft == false",
            "len() > 0",
            "len('a', 'b') > 0",
            "10.0 ** 400 > 1",
            "(-8) ** 0.5 > 1",
            "5 % 0 == 0",
            "env[[1]] == 'x'",
            "env[env] == 'x'",
            "(" * 2000 + "true" + ")" * 2000,
        ],
    )
    def test_evaluation_error_does_not_pass(self, context, cond, caplog):
        """Test that runtime errors are logged and do not pass."""
        with caplog.at_level(logging.WARNING):
            result = evaluate_condition(cond, context)

        assert result is False
        assert caplog.records[0].levelno == logging.ERROR
        assert "Skip storing" not in caplog.text

    def test_syntax_error_does_not_pass(self, context, caplog):
        """Test that malformed conditions are logged and do not pass."""
        with caplog.at_level(logging.WARNING):
            assert evaluate_condition("github.event_name ==", context) is False
        assert caplog.records[0].levelno == logging.ERROR

    def test_time_based_condition(self, context):
        """Test conditions on the date fields."""
        assert evaluate_condition("weekday == 0 and hour >= 12", context) is True
        assert evaluate_condition("weekday in [1, 2, 3, 4, 5]", context) is False


class TestDatastoreReady:
    """Test Config.datastore_ready."""

    def test_no_datastore(self):
        """Test that a config without a datastore is never ready."""
        assert Config().datastore_ready(env={}) is False

    def test_no_condition(self):
        """Test that a datastore without a condition is always ready."""
        assert Config(datastore=DatastoreConfig()).datastore_ready(env={}) is True

    def test_condition_with_event(self):
        """Test that the condition sees the supplied event."""
        config = Config(datastore=DatastoreConfig(if_="github.event_name == 'push'"))
        assert config.datastore_ready(event=GitHubEvent("push"), env={}) is True
        assert config.datastore_ready(event=GitHubEvent("pull_request"), env={}) is False

    def test_condition_with_env(self):
        """Test that the condition sees the environment snapshot."""
        config = Config(datastore=DatastoreConfig(if_="env.GITHUB_REF == 'refs/heads/main'"))
        assert config.datastore_ready(env={"GITHUB_REF": "refs/heads/main"}) is True
        assert config.datastore_ready(env={"GITHUB_REF": "refs/heads/topic"}) is False

    def test_event_decoded_from_env(self, tmp_path):
        """Test that the event is decoded from the environment when omitted."""
        event_path = tmp_path / "event.json"
        event_path.write_text('{"pull_request": {"draft": true}}', encoding="utf-8")
        env = {"GITHUB_EVENT_NAME": "pull_request", "GITHUB_EVENT_PATH": str(event_path)}
        config = Config(
            datastore=DatastoreConfig(if_="not github.event.pull_request.draft"),
        )
        assert config.datastore_ready(env=env) is False

    def test_condition_with_time(self):
        """Test that the evaluation instant can be fixed."""
        config = Config(datastore=DatastoreConfig(if_="weekday == 0"))
        assert config.datastore_ready(env={}, now=SUNDAY_AFTERNOON) is True
        assert config.datastore_ready(env={}, now=SUNDAY_AFTERNOON + timedelta(days=3)) is False
