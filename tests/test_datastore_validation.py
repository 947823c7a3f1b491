"""
Tests for datastore section defaults and validation.
"""

import pytest

from octocov_config.config import (
    Config,
    DatastoreConfig,
    DatastoreGithubConfig,
    build_datastore_config,
)
from octocov_config.exceptions import ConfigValidationError, DatastoreConfigError


def make_config(root_repository="acme/widgets", **github):
    return Config(
        repository=root_repository,
        datastore=DatastoreConfig(github=DatastoreGithubConfig(**github)),
    )


class TestDatastoreDefaults:
    """Test defaults filled by build_datastore_config."""

    def test_branch_and_path_defaults(self):
        """Test the default branch and the path derived from the repository."""
        github = build_datastore_config(make_config(repository="acme/reports")).datastore.github

        assert github.branch == "main"
        assert github.path == "reports/acme/widgets/report.json"
        assert github.repository == "acme/reports"

    def test_explicit_values_are_kept(self):
        """Test that configured branch and path are not overwritten."""
        config = make_config(
            repository="acme/reports",
            branch="gh-pages",
            path="custom/report.json",
        )
        github = build_datastore_config(config).datastore.github

        assert github.branch == "gh-pages"
        assert github.path == "custom/report.json"

    def test_idempotent(self):
        """Test that validating an already valid config changes nothing."""
        once = build_datastore_config(make_config(repository="acme/reports"))
        twice = build_datastore_config(once)

        assert twice == once

    def test_input_is_not_mutated(self):
        """Test that defaults are applied to a copy."""
        config = make_config(repository="acme/reports")
        build_datastore_config(config)

        assert config.datastore.github.branch == ""
        assert config.datastore.github.path == ""


class TestDatastoreErrors:
    """Test validation failures in priority order."""

    def test_datastore_not_set(self):
        """Test a config without a datastore section."""
        with pytest.raises(DatastoreConfigError, match="^datastore not set$"):
            build_datastore_config(Config())

    def test_github_not_set(self):
        """Test a datastore section without a backend."""
        with pytest.raises(DatastoreConfigError, match=r"^datastore\.github not set$"):
            build_datastore_config(Config(datastore=DatastoreConfig()))

    def test_repository_not_set(self):
        """Test an empty datastore repository."""
        with pytest.raises(DatastoreConfigError, match=r"^datastore\.github\.repository not set$"):
            build_datastore_config(make_config())

    @pytest.mark.parametrize("repository", ["ownerrepo", "a/b/c", "owner//repo"])
    def test_repository_must_be_owner_repo(self, repository):
        """Test repositories without exactly one slash."""
        with pytest.raises(DatastoreConfigError) as exc_info:
            build_datastore_config(make_config(repository=repository))
        assert str(exc_info.value) == "datastore.github.repository should be 'owner/repo'"

    def test_path_not_set_without_root_repository(self):
        """Test that no default path is derived without a root repository."""
        config = make_config(root_repository="", repository="acme/reports")
        with pytest.raises(DatastoreConfigError, match=r"^datastore\.github\.path not set$"):
            build_datastore_config(config)

    def test_repository_checked_before_path(self):
        """Test that the repository error wins over the path error."""
        with pytest.raises(DatastoreConfigError, match=r"repository not set$"):
            build_datastore_config(make_config(root_repository=""))

    def test_error_hierarchy(self):
        """Test that datastore errors are configuration validation errors."""
        with pytest.raises(ConfigValidationError) as exc_info:
            build_datastore_config(Config())
        assert exc_info.value.error_code == "OCV_2001"
        assert exc_info.value.error_category == "CONFIG_ERROR"
