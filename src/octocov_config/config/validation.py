# MIT License
#
# Copyright (c) 2025 Democratize Technology
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""Configuration validation for octocov.

The datastore and central sections are only validated when they are about to
be used, so a misconfigured datastore fails the store step without failing
the whole run.
"""

import logging
import os
from pathlib import Path
from typing import Any

from ..exceptions import CentralConfigError, DatastoreConfigError
from .defaults import (
    DEFAULT_BADGES_DIR,
    DEFAULT_BRANCH,
    DEFAULT_CENTRAL_ROOT,
    DEFAULT_REPORTS_DIR,
    default_datastore_path,
)
from .schema import Config

logger = logging.getLogger(__name__)


def build_datastore_config(config: Config) -> Config:
    """Fill datastore defaults and validate the GitHub datastore target.

    Args:
        config: Built configuration

    Returns:
        A copy of ``config`` with branch and path defaulted

    Raises:
        DatastoreConfigError: On the first violated constraint
    """
    if config.datastore is None:
        raise DatastoreConfigError("datastore not set")
    if config.datastore.github is None:
        raise DatastoreConfigError("datastore.github not set")

    built = config.model_copy(deep=True)
    github = built.datastore.github  # type: ignore[union-attr]

    if not github.branch:
        github.branch = DEFAULT_BRANCH
    if not github.path and built.repository:
        github.path = default_datastore_path(built.repository)

    if not github.repository:
        raise DatastoreConfigError("datastore.github.repository not set")
    if github.repository.count("/") != 1:
        raise DatastoreConfigError("datastore.github.repository should be 'owner/repo'")
    if not github.branch:
        raise DatastoreConfigError("datastore.github.branch not set")
    if not github.path:
        raise DatastoreConfigError("datastore.github.path not set")

    logger.debug(
        "Datastore github://%s@%s/%s",
        github.repository,
        github.branch,
        github.path,
    )
    return built


def build_central_config(config: Config) -> Config:
    """Fill central mode defaults.

    ``root`` defaults to the config root and is made absolute. ``reports``
    and ``badges`` default to fixed directory names and are resolved under
    ``root`` unless already absolute.

    Raises:
        CentralConfigError: If the central section is missing
    """
    if config.central is None:
        raise CentralConfigError("central not set")

    built = config.model_copy(deep=True)
    central = built.central  # type: ignore[union-attr]

    root = central.root or DEFAULT_CENTRAL_ROOT
    if not os.path.isabs(root):
        root = os.path.normpath(os.path.join(built.root(), root))
    central.root = root
    central.reports = _under(root, central.reports or DEFAULT_REPORTS_DIR)
    central.badges = _under(root, central.badges or DEFAULT_BADGES_DIR)
    return built


def _under(root: str, path: str) -> str:
    if os.path.isabs(path):
        return path
    return os.path.normpath(os.path.join(root, path))


class ConfigValidator:
    """Non-fatal checks that point out configuration which will be ignored."""

    def __init__(self) -> None:
        self.warnings: list[str] = []
        self.recommendations: list[str] = []

    def validate_config(self, config: Config) -> None:
        """Collect warnings and recommendations for a built configuration."""
        self.warnings.clear()
        self.recommendations.clear()

        self._validate_coverage(config)
        self._validate_code_to_test_ratio(config)
        self._validate_datastore(config)
        self._validate_central(config)

        if self.warnings:
            logger.warning("Configuration warnings: %s", self.warnings)
        if self.recommendations:
            logger.info("Configuration recommendations: %s", self.recommendations)

    def _validate_coverage(self, config: Config) -> None:
        badge_path = config.coverage.badge.path
        if badge_path and Path(config.root(), badge_path).is_dir():
            self.warnings.append(
                f"coverage.badge.path ({badge_path}) is a directory; "
                f"the badge needs a file path such as {badge_path}/coverage.svg",
            )
        if not config.repository:
            self.recommendations.append(
                "repository is not set. Set it explicitly or run in CI "
                "where GITHUB_REPOSITORY is available.",
            )

    def _validate_code_to_test_ratio(self, config: Config) -> None:
        section = config.code_to_test_ratio
        if section is None:
            return
        if not section.test:
            self.warnings.append(
                "codeToTestRatio.test has no patterns; code to test ratio will be skipped",
            )
        if section.badge.path and not config.code_to_test_ratio_ready():
            self.warnings.append(
                "codeToTestRatio.badge.path is set but the ratio is not measured",
            )

    def _validate_datastore(self, config: Config) -> None:
        if config.datastore is not None and config.datastore.github is None:
            self.warnings.append("datastore is set but datastore.github is not")

    def _validate_central(self, config: Config) -> None:
        if config.central is not None and not config.central.enable:
            self.recommendations.append(
                "central section is present but central.enable is false",
            )

    def get_validation_summary(self) -> dict[str, Any]:
        """Get summary of validation results including warnings and recommendations."""
        return {
            "status": "valid",
            "warnings": self.warnings,
            "recommendations": self.recommendations,
            "warning_count": len(self.warnings),
            "recommendation_count": len(self.recommendations),
        }
