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

"""Configuration schema definitions for octocov.

This module defines the configuration tree using Pydantic models. Field
aliases match the keys of the YAML document (``codeToTestRatio``, ``if``);
Python code uses the snake_case names.
"""

from collections.abc import Mapping
from datetime import datetime
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

from ..acceptance import check_acceptable

if TYPE_CHECKING:
    from ..events import GitHubEvent


class CoverageReport(Protocol):
    """Anything that can report its coverage percentage."""

    def coverage_percent(self) -> float: ...


def _none_as_empty(v: Any) -> Any:
    # `key:` with no value parses as None
    return {} if v is None else v


class BadgeConfig(BaseModel):
    """Output location of a badge artifact."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    path: str = Field(default="", description="Badge output path; empty disables the badge")


class CoverageConfig(BaseModel):
    """Configuration for the coverage section."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    path: str = Field(default="", description="Coverage report file or directory")
    badge: BadgeConfig = Field(default_factory=BadgeConfig)
    acceptable: str = Field(
        default="",
        description="Minimum acceptable coverage, optionally suffixed with %",
    )

    @field_validator("badge", mode="before")
    @classmethod
    def validate_badge(cls, v):
        """Treat an empty badge section as defaults."""
        return _none_as_empty(v)

    @field_validator("path", mode="before")
    @classmethod
    def validate_path(cls, v):
        """Treat an empty path entry as unset."""
        return "" if v is None else v

    @field_validator("acceptable", mode="before")
    @classmethod
    def validate_acceptable(cls, v):
        """Accept bare numbers such as ``acceptable: 60``."""
        if v is None:
            return ""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class CodeToTestRatioConfig(BaseModel):
    """Configuration for the code-to-test ratio section."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    code: list[str] | None = Field(default=None, description="Glob patterns of code files")
    test: list[str] | None = Field(default=None, description="Glob patterns of test files")
    badge: BadgeConfig = Field(default_factory=BadgeConfig)

    @field_validator("badge", mode="before")
    @classmethod
    def validate_badge(cls, v):
        """Treat an empty badge section as defaults."""
        return _none_as_empty(v)


class DatastoreGithubConfig(BaseModel):
    """GitHub repository used as a report datastore."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    repository: str = Field(default="", description="Datastore repository, 'owner/repo'")
    branch: str = Field(default="", description="Datastore branch")
    path: str = Field(default="", description="Report path inside the datastore repository")


class DatastoreConfig(BaseModel):
    """Configuration for persisting reports."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    if_: str = Field(default="", alias="if", description="Condition gating the datastore write")
    github: DatastoreGithubConfig | None = None

    @field_validator("if_", mode="before")
    @classmethod
    def validate_if(cls, v):
        """Accept literal booleans such as ``if: true``."""
        if v is None:
            return ""
        if isinstance(v, bool):
            return "true" if v else "false"
        return v


class CentralConfig(BaseModel):
    """Configuration for central mode (collecting reports of many repositories)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    enable: bool = False
    reports: str = ""
    badges: str = ""
    root: str = ""


class Config(BaseModel):
    """Complete configuration tree for octocov.

    The working directory and resolved config file path are carried as
    private attributes. They are never serialized and an empty path means no
    file was loaded.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    repository: str = Field(default="", description="Repository in 'owner/repo' form")
    coverage: CoverageConfig = Field(default_factory=CoverageConfig)
    code_to_test_ratio: CodeToTestRatioConfig | None = Field(default=None, alias="codeToTestRatio")
    datastore: DatastoreConfig | None = None
    central: CentralConfig | None = None

    _wd: str = PrivateAttr(default_factory=os.getcwd)
    _path: str = PrivateAttr(default="")

    @field_validator("coverage", mode="before")
    @classmethod
    def validate_coverage(cls, v):
        """Coverage is never None."""
        return _none_as_empty(v)

    @field_validator("repository", mode="before")
    @classmethod
    def validate_repository(cls, v):
        """Treat an empty repository entry as unset."""
        return "" if v is None else v

    @property
    def wd(self) -> str:
        """Working directory the configuration was resolved against."""
        return self._wd

    @property
    def path(self) -> str:
        """Absolute path of the loaded config file, or an empty string."""
        return self._path

    def with_wd(self, wd: str | os.PathLike[str]) -> "Config":
        """Return a copy bound to another working directory."""
        new_config = self.model_copy(deep=True)
        new_config._wd = str(wd)
        return new_config

    def loaded(self) -> bool:
        return self._path != ""

    def root(self) -> str:
        """Directory of the loaded config file, falling back to the working directory."""
        if self._path:
            return str(Path(self._path).parent)
        return self._wd

    def code_to_test_ratio_ready(self) -> bool:
        if self.code_to_test_ratio is None:
            return False
        return bool(self.code_to_test_ratio.test)

    def coverage_badge_ready(self) -> bool:
        return self.coverage.badge.path != ""

    def code_to_test_ratio_badge_ready(self) -> bool:
        return (
            self.code_to_test_ratio_ready()
            and self.code_to_test_ratio is not None
            and self.code_to_test_ratio.badge.path != ""
        )

    def datastore_ready(
        self,
        event: "GitHubEvent | None" = None,
        env: Mapping[str, str] | None = None,
        now: datetime | None = None,
    ) -> bool:
        """Decide whether the report should be stored.

        Args:
            event: Decoded CI event; decoded from ``env`` when omitted
            env: Environment snapshot; ``os.environ`` when omitted
            now: Evaluation instant; the current time when omitted

        Returns:
            False when no datastore is configured or the ``if`` condition is
            not met, True otherwise
        """
        if self.datastore is None:
            return False
        if not self.datastore.if_:
            return True

        from ..condition import build_context, evaluate_condition
        from ..events import decode_github_event

        env = dict(os.environ) if env is None else dict(env)
        if event is None:
            event = decode_github_event(env)
        context = build_context(now=now, event=event, env=env)
        return evaluate_condition(self.datastore.if_, context)

    def acceptable(self, report: CoverageReport) -> None:
        """Raise AcceptanceError when the report's coverage is below the threshold."""
        check_acceptable(self.coverage.acceptable, report.coverage_percent())
