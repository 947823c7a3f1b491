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

"""Configuration loading for octocov.

This module provides:
- ``load_config``: locate and parse a config file into a ``Config``
- ``ConfigManager``: the load, build and validate pipeline for one run,
  with summary and export helpers
"""

from collections.abc import Mapping
import json
import logging
import os
from pathlib import Path
from typing import Any

import yaml

from .expansion import build_config
from .resolver import resolve_config_path
from .schema import Config
from .validation import ConfigValidator, build_datastore_config

logger = logging.getLogger(__name__)


def load_config(
    path: str | os.PathLike[str] = "",
    wd: str | os.PathLike[str] | None = None,
) -> Config:
    """Locate, read and parse the configuration.

    Args:
        path: Explicit config file path, relative to ``wd``; empty to search
            the default candidates
        wd: Working directory; the process working directory when omitted

    Returns:
        The parsed, not yet built, configuration

    Raises:
        DuplicateConfigError: If more than one default candidate exists
        OSError: If the config file cannot be read
        yaml.YAMLError: If the document is not valid YAML
        pydantic.ValidationError: If a field has the wrong type
    """
    wd = os.getcwd() if wd is None else os.fspath(wd)
    resolved = resolve_config_path(path, wd)
    if not resolved:
        config = Config().with_wd(wd)
        config.coverage.path = wd
        return config

    data = yaml.safe_load(Path(resolved).read_bytes())
    config = Config.model_validate(data or {})
    config._wd = wd
    config._path = resolved
    if not config.coverage.path:
        config.coverage.path = str(Path(resolved).parent)
    logger.info("Loaded configuration from %s", resolved)
    return config


class ConfigManager:
    """Runs the configuration pipeline for a single invocation.

    Unlike a process-wide settings object, each manager owns its
    configuration exclusively; nothing is shared between instances.
    """

    def __init__(
        self,
        path: str | os.PathLike[str] = "",
        wd: str | os.PathLike[str] | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._path = path
        self._wd = wd
        self._env = dict(os.environ) if env is None else dict(env)
        self._validator = ConfigValidator()
        self._config: Config | None = None

    def load(self) -> Config:
        """Load, build and validate the configuration."""
        config = build_config(load_config(self._path, self._wd), self._env)
        self._validator.validate_config(config)
        self._config = config
        return config

    @property
    def config(self) -> Config:
        """The built configuration, loading it on first access."""
        if self._config is None:
            return self.load()
        return self._config

    @property
    def env(self) -> dict[str, str]:
        return self._env

    def datastore_config(self) -> Config:
        """Validated datastore configuration.

        Raises:
            DatastoreConfigError: If the datastore section is misconfigured
        """
        return build_datastore_config(self.config)

    def get_config_summary(self) -> dict[str, Any]:
        """Get a summary of the loaded configuration."""
        config = self.config
        return {
            "loaded": config.loaded(),
            "path": config.path,
            "wd": config.wd,
            "root": config.root(),
            "repository": config.repository,
            "coverage_badge_ready": config.coverage_badge_ready(),
            "code_to_test_ratio_ready": config.code_to_test_ratio_ready(),
            "code_to_test_ratio_badge_ready": config.code_to_test_ratio_badge_ready(),
            "datastore_configured": config.datastore is not None,
            "central_enabled": config.central is not None and config.central.enable,
            "validation": self._validator.get_validation_summary(),
        }

    def export_config(self, format: str = "json") -> str:
        """Export the built configuration using the document's key names."""
        config_dict = self.config.model_dump(by_alias=True, exclude_none=True)

        if format.lower() == "yaml":
            return str(yaml.safe_dump(config_dict, default_flow_style=False, sort_keys=False))
        return json.dumps(config_dict, indent=2)
