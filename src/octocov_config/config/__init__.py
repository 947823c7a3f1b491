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

"""Configuration management for octocov.

This package provides:
- Config file discovery (``.octocov.yml`` / ``octocov.yml``)
- A Pydantic model of the configuration document
- Environment variable expansion and structural defaults
- Datastore and central section validation
"""

from .defaults import DEFAULT_CONFIG_FILE_PATHS
from .expansion import build_config, expand_env
from .manager import ConfigManager, load_config
from .resolver import find_config_file, resolve_config_path
from .schema import (
    BadgeConfig,
    CentralConfig,
    CodeToTestRatioConfig,
    Config,
    CoverageConfig,
    DatastoreConfig,
    DatastoreGithubConfig,
)
from .validation import ConfigValidator, build_central_config, build_datastore_config

__all__ = [
    "DEFAULT_CONFIG_FILE_PATHS",
    "BadgeConfig",
    "CentralConfig",
    "CodeToTestRatioConfig",
    "Config",
    "ConfigManager",
    "ConfigValidator",
    "CoverageConfig",
    "DatastoreConfig",
    "DatastoreGithubConfig",
    "build_central_config",
    "build_config",
    "build_datastore_config",
    "expand_env",
    "find_config_file",
    "load_config",
    "resolve_config_path",
]
