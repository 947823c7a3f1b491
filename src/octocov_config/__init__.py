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

"""Configuration core for octocov.

Loads ``.octocov.yml``, expands environment references, gates datastore
writes with ``datastore.if`` conditions and grades coverage values into
badge colors.
"""

from .acceptance import check_acceptable, parse_threshold
from .condition import build_context, evaluate_condition
from .config import (
    Config,
    ConfigManager,
    build_central_config,
    build_config,
    build_datastore_config,
    load_config,
)
from .events import GitHubEvent, decode_github_event
from .exceptions import (
    AcceptanceError,
    CentralConfigError,
    ConfigurationError,
    ConfigValidationError,
    DatastoreConfigError,
    DuplicateConfigError,
    ExpressionError,
    OctocovError,
    ThresholdParseError,
)
from .grading import (
    Band,
    code_to_test_ratio_band,
    code_to_test_ratio_color,
    coverage_band,
    coverage_color,
)

__version__ = "0.1.0"

__all__ = [
    "AcceptanceError",
    "Band",
    "CentralConfigError",
    "Config",
    "ConfigManager",
    "ConfigValidationError",
    "ConfigurationError",
    "DatastoreConfigError",
    "DuplicateConfigError",
    "ExpressionError",
    "GitHubEvent",
    "OctocovError",
    "ThresholdParseError",
    "build_central_config",
    "build_config",
    "build_context",
    "build_datastore_config",
    "check_acceptable",
    "code_to_test_ratio_band",
    "code_to_test_ratio_color",
    "coverage_band",
    "coverage_color",
    "decode_github_event",
    "evaluate_condition",
    "load_config",
    "parse_threshold",
]
