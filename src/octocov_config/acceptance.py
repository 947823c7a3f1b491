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

"""Acceptable coverage threshold check."""

import logging
import re

from .exceptions import AcceptanceError, ThresholdParseError

logger = logging.getLogger(__name__)

# Plain decimal or exponent notation; no whitespace, no digit separators
_THRESHOLD_RE = re.compile(
    r"[+-]?(?:(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE | re.ASCII,
)


def parse_threshold(acceptable: str) -> float:
    """Parse a threshold such as ``"75"`` or ``"75%"``.

    Only a single trailing ``%`` is removed. Surrounding whitespace and
    underscores between digits are rejected even though ``float`` accepts
    them.

    Raises:
        ThresholdParseError: If the value is not a number
    """
    value = acceptable.removesuffix("%")
    if not _THRESHOLD_RE.fullmatch(value):
        raise ThresholdParseError(acceptable)
    return float(value)


def check_acceptable(acceptable: str, actual: float) -> None:
    """Check a coverage percentage against the configured threshold.

    Args:
        acceptable: Configured threshold; empty disables the check
        actual: Measured coverage percentage

    Raises:
        ThresholdParseError: If ``acceptable`` is malformed
        AcceptanceError: If ``actual`` is below the threshold
    """
    if not acceptable:
        return
    threshold = parse_threshold(acceptable)
    if actual < threshold:
        raise AcceptanceError(actual, threshold)
    logger.debug("Coverage %.1f%% meets the accepted %.1f%%", actual, threshold)
