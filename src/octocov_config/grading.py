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

"""Badge color bands for coverage and code-to-test ratio values."""

from enum import Enum


class Band(str, Enum):
    """Color band, ordered from best to worst."""

    GREEN = "green"
    YELLOWGREEN = "yellowgreen"
    YELLOW = "yellow"
    ORANGE = "orange"
    RED = "red"

    @property
    def hex(self) -> str:
        """shields.io color code of the band."""
        return _HEX[self]


# https://github.com/badges/shields/blob/master/badge-maker/lib/color.js
_HEX = {
    Band.GREEN: "#97CA00",
    Band.YELLOWGREEN: "#A4A61D",
    Band.YELLOW: "#DFB317",
    Band.ORANGE: "#FE7D37",
    Band.RED: "#E05D44",
}

# Inclusive lower bounds, highest first
COVERAGE_THRESHOLDS = (
    (80.0, Band.GREEN),
    (60.0, Band.YELLOWGREEN),
    (40.0, Band.YELLOW),
    (20.0, Band.ORANGE),
)
CODE_TO_TEST_RATIO_THRESHOLDS = (
    (1.2, Band.GREEN),
    (1.0, Band.YELLOWGREEN),
    (0.8, Band.YELLOW),
    (0.6, Band.ORANGE),
)


def _band(value: float, thresholds: tuple[tuple[float, Band], ...]) -> Band:
    for lower, band in thresholds:
        if value >= lower:
            return band
    return Band.RED


def coverage_band(cover: float) -> Band:
    """Band for a coverage percentage (0-100)."""
    return _band(cover, COVERAGE_THRESHOLDS)


def code_to_test_ratio_band(ratio: float) -> Band:
    """Band for a code-to-test ratio (test lines per code line)."""
    return _band(ratio, CODE_TO_TEST_RATIO_THRESHOLDS)


def coverage_color(cover: float) -> str:
    return coverage_band(cover).hex


def code_to_test_ratio_color(ratio: float) -> str:
    return code_to_test_ratio_band(ratio).hex
