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

"""Custom exceptions for the octocov configuration core."""

from datetime import datetime, timezone
from typing import Any


class OctocovError(Exception):
    """Base exception for all octocov configuration errors."""

    ERROR_CATEGORY = "GENERAL"
    ERROR_CODE = "OCV_0000"

    def __init__(
        self,
        message: str,
        user_message: str | None = None,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
        recovery_suggestion: str | None = None,
    ) -> None:
        super().__init__(message)
        self.user_message = user_message or message
        self.error_code = error_code or self.ERROR_CODE
        self.error_category = self.ERROR_CATEGORY
        self.context = context or {}
        self.recovery_suggestion = recovery_suggestion
        self.timestamp = datetime.now(timezone.utc)


class ConfigurationError(OctocovError):
    """Configuration file location or setup errors."""

    ERROR_CATEGORY = "CONFIG_ERROR"
    ERROR_CODE = "OCV_1000"


class DuplicateConfigError(ConfigurationError):
    """More than one candidate configuration file exists."""

    ERROR_CODE = "OCV_1001"

    def __init__(self, first: str, second: str) -> None:
        message = f"duplicate config file [{first}, {second}]"
        context = {"candidates": [first, second]}
        recovery_suggestion = f"Remove one of {first} or {second}, or pass an explicit path"
        super().__init__(message, None, self.ERROR_CODE, context, recovery_suggestion)
        self.candidates = (first, second)


class ConfigValidationError(OctocovError):
    """Configuration validation error with detailed context."""

    ERROR_CATEGORY = "CONFIG_ERROR"
    ERROR_CODE = "OCV_2000"

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message, context={"errors": errors or []})
        self.errors = errors or []


class DatastoreConfigError(ConfigValidationError):
    """The datastore section is incomplete or malformed."""

    ERROR_CODE = "OCV_2001"


class CentralConfigError(ConfigValidationError):
    """The central section is missing."""

    ERROR_CODE = "OCV_2002"


class AcceptanceError(OctocovError):
    """Coverage is below the acceptable threshold."""

    ERROR_CATEGORY = "REPORT_ERROR"
    ERROR_CODE = "OCV_3000"

    def __init__(self, actual: float, acceptable: float) -> None:
        message = (
            f"code coverage is {actual:.1f}%, which is below the accepted {acceptable:.1f}%"
        )
        context = {"actual": actual, "acceptable": acceptable}
        super().__init__(message, None, self.ERROR_CODE, context)
        self.actual = actual
        self.acceptable = acceptable


class ThresholdParseError(OctocovError, ValueError):
    """The configured acceptable threshold is not a number."""

    ERROR_CATEGORY = "CONFIG_ERROR"
    ERROR_CODE = "OCV_3001"

    def __init__(self, value: str, original_error: Exception | None = None) -> None:
        message = f"invalid coverage.acceptable value: {value!r}"
        context = {"value": value}
        if original_error:
            context["original_error"] = str(original_error)
        recovery_suggestion = "Use a number with an optional trailing %, e.g. 80%"
        super().__init__(message, None, self.ERROR_CODE, context, recovery_suggestion)
        self.value = value


class ExpressionError(OctocovError):
    """Errors raised while compiling or running a condition expression."""

    ERROR_CATEGORY = "EXPRESSION_ERROR"
    ERROR_CODE = "OCV_4000"

    def __init__(self, message: str, position: int | None = None) -> None:
        context = {"position": position} if position is not None else {}
        super().__init__(message, None, self.ERROR_CODE, context)
        self.position = position


class ExpressionSyntaxError(ExpressionError):
    """The expression could not be tokenized or parsed."""

    ERROR_CODE = "OCV_4001"


class ExpressionEvaluationError(ExpressionError):
    """The expression failed at runtime (type mismatch, bad member access)."""

    ERROR_CODE = "OCV_4002"
