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

"""Evaluation of the ``datastore.if`` condition."""

from collections.abc import Mapping
from datetime import datetime, timezone
import logging
from typing import Any

from .events import GitHubEvent
from .exceptions import ExpressionError
from .expression import evaluate

logger = logging.getLogger(__name__)


def build_context(
    now: datetime | None = None,
    event: GitHubEvent | None = None,
    env: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Variables available to a condition.

    Date fields are taken from ``now`` in UTC. ``weekday`` counts from
    0 (Sunday) to 6 (Saturday).
    """
    now = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    event = event or GitHubEvent()
    return {
        "year": now.year,
        "month": now.month,
        "day": now.day,
        "hour": now.hour,
        "weekday": now.isoweekday() % 7,
        "github": {
            "event_name": event.name,
            "event": event.payload,
        },
        "env": dict(env or {}),
    }


def evaluate_condition(cond: str, context: Mapping[str, Any]) -> bool:
    """Decide whether a conditional action should run.

    An empty condition always passes. The condition is evaluated as
    ``(<cond>) == true``, so a result that is not the boolean ``true`` does
    not pass. Malformed conditions are logged and do not pass; they are never
    raised to the caller.
    """
    if not cond:
        return True

    try:
        result = evaluate(f"({cond}) == true", context)
    except ExpressionError as e:
        logger.error("%s", e)
        return False

    if result is not True:
        logger.warning(
            "Skip storing the report: the condition in the `if` section is not met (%s)",
            cond,
        )
        return False
    return True
