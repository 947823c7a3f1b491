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

"""GitHub Actions event decoding."""

from collections.abc import Mapping
from dataclasses import dataclass, field
import json
import logging
from pathlib import Path
from typing import Any

from .config.defaults import ENV_EVENT_NAME, ENV_EVENT_PATH

logger = logging.getLogger(__name__)


@dataclass
class GitHubEvent:
    """A workflow event: its name and decoded webhook payload."""

    name: str = ""
    payload: Any = field(default_factory=dict)


def decode_github_event(env: Mapping[str, str]) -> GitHubEvent:
    """Decode the event that triggered the current workflow run.

    Missing variables or an unreadable payload file give an event with an
    empty payload; the caller only uses it to evaluate an advisory condition.
    """
    event = GitHubEvent(name=env.get(ENV_EVENT_NAME, ""))
    event_path = env.get(ENV_EVENT_PATH, "")
    if not event_path:
        return event

    try:
        event.payload = json.loads(Path(event_path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.debug("Could not decode event payload %s: %s", event_path, e)
    return event
