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

"""Config file discovery."""

from collections.abc import Sequence
import logging
import os
from pathlib import Path

from ..exceptions import DuplicateConfigError
from .defaults import DEFAULT_CONFIG_FILE_PATHS

logger = logging.getLogger(__name__)


def find_config_file(
    wd: str | os.PathLike[str],
    candidates: Sequence[str] = DEFAULT_CONFIG_FILE_PATHS,
) -> str:
    """Return the single candidate file that exists under ``wd``.

    Args:
        wd: Working directory to search
        candidates: File names to look for, in order

    Returns:
        The matching candidate name, or an empty string when none exists

    Raises:
        DuplicateConfigError: If more than one candidate exists
    """
    found = ""
    for candidate in candidates:
        if not (Path(wd) / candidate).is_file():
            continue
        if found:
            raise DuplicateConfigError(found, candidate)
        found = candidate
    return found


def resolve_config_path(path: str | os.PathLike[str], wd: str | os.PathLike[str]) -> str:
    """Resolve the config file to load.

    An explicit ``path`` is used as given, relative to ``wd``. Otherwise the
    default candidates are searched. An empty string means there is no config
    file, which is not an error.
    """
    path = os.fspath(path)
    if not path:
        path = find_config_file(wd)
        if not path:
            logger.debug("No config file found in %s", wd)
            return ""
    resolved = os.path.normpath(os.path.join(os.fspath(wd), path))
    logger.debug("Resolved config file %s", resolved)
    return resolved
