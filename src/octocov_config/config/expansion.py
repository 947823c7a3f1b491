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

"""Environment variable expansion and structural defaults.

``build_config`` is the single normalization pass a parsed configuration goes
through before use. It never mutates its input; it returns a normalized copy.
"""

from collections.abc import Mapping
import logging
import os
import re

from .defaults import ENV_REPOSITORY
from .schema import Config

logger = logging.getLogger(__name__)

# ${NAME} or $NAME; a lone $ is left alone
_ENV_REF = re.compile(r"\$(?:\{([^}]*)\}|([A-Za-z0-9_]+))")


def expand_env(value: str, env: Mapping[str, str]) -> str:
    """Replace ``$NAME`` and ``${NAME}`` references with values from ``env``.

    Unknown names expand to an empty string, matching shell behavior.
    """
    if "$" not in value:
        return value

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1) if match.group(1) is not None else match.group(2)
        return env.get(name, "")

    return _ENV_REF.sub(_replace, value)


def build_config(config: Config, env: Mapping[str, str] | None = None) -> Config:
    """Expand environment references and fill structural defaults.

    Args:
        config: Parsed configuration
        env: Environment snapshot; ``os.environ`` when omitted

    Returns:
        A normalized copy of ``config``. ``datastore.if`` is left untouched
        and datastore fields are not validated here.
    """
    env = dict(os.environ) if env is None else env
    built = config.model_copy(deep=True)

    built.repository = expand_env(built.repository, env)
    if not built.repository:
        built.repository = env.get(ENV_REPOSITORY, "")
        if built.repository:
            logger.debug("Using repository %s from %s", built.repository, ENV_REPOSITORY)

    if built.datastore is not None and built.datastore.github is not None:
        github = built.datastore.github
        github.repository = expand_env(github.repository, env)
        github.branch = expand_env(github.branch, env)
        github.path = expand_env(github.path, env)

    built.coverage.badge.path = expand_env(built.coverage.badge.path, env)

    if built.code_to_test_ratio is not None:
        if built.code_to_test_ratio.code is None:
            built.code_to_test_ratio.code = []
        if built.code_to_test_ratio.test is None:
            built.code_to_test_ratio.test = []

    if built.central is not None:
        built.central.root = expand_env(built.central.root, env)
        built.central.reports = expand_env(built.central.reports, env)
        built.central.badges = expand_env(built.central.badges, env)

    return built
