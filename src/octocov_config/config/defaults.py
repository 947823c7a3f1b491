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

"""Default values and well-known names for octocov configuration.

This module keeps every fixed constant of the configuration pipeline in one
place: candidate file names, default datastore locations and the CI
environment variables that feed the defaulting steps.
"""

# Candidate config file names, searched in order under the working directory
DEFAULT_CONFIG_FILE_PATHS = (".octocov.yml", "octocov.yml")

# Datastore defaults
DEFAULT_BRANCH = "main"
DEFAULT_REPORTS_DIR = "reports"
DEFAULT_BADGES_DIR = "badges"
DEFAULT_REPORT_FILE = "report.json"

# Central mode defaults
DEFAULT_CENTRAL_ROOT = "."

# Environment variables consumed by the pipeline
ENV_REPOSITORY = "GITHUB_REPOSITORY"
ENV_EVENT_NAME = "GITHUB_EVENT_NAME"
ENV_EVENT_PATH = "GITHUB_EVENT_PATH"
ENV_CONFIG_PATH = "OCTOCOV_CONFIG"

ENV_VAR_HELP = {
    ENV_REPOSITORY: "Fallback for 'repository' when the config leaves it empty",
    ENV_EVENT_NAME: "Event name exposed to datastore.if as github.event_name",
    ENV_EVENT_PATH: "JSON event payload exposed to datastore.if as github.event",
    ENV_CONFIG_PATH: "Default config file path for the command line",
}


def default_datastore_path(repository: str) -> str:
    """Path a report is stored at when datastore.github.path is not set."""
    return f"{DEFAULT_REPORTS_DIR}/{repository}/{DEFAULT_REPORT_FILE}"
