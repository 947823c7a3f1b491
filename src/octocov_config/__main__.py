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

"""Command line entry point for inspecting an octocov configuration."""

import argparse
import json
import logging
import os
import sys

import yaml

from .acceptance import check_acceptable
from .config import ConfigManager
from .config.defaults import ENV_CONFIG_PATH
from .exceptions import OctocovError
from .grading import code_to_test_ratio_band, coverage_band

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="octocov-config",
        description="Load, build and check an octocov configuration.",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=os.environ.get(ENV_CONFIG_PATH, ""),
        help="Config file path (default: search .octocov.yml and octocov.yml).",
    )
    parser.add_argument("--wd", default=None, help="Working directory (default: cwd).")
    parser.add_argument(
        "--coverage",
        type=float,
        default=None,
        help="Coverage percentage to grade and check against coverage.acceptable.",
    )
    parser.add_argument(
        "--ratio",
        type=float,
        default=None,
        help="Code to test ratio to grade.",
    )
    parser.add_argument(
        "--datastore",
        action="store_true",
        help="Evaluate datastore.if and validate the datastore section.",
    )
    parser.add_argument("--format", choices=("json", "yaml"), default="json")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity.",
    )
    return parser


def configure_logging(verbosity: int) -> None:
    # Diagnostics go to stderr so stdout stays machine readable
    logging.basicConfig(
        level=logging.DEBUG if verbosity > 0 else logging.INFO,
        stream=sys.stderr,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def run(args: argparse.Namespace) -> dict:
    """Run the checks requested on the command line and collect the results."""
    manager = ConfigManager(path=args.config, wd=args.wd)
    config = manager.load()
    result: dict = {
        "summary": manager.get_config_summary(),
        "config": config.model_dump(by_alias=True, exclude_none=True),
    }

    if args.coverage is not None:
        result["coverage"] = {
            "value": args.coverage,
            "band": coverage_band(args.coverage).value,
            "color": coverage_band(args.coverage).hex,
        }
        check_acceptable(config.coverage.acceptable, args.coverage)

    if args.ratio is not None:
        result["code_to_test_ratio"] = {
            "value": args.ratio,
            "band": code_to_test_ratio_band(args.ratio).value,
            "color": code_to_test_ratio_band(args.ratio).hex,
        }

    if args.datastore:
        ready = config.datastore_ready(env=manager.env)
        result["datastore"] = {"ready": ready}
        if ready:
            datastore = manager.datastore_config().datastore
            result["datastore"]["github"] = (
                datastore.github.model_dump() if datastore and datastore.github else None
            )

    return result


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        result = run(args)
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 130
    except OctocovError as e:
        print(f"octocov-config: error: {e}", file=sys.stderr)
        return 1
    except (OSError, yaml.YAMLError, ValueError) as e:
        # pydantic.ValidationError is a ValueError
        print(f"octocov-config: error: {e}", file=sys.stderr)
        return 1

    if args.format == "yaml":
        print(yaml.safe_dump(result, default_flow_style=False, sort_keys=False), end="")
    else:
        print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
