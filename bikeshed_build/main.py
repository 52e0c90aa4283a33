# SPDX-License-Identifier: MIT
#
#  █████╗ ██████╗  █████╗ ███████╗
# ██╔══██╗██╔══██╗██╔══██╗██╔════╝
# ███████║██████╔╝███████║███████╗
# ██╔══██║██╔══██╗██╔══██║╚════██║
# ██║  ██║██║  ██║██║  ██║███████║
# ╚═╝  ╚═╝╚═╝  ╚═╝╚═╝  ╚═╝╚══════╝
# Copyright (C) 2026 Riza Emre ARAS <r.emrearas@proton.me>
#
# Licensed under the MIT License.
# See LICENSE and THIRD_PARTY_LICENSES for details.

"""Command line entry point.

Usage:
    bikeshed-build
    bikeshed-build path/to/spec.bs.md --force
    bikeshed-build --config ci/bikeshed-build.yaml
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from bikeshed_build.ci import CiPublisher
from bikeshed_build.config import find_config, load_config
from bikeshed_build.inputs import basename_of
from bikeshed_build.logger import get_logger, set_verbosity
from bikeshed_build.pipeline import run_pipeline

log = get_logger("bikeshed_build.main")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bikeshed-build",
        description="Build a Bikeshed spec: diagrams → HTML → PDF → ZIP",
    )
    parser.add_argument(
        "input",
        nargs="?",
        type=Path,
        default=None,
        help="Document to build (default: the single *.bs.md file in the current directory)",
    )
    parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Skip validation and produce HTML even if the document has errors",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to bikeshed-build.yaml (default: ./bikeshed-build.yaml if present)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    load_dotenv()
    set_verbosity(args.verbose)

    cwd = Path.cwd()
    cfg_result = load_config(find_config(args.config, cwd), cwd)
    if not cfg_result.ok:
        log.error(cfg_result.error)
        return 1

    config = cfg_result.data
    ci = CiPublisher(config.ci)

    result = run_pipeline(
        config,
        input_path=args.input,
        force=args.force,
        cwd=cwd,
        on_resolved=lambda path: ci.publish_basename(basename_of(path)),
    )
    if not result.ok:
        ci.publish_failure(result)
        log.error("Build failed: %s", result.error)
        return 1

    artifacts = result.data
    for path in (artifacts.html, artifacts.pdf, artifacts.zip):
        print(path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
