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

"""Bikeshed document compilation.

Normal mode runs a dry-run validation pass first and only compiles a
document that passes. Forced mode compiles straight away with
--force, so a document with errors still yields (degraded) HTML.

Failures come back as Fail(kind="validation" | "compile") carrying
Bikeshed's own message; publishing that message anywhere is up to
the caller.
"""

from __future__ import annotations

from pathlib import Path

from bikeshed_build.config import BikeshedConfig
from bikeshed_build.inputs import basename_of
from bikeshed_build.logger import get_logger
from bikeshed_build.result import COMPILE, TOOL, VALIDATION, Fail, Ok, Result
from bikeshed_build.tools import run_tool

log = get_logger(__name__)


def _as_document_failure(result: Fail, kind: str, action: str) -> Fail:
    """Re-tag a failed Bikeshed run; a missing executable keeps its own kind."""
    if result.kind != TOOL:
        return result
    message = (result.context or result.error).strip()
    return Fail(error=f"Bikeshed {action} failed: {message}", context=result.error, kind=kind)


def validate_document(input_file: Path, config: BikeshedConfig) -> Result[Path]:
    cmd = [config.executable, "--dry-run", f"--die-on={config.die_on}", "spec", str(input_file)]
    log.info("Validating %s", input_file.name)
    result = run_tool(cmd, name="bikeshed", cwd=input_file.parent)
    if not result.ok:
        return _as_document_failure(result, VALIDATION, "validation")
    return Ok(data=input_file)


def compile_document(input_file: Path, html_file: Path, force: bool, config: BikeshedConfig) -> Result[Path]:
    mode = ["--force"] if force else [f"--die-on={config.die_on}"]
    cmd = [config.executable, *mode, "spec", str(input_file), str(html_file)]
    log.info("Compiling %s → %s%s", input_file.name, html_file.name, " (forced)" if force else "")
    result = run_tool(cmd, name="bikeshed", cwd=input_file.parent)
    if not result.ok:
        return _as_document_failure(result, COMPILE, "compile")
    if not html_file.is_file():
        return Fail(error=f"Bikeshed reported success but wrote no HTML: {html_file}", kind=COMPILE)
    return Ok(data=html_file)


def build_document(input_file: Path, output_dir: Path, force: bool, config: BikeshedConfig) -> Result[Path]:
    """Compile input_file to <output_dir>/<basename>.html."""
    html_file = output_dir / f"{basename_of(input_file)}.html"

    if force:
        log.warning("Force mode: skipping validation")
    else:
        validation = validate_document(input_file, config)
        if not validation.ok:
            return validation

    return compile_document(input_file, html_file, force, config)
