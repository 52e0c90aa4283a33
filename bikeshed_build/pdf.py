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

"""HTML → PDF conversion with wkhtmltopdf."""

from __future__ import annotations

from pathlib import Path

from bikeshed_build.externals import ToolPaths
from bikeshed_build.logger import get_logger
from bikeshed_build.result import TOOL, Fail, Ok, Result
from bikeshed_build.tools import run_tool

log = get_logger(__name__)


def build_pdf(tools: ToolPaths, html_file: Path, output_dir: Path, basename: str) -> Result[Path]:
    """Convert html_file to <output_dir>/<basename>.pdf, aborting on any failed resource load."""
    pdf_file = output_dir / f"{basename}.pdf"
    cmd = [
        str(tools.wkhtmltopdf),
        "--enable-local-file-access",
        "--load-error-handling", "abort",
        "--load-media-error-handling", "abort",
        str(html_file),
        str(pdf_file),
    ]
    log.info("Converting %s → %s", html_file.name, pdf_file.name)
    result = run_tool(cmd, name="wkhtmltopdf", cwd=output_dir)
    if not result.ok:
        return result
    if not pdf_file.is_file():
        return Fail(error=f"wkhtmltopdf reported success but wrote no PDF: {pdf_file}", kind=TOOL)
    return Ok(data=pdf_file)
