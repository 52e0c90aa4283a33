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

"""Subprocess wrapper for the external tools.

Every tool call in the pipeline goes through run_tool, which turns
"could not start", "timed out" and "non-zero exit" into Fail results.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from bikeshed_build.logger import get_logger
from bikeshed_build.result import PREREQUISITE, TOOL, Fail, Ok, Result

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ToolOutput:
    returncode: int
    stdout: str
    stderr: str

    @property
    def combined(self) -> str:
        return "\n".join(part for part in (self.stdout, self.stderr) if part)


def _tail(text: str, limit: int = 2000) -> str:
    return text if len(text) <= limit else "..." + text[-limit:]


def run_tool(
    cmd: list[str],
    *,
    name: str,
    check: bool = True,
    timeout: float | None = None,
    cwd: Path | None = None,
) -> Result[ToolOutput]:
    """Run cmd to completion and capture its output.

    With check=False a non-zero exit is still Ok; the caller inspects
    ToolOutput.returncode itself.
    """
    log.debug("%s → %s", name, " ".join(cmd))
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd else None,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError as exc:
        return Fail(error=f"{name} not found: {exc.filename or cmd[0]}", kind=PREREQUISITE)
    except subprocess.TimeoutExpired:
        return Fail(error=f"{name} timed out after {timeout}s", context=" ".join(cmd))
    except OSError as exc:
        return Fail(error=f"{name} could not be started: {exc}", context=" ".join(cmd))

    output = ToolOutput(returncode=proc.returncode, stdout=proc.stdout or "", stderr=proc.stderr or "")
    if check and output.returncode != 0:
        return Fail(
            error=f"{name} exited with code {output.returncode}",
            context=_tail(output.combined),
            kind=TOOL,
        )
    return Ok(data=output)
