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

"""PlantUML diagram rendering.

Only files directly inside the diagrams directory are rendered;
subdirectories are not searched.
"""

from __future__ import annotations

from pathlib import Path

from bikeshed_build.config import DiagramConfig
from bikeshed_build.externals import ToolPaths
from bikeshed_build.logger import get_logger
from bikeshed_build.result import Ok, Result
from bikeshed_build.tools import run_tool

log = get_logger(__name__)


def build_diagrams(
    tools: ToolPaths,
    diagrams_dir: Path,
    output_dir: Path,
    config: DiagramConfig,
) -> Result[list[Path]]:
    """Render every diagram source in diagrams_dir into output_dir in one PlantUML call."""
    if not diagrams_dir.is_dir():
        log.info("No diagrams directory at %s, skipping", diagrams_dir)
        return Ok(data=[])

    sources = sorted(p for p in diagrams_dir.glob(config.pattern) if p.is_file())
    if not sources:
        log.warning("No '%s' files in %s, skipping", config.pattern, diagrams_dir)
        return Ok(data=[])

    cmd = [
        *tools.plantuml(),
        f"-t{config.format}",
        "-o", str(output_dir.resolve()),
        "-timeout", str(config.timeout),
        *(str(p) for p in sources),
    ]
    log.info("Rendering %d diagram(s) from %s", len(sources), diagrams_dir)
    result = run_tool(cmd, name="plantuml")
    if not result.ok:
        return result

    return Ok(data=sources)
