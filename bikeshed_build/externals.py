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

"""External tool resolution: Java, PlantUML, Graphviz and wkhtmltopdf.

Two resolvers share one interface. BundledExternals serves Windows,
where the tools ship in a bundle directory and Graphviz is unpacked
from its archive on first use. SystemExternals serves everything else
(typically a Linux build container) and looks tools up on PATH.

The resolved ToolPaths value is created once per run and handed to
each step that calls a tool.
"""

from __future__ import annotations

import shutil
import sys
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from bikeshed_build.config import ExternalsConfig
from bikeshed_build.logger import get_logger
from bikeshed_build.result import IO, PREREQUISITE, SELF_TEST, Fail, Ok, Result
from bikeshed_build.tools import run_tool

log = get_logger(__name__)

GRAPHVIZ_ARCHIVE = "graphviz.zip"
GRAPHVIZ_DIR = "graphviz"
PLANTUML_JAR = "plantuml.jar"


@dataclass(frozen=True, slots=True)
class ToolPaths:
    java: Path
    plantuml_jar: Path
    dot: Path
    wkhtmltopdf: Path

    def plantuml(self) -> list[str]:
        """Command prefix that starts PlantUML against the resolved Graphviz."""
        return [str(self.java), "-jar", str(self.plantuml_jar), "-graphvizdot", str(self.dot)]


class ExternalsResolver(Protocol):
    def resolve(self) -> Result[ToolPaths]: ...


def _require_java(config: ExternalsConfig) -> Result[Path]:
    java = shutil.which(config.java)
    if java is None:
        return Fail(
            error=f"Java runtime not found ('{config.java}' is not on PATH); PlantUML needs it",
            kind=PREREQUISITE,
        )
    return Ok(data=Path(java))


def _require_file(path: Path, what: str) -> Result[Path]:
    if not path.is_file():
        return Fail(error=f"{what} not found: {path}", kind=PREREQUISITE)
    return Ok(data=path)


def _which(name: str) -> Result[Path]:
    found = shutil.which(name)
    if found is None:
        return Fail(error=f"'{name}' is not installed or not on PATH", kind=PREREQUISITE)
    return Ok(data=Path(found))


def _unpack_graphviz(archive: Path, target: Path) -> Result[Path]:
    """Extract the bundled Graphviz archive once; an existing target is reused."""
    if target.is_dir():
        log.debug("Graphviz already unpacked at %s", target)
        return Ok(data=target)
    if not archive.is_file():
        return Fail(error=f"Graphviz archive not found: {archive}", kind=PREREQUISITE)

    log.info("Unpacking %s (first run)", archive.name)
    staging = target.with_name(target.name + ".partial")
    try:
        shutil.rmtree(staging, ignore_errors=True)
        with zipfile.ZipFile(archive) as zf:
            zf.extractall(staging)
        staging.rename(target)
    except zipfile.BadZipFile as exc:
        shutil.rmtree(staging, ignore_errors=True)
        return Fail(error=f"Invalid Graphviz archive: {exc}", context=str(archive), kind=PREREQUISITE)
    except OSError as exc:
        shutil.rmtree(staging, ignore_errors=True)
        return Fail(error=f"Could not unpack Graphviz: {exc}", context=str(archive), kind=IO)
    return Ok(data=target)


class BundledExternals:
    """Tools shipped in config.bundle_dir (Windows)."""

    def __init__(self, config: ExternalsConfig) -> None:
        self.config = config

    def resolve(self) -> Result[ToolPaths]:
        bundle = self.config.bundle_dir
        java = _require_java(self.config)
        if not java.ok:
            return java

        jar = _require_file(bundle / PLANTUML_JAR, "PlantUML jar")
        if not jar.ok:
            return jar

        graphviz = _unpack_graphviz(bundle / GRAPHVIZ_ARCHIVE, bundle / GRAPHVIZ_DIR)
        if not graphviz.ok:
            return graphviz

        dot = _require_file(graphviz.data / "bin" / "dot.exe", "Graphviz dot")
        if not dot.ok:
            return dot

        wkhtmltopdf = _require_file(bundle / "wkhtmltopdf" / "bin" / "wkhtmltopdf.exe", "wkhtmltopdf")
        if not wkhtmltopdf.ok:
            return wkhtmltopdf

        return Ok(data=ToolPaths(java=java.data, plantuml_jar=jar.data, dot=dot.data, wkhtmltopdf=wkhtmltopdf.data))


class SystemExternals:
    """Tools installed system-wide (Linux containers, macOS)."""

    def __init__(self, config: ExternalsConfig) -> None:
        self.config = config

    def resolve(self) -> Result[ToolPaths]:
        java = _require_java(self.config)
        if not java.ok:
            return java

        jar = _require_file(self.config.system_plantuml_jar, "PlantUML jar")
        if not jar.ok:
            return jar

        dot = _which("dot")
        if not dot.ok:
            return dot

        wkhtmltopdf = _which("wkhtmltopdf")
        if not wkhtmltopdf.ok:
            return wkhtmltopdf

        return Ok(data=ToolPaths(java=java.data, plantuml_jar=jar.data, dot=dot.data, wkhtmltopdf=wkhtmltopdf.data))


def select_resolver(config: ExternalsConfig, platform: str = sys.platform) -> ExternalsResolver:
    if platform == "win32":
        return BundledExternals(config)
    return SystemExternals(config)


def validate_externals(tools: ToolPaths, marker: str) -> Result[ToolPaths]:
    """Run PlantUML's -testdot and fail if its report contains marker."""
    result = run_tool([*tools.plantuml(), "-testdot"], name="plantuml -testdot", check=False)
    if not result.ok:
        return result

    report = result.data.combined
    if marker in report:
        for line in report.splitlines():
            log.error("  %s", line)
        return Fail(
            error="PlantUML cannot use Graphviz (self-test reported an error)",
            context=report,
            kind=SELF_TEST,
        )

    log.info("PlantUML self-test passed (dot: %s)", tools.dot)
    return Ok(data=tools)
