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

"""Shared fixtures: a fake tool runner and a throwaway spec workspace."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from bikeshed_build.config import BuildConfig, default_config
from bikeshed_build.externals import ToolPaths
from bikeshed_build.result import TOOL, Fail, Ok, Result
from bikeshed_build.tools import ToolOutput

_PATCHED_MODULES = (
    "bikeshed_build.externals",
    "bikeshed_build.diagrams",
    "bikeshed_build.document",
    "bikeshed_build.pdf",
)


@dataclass
class FakeTools:
    """Stands in for run_tool and writes the files real tools would write."""

    calls: list[tuple[str, list[str]]] = field(default_factory=list)
    validation_error: str | None = None
    self_test_output: str = "Installation seems OK\nFile generation OK"
    failing: set[str] = field(default_factory=set)

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def __call__(self, cmd: list[str], *, name: str, check: bool = True, timeout=None, cwd=None) -> Result[ToolOutput]:
        self.calls.append((name, list(cmd)))
        if name in self.failing:
            return Fail(error=f"{name} exited with code 1", context=f"{name} broke", kind=TOOL)

        if name == "plantuml -testdot":
            return Ok(data=ToolOutput(returncode=0, stdout=self.self_test_output, stderr=""))
        if name == "plantuml":
            out_dir = Path(cmd[cmd.index("-o") + 1])
            for source in (Path(arg) for arg in cmd if arg.endswith(".puml")):
                (out_dir / f"{source.stem}.png").write_bytes(b"png")
        elif name == "bikeshed":
            forced = "--force" in cmd
            if self.validation_error and not forced:
                return Fail(error="bikeshed exited with code 2", context=self.validation_error, kind=TOOL)
            if "--dry-run" not in cmd:
                html = "<html>degraded</html>" if self.validation_error else "<html>ok</html>"
                Path(cmd[-1]).write_text(html, encoding="utf-8")
        elif name == "wkhtmltopdf":
            Path(cmd[-1]).write_bytes(b"%PDF-1.4")
        return Ok(data=ToolOutput(returncode=0, stdout="", stderr=""))


class StubResolver:
    def __init__(self, paths: ToolPaths) -> None:
        self.paths = paths
        self.calls = 0

    def resolve(self) -> Result[ToolPaths]:
        self.calls += 1
        return Ok(data=self.paths)


@pytest.fixture
def fake_tools(monkeypatch: pytest.MonkeyPatch) -> FakeTools:
    fake = FakeTools()
    for module in _PATCHED_MODULES:
        monkeypatch.setattr(f"{module}.run_tool", fake)
    return fake


@pytest.fixture
def tool_paths(tmp_path: Path) -> ToolPaths:
    return ToolPaths(
        java=Path("/usr/bin/java"),
        plantuml_jar=tmp_path / "plantuml.jar",
        dot=Path("/usr/bin/dot"),
        wkhtmltopdf=Path("/usr/bin/wkhtmltopdf"),
    )


@pytest.fixture
def resolver(tool_paths: ToolPaths) -> StubResolver:
    return StubResolver(tool_paths)


@pytest.fixture
def config(tmp_path: Path) -> BuildConfig:
    return default_config(tmp_path)


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """A spec directory with a document, assets and one diagram."""
    root = tmp_path / "spec-repo"
    root.mkdir()
    (root / "spec.bs.md").write_text("<pre class=metadata>\nTitle: Test\n</pre>\n", encoding="utf-8")
    assets = root / "Assets"
    (assets / "img").mkdir(parents=True)
    (assets / "style.css").write_text("body {}", encoding="utf-8")
    (assets / "img" / "logo.svg").write_text("<svg/>", encoding="utf-8")
    diagrams = root / "Diagrams"
    diagrams.mkdir()
    (diagrams / "flow.puml").write_text("@startuml\nA -> B\n@enduml\n", encoding="utf-8")
    return root
