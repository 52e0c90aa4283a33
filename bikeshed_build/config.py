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

"""Loads the optional bikeshed-build.yaml into typed dataclasses.

Every key has a default, so a build works without any file. The YAML
structure mirrors the dataclasses one section per class.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from bikeshed_build.result import CONFIG, Fail, Ok, Result

CONFIG_FILENAME = "bikeshed-build.yaml"
CONFIG_ENV = "BIKESHED_BUILD_CONFIG"


# ── Layout ────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class LayoutConfig:
    """Input detection and the directories beside the input file."""
    input_suffix: str = ".bs.md"
    assets_dir: str = "Assets"
    diagrams_dir: str = "Diagrams"
    output_dir: str = "Output"


# ── Externals ─────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class ExternalsConfig:
    bundle_dir: Path = Path("externals")
    java: str = "java"
    system_plantuml_jar: Path = Path("/usr/share/plantuml/plantuml.jar")
    self_test_marker: str = "Error"


# ── Tools ─────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class DiagramConfig:
    pattern: str = "*.puml"
    timeout: int = 60
    format: str = "png"


@dataclass(frozen=True, slots=True)
class BikeshedConfig:
    executable: str = "bikeshed"
    die_on: str = "fatal"


# ── CI ────────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class CiConfig:
    """Azure Pipelines variable publishing, active when trigger_env is set."""
    trigger_env: str = "TF_BUILD"
    basename_variable: str = "SpecBaseName"
    error_variable: str = "SpecBuildError"


# ── Top-level ─────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class BuildConfig:
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    externals: ExternalsConfig = field(default_factory=ExternalsConfig)
    diagrams: DiagramConfig = field(default_factory=DiagramConfig)
    bikeshed: BikeshedConfig = field(default_factory=BikeshedConfig)
    ci: CiConfig = field(default_factory=CiConfig)


# ── Loader ────────────────────────────────────────────────────

def _build_externals(raw: dict[str, Any], base_dir: Path) -> ExternalsConfig:
    """Build the externals section; bundle_dir is anchored at base_dir."""
    parsed = ExternalsConfig(**raw)
    marker = parsed.self_test_marker
    if not isinstance(marker, str) or not marker:
        raise ValueError(f"externals.self_test_marker must be a non-empty string, got {marker!r}")

    bundle_dir = Path(parsed.bundle_dir)
    if not bundle_dir.is_absolute():
        bundle_dir = base_dir / bundle_dir
    return replace(
        parsed,
        bundle_dir=bundle_dir,
        system_plantuml_jar=Path(parsed.system_plantuml_jar),
    )


def _build_layout(raw: dict[str, Any]) -> LayoutConfig:
    layout = LayoutConfig(**raw)
    output = Path(layout.output_dir)
    if output.is_absolute() or not output.parts or ".." in output.parts:
        raise ValueError(f"layout.output_dir must be a subdirectory of the spec directory, got {layout.output_dir!r}")
    return layout


def _section(raw: dict[str, Any], name: str) -> dict[str, Any]:
    section = raw.get(name) or {}
    if not isinstance(section, dict):
        raise TypeError(f"section '{name}' must be a mapping")
    return section


def default_config(base_dir: Path) -> BuildConfig:
    """Defaults with the externals bundle anchored at base_dir."""
    return BuildConfig(externals=_build_externals({}, base_dir))


def find_config(explicit: Path | None, cwd: Path) -> Path | None:
    """Pick the config file: --config, then $BIKESHED_BUILD_CONFIG, then ./bikeshed-build.yaml."""
    if explicit is not None:
        return explicit
    from_env = os.environ.get(CONFIG_ENV)
    if from_env:
        return Path(from_env)
    candidate = cwd / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def load_config(path: Path | None, cwd: Path) -> Result[BuildConfig]:
    """Load the YAML file at path, or defaults when path is None."""
    if path is None:
        return Ok(data=default_config(cwd))

    if not path.is_file():
        return Fail(error=f"Config file not found: {path}", kind=CONFIG)

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        return Fail(error=f"YAML parse error: {exc}", context=str(path), kind=CONFIG)

    base_dir = path.resolve().parent
    try:
        if not isinstance(raw, dict):
            raise TypeError("top level must be a mapping")
        config = BuildConfig(
            layout=_build_layout(_section(raw, "layout")),
            externals=_build_externals(_section(raw, "externals"), base_dir),
            diagrams=DiagramConfig(**_section(raw, "diagrams")),
            bikeshed=BikeshedConfig(**_section(raw, "bikeshed")),
            ci=CiConfig(**_section(raw, "ci")),
        )
    except (KeyError, TypeError, ValueError) as exc:
        return Fail(error=f"Config structure error: {exc}", context=str(path), kind=CONFIG)

    return Ok(data=config)
