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

from __future__ import annotations

from pathlib import Path

import pytest

from bikeshed_build.config import CONFIG_ENV, find_config, load_config
from bikeshed_build.result import CONFIG


def test_defaults_without_file(tmp_path: Path):
    result = load_config(None, tmp_path)

    assert result.ok
    config = result.data
    assert config.layout.input_suffix == ".bs.md"
    assert config.layout.output_dir == "Output"
    assert config.diagrams.timeout == 60
    assert config.externals.bundle_dir == tmp_path / "externals"
    assert config.ci.trigger_env == "TF_BUILD"


def test_partial_file_overrides_defaults(tmp_path: Path):
    path = tmp_path / "bikeshed-build.yaml"
    path.write_text(
        "layout:\n  input_suffix: .src.bs\n"
        "diagrams:\n  timeout: 120\n  format: svg\n"
        "externals:\n  bundle_dir: tools\n",
        encoding="utf-8",
    )

    result = load_config(path, tmp_path)

    assert result.ok
    assert result.data.layout.input_suffix == ".src.bs"
    assert result.data.layout.assets_dir == "Assets"
    assert result.data.diagrams.timeout == 120
    assert result.data.diagrams.format == "svg"
    assert result.data.externals.bundle_dir == tmp_path.resolve() / "tools"


def test_empty_file_is_all_defaults(tmp_path: Path):
    path = tmp_path / "bikeshed-build.yaml"
    path.write_text("", encoding="utf-8")

    assert load_config(path, tmp_path).ok


def test_unknown_key_is_structure_error(tmp_path: Path):
    path = tmp_path / "bikeshed-build.yaml"
    path.write_text("bikeshed:\n  colour: blue\n", encoding="utf-8")

    result = load_config(path, tmp_path)

    assert not result.ok
    assert result.kind == CONFIG
    assert "structure" in result.error


def test_yaml_syntax_error(tmp_path: Path):
    path = tmp_path / "bikeshed-build.yaml"
    path.write_text("layout: [unclosed\n", encoding="utf-8")

    result = load_config(path, tmp_path)

    assert not result.ok
    assert "YAML parse error" in result.error


def test_missing_explicit_file(tmp_path: Path):
    result = load_config(tmp_path / "missing.yaml", tmp_path)

    assert not result.ok
    assert "not found" in result.error


def test_find_config_precedence(monkeypatch, tmp_path: Path):
    monkeypatch.delenv(CONFIG_ENV, raising=False)
    assert find_config(None, tmp_path) is None

    local = tmp_path / "bikeshed-build.yaml"
    local.write_text("", encoding="utf-8")
    assert find_config(None, tmp_path) == local

    monkeypatch.setenv(CONFIG_ENV, "/etc/build.yaml")
    assert find_config(None, tmp_path) == Path("/etc/build.yaml")

    assert find_config(Path("cli.yaml"), tmp_path) == Path("cli.yaml")


def _load(tmp_path: Path, text: str):
    path = tmp_path / "bikeshed-build.yaml"
    path.write_text(text, encoding="utf-8")
    return load_config(path, tmp_path)


def test_blank_self_test_marker_is_rejected(tmp_path: Path):
    result = _load(tmp_path, "externals:\n  self_test_marker:\n")

    assert not result.ok
    assert result.kind == CONFIG
    assert "self_test_marker" in result.error


def test_empty_self_test_marker_is_rejected(tmp_path: Path):
    result = _load(tmp_path, 'externals:\n  self_test_marker: ""\n')

    assert not result.ok
    assert result.kind == CONFIG


def test_unknown_externals_key_is_rejected(tmp_path: Path):
    result = _load(tmp_path, "externals:\n  bundel_dir: tools\n")

    assert not result.ok
    assert result.kind == CONFIG
    assert "bundel_dir" in result.error


def test_externals_paths_are_paths(tmp_path: Path):
    result = _load(tmp_path, "externals:\n  system_plantuml_jar: /opt/plantuml.jar\n  java: java17\n")

    assert result.ok
    assert result.data.externals.system_plantuml_jar == Path("/opt/plantuml.jar")
    assert result.data.externals.java == "java17"


@pytest.mark.parametrize("output_dir", [".", "..", "", "Output/../..", "/tmp/out"])
def test_output_dir_outside_spec_directory_is_rejected(tmp_path: Path, output_dir: str):
    result = _load(tmp_path, f'layout:\n  output_dir: "{output_dir}"\n')

    assert not result.ok
    assert result.kind == CONFIG
    assert "output_dir" in result.error


def test_nested_output_dir_is_accepted(tmp_path: Path):
    result = _load(tmp_path, "layout:\n  output_dir: build/out\n")

    assert result.ok
    assert result.data.layout.output_dir == "build/out"
