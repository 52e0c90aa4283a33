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

"""Input document resolution.

Either an explicit path (which must name exactly one regular file) or
auto-detection of the single file in the working directory carrying the
input suffix.
"""

from __future__ import annotations

import glob
from pathlib import Path

from bikeshed_build.logger import get_logger
from bikeshed_build.result import INPUT, Fail, Ok, Result

log = get_logger(__name__)

_WILDCARDS = frozenset("*?[")


def basename_of(path: Path) -> str:
    """Text before the first dot of the file name: spec.bs.md → spec."""
    return path.name.split(".", 1)[0]


def _expand(path: Path) -> list[Path]:
    # An existing name wins over its reading as a pattern: spec[draft].bs.md
    if path.exists():
        return [path]
    if _WILDCARDS.intersection(str(path)):
        return [Path(p) for p in sorted(glob.glob(str(path)))]
    return []


def _from_explicit(path: Path, cwd: Path) -> Result[Path]:
    if not path.is_absolute():
        path = cwd / path

    matches = _expand(path)
    if not matches:
        return Fail(error=f"Input file not found: {path}", kind=INPUT)
    if len(matches) > 1:
        names = ", ".join(str(m) for m in matches)
        return Fail(error=f"Input path matches {len(matches)} entries, expected 1: {names}", kind=INPUT)

    target = matches[0]
    if not target.is_file():
        return Fail(error=f"Input path is not a file: {target}", kind=INPUT)
    return Ok(data=target)


def _autodetect(cwd: Path, suffix: str) -> Result[Path]:
    candidates = sorted(p for p in cwd.iterdir() if p.is_file() and p.name.endswith(suffix))
    if len(candidates) != 1:
        found = ", ".join(p.name for p in candidates) or "none"
        return Fail(
            error=f"Expected exactly 1 '*{suffix}' file in {cwd}, found {len(candidates)}: {found}",
            context=[str(p) for p in candidates],
            kind=INPUT,
        )
    return Ok(data=candidates[0])


def resolve_input(path: Path | None, cwd: Path, suffix: str) -> Result[Path]:
    """Return the one document to build, as an absolute path."""
    result = _from_explicit(path, cwd) if path is not None else _autodetect(cwd, suffix)
    if not result.ok:
        return result

    resolved = result.data.resolve()
    if not basename_of(resolved):
        return Fail(error=f"Input file name has no basename before its first dot: {resolved.name}", kind=INPUT)

    log.info("Input: %s", resolved)
    return Ok(data=resolved)
