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

"""Output directory preparation.

The directory is emptied rather than recreated so that a shell or
file-browser holding it open does not break the build.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from bikeshed_build.logger import get_logger
from bikeshed_build.result import CONFIG, IO, Fail, Ok, Result

log = get_logger(__name__)


def _clear(directory: Path) -> None:
    for entry in directory.iterdir():
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry)
        else:
            entry.unlink()


def _copy_assets(assets_dir: Path, output_dir: Path) -> int:
    copied = 0
    for entry in sorted(assets_dir.iterdir()):
        target = output_dir / entry.name
        if entry.is_dir():
            shutil.copytree(entry, target)
        else:
            shutil.copy2(entry, target)
        copied += 1
    return copied


def _overlaps_workspace(output_dir: Path, workspace_root: Path) -> bool:
    output = output_dir.resolve()
    root = workspace_root.resolve()
    return output == root or output in root.parents


def prepare_output(output_dir: Path, assets_dir: Path, workspace_root: Path | None = None) -> Result[Path]:
    """Empty (or create) output_dir, then copy the assets directory's entries into it.

    Refuses an output_dir that is workspace_root or one of its parents.
    """
    if workspace_root is not None and _overlaps_workspace(output_dir, workspace_root):
        return Fail(
            error=f"Output directory {output_dir} would contain the spec directory {workspace_root}",
            kind=CONFIG,
        )

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        _clear(output_dir)
        log.info("Output directory ready: %s", output_dir)

        if not assets_dir.is_dir():
            log.info("No assets directory at %s, skipping copy", assets_dir)
            return Ok(data=output_dir)

        copied = _copy_assets(assets_dir, output_dir)
    except OSError as exc:
        return Fail(error=f"Could not prepare output directory: {exc}", context=str(output_dir), kind=IO)

    log.info("Copied %d asset entries from %s", copied, assets_dir)
    return Ok(data=output_dir)
