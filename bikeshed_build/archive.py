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

"""Zip packaging of the output directory."""

from __future__ import annotations

import zipfile
from pathlib import Path

from bikeshed_build.logger import get_logger
from bikeshed_build.result import IO, Fail, Ok, Result

log = get_logger(__name__)


def build_archive(output_dir: Path, basename: str) -> Result[Path]:
    """Zip every file under output_dir into <output_dir>/<basename>.zip.

    Entries are stored relative to output_dir, so the archive holds the
    files themselves rather than a top-level folder.
    """
    zip_file = output_dir / f"{basename}.zip"
    try:
        zip_file.unlink(missing_ok=True)
        files = sorted(p for p in output_dir.rglob("*") if p.is_file())
        with zipfile.ZipFile(zip_file, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for path in files:
                zf.write(path, path.relative_to(output_dir).as_posix())
    except (OSError, zipfile.BadZipFile) as exc:
        return Fail(error=f"Could not write archive: {exc}", context=str(zip_file), kind=IO)

    log.info("Archived %d file(s) → %s", len(files), zip_file.name)
    return Ok(data=zip_file)
