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

"""Pipeline orchestrator.

Runs the build steps in order, stopping at the first failure:
  1. Externals: resolve Java, PlantUML, Graphviz, wkhtmltopdf + self-test
  2. Input: find the one document to build
  3. Output: empty Output/, copy Assets/
  4. Diagrams: render Diagrams/*.puml into Output/
  5. Document: Bikeshed → <basename>.html
  6. PDF: wkhtmltopdf → <basename>.pdf
  7. Archive: Output/* → <basename>.zip

A failed step leaves Output/ as it was at that point. Nothing is retried.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from bikeshed_build.archive import build_archive
from bikeshed_build.config import BuildConfig
from bikeshed_build.diagrams import build_diagrams
from bikeshed_build.document import build_document
from bikeshed_build.externals import ExternalsResolver, ToolPaths, select_resolver, validate_externals
from bikeshed_build.inputs import basename_of, resolve_input
from bikeshed_build.logger import PipelineSummary, get_logger
from bikeshed_build.output import prepare_output
from bikeshed_build.pdf import build_pdf
from bikeshed_build.result import Ok, Result

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class BuildArtifacts:
    basename: str
    html: Path
    pdf: Path
    zip: Path


def _run_externals(resolver: ExternalsResolver, config: BuildConfig) -> Result[ToolPaths]:
    resolved = resolver.resolve()
    if not resolved.ok:
        return resolved
    return validate_externals(resolved.data, config.externals.self_test_marker)


def _step(summary: PipelineSummary, name: str, action: Callable[[], Result]) -> Result:
    log.info("── %s ──", name)
    with summary.timed(name) as counter:
        result = action()
    if result.ok:
        counter.ok += 1
    else:
        counter.failed += 1
        log.error("%s failed: %s", name, result.error)
        if result.context and isinstance(result.context, str):
            log.debug("%s", result.context)
    return result


def run_pipeline(
    config: BuildConfig,
    input_path: Path | None = None,
    force: bool = False,
    resolver: ExternalsResolver | None = None,
    cwd: Path | None = None,
    on_resolved: Callable[[Path], None] | None = None,
) -> Result[BuildArtifacts]:
    """Build HTML, PDF and ZIP for one Bikeshed document.

    Args:
        config: Loaded build configuration.
        input_path: Explicit document path; auto-detected in cwd when None.
        force: Skip Bikeshed validation and compile regardless of errors.
        resolver: Externals resolver; chosen by platform when None.
        cwd: Directory to search and resolve relative paths against.
        on_resolved: Called with the input path once it is known.
    """
    cwd = (cwd or Path.cwd()).resolve()
    resolver = resolver or select_resolver(config.externals)
    summary = PipelineSummary()
    layout = config.layout

    try:
        tools = _step(summary, "externals", lambda: _run_externals(resolver, config))
        if not tools.ok:
            return tools

        source = _step(summary, "input", lambda: resolve_input(input_path, cwd, layout.input_suffix))
        if not source.ok:
            return source

        input_file: Path = source.data
        basename = basename_of(input_file)
        root = input_file.parent
        output_dir = root / layout.output_dir
        if on_resolved is not None:
            on_resolved(input_file)

        prepared = _step(summary, "output", lambda: prepare_output(output_dir, root / layout.assets_dir, root))
        if not prepared.ok:
            return prepared

        diagrams = _step(
            summary,
            "diagrams",
            lambda: build_diagrams(tools.data, root / layout.diagrams_dir, output_dir, config.diagrams),
        )
        if not diagrams.ok:
            return diagrams

        html = _step(summary, "document", lambda: build_document(input_file, output_dir, force, config.bikeshed))
        if not html.ok:
            return html

        pdf = _step(summary, "pdf", lambda: build_pdf(tools.data, html.data, output_dir, basename))
        if not pdf.ok:
            return pdf

        archive = _step(summary, "archive", lambda: build_archive(output_dir, basename))
        if not archive.ok:
            return archive

        return Ok(data=BuildArtifacts(basename=basename, html=html.data, pdf=pdf.data, zip=archive.data))

    finally:
        log.info(summary.report())
