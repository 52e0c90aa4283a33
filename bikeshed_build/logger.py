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

"""Structured logger with per-step counters and final summary.

Collects ok/fail counts and elapsed time per pipeline step so the
orchestrator can print a CI-friendly summary at the end of every run.
"""

from __future__ import annotations

import logging
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

_FMT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"

_ROOT = "bikeshed_build"


def get_logger(name: str) -> logging.Logger:
    """Return a stdlib logger configured with a consistent format."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FMT, datefmt="%H:%M:%S"))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        logger.propagate = False
    return logger


def set_verbosity(verbose: bool) -> None:
    """Switch every logger of this package between INFO and DEBUG."""
    level = logging.DEBUG if verbose else logging.INFO
    for name, logger in logging.Logger.manager.loggerDict.items():
        if isinstance(logger, logging.Logger) and (name == _ROOT or name.startswith(_ROOT + ".")):
            logger.setLevel(level)


@dataclass
class StepCounter:
    """Tracks success/fail counts and elapsed time for a single pipeline step."""

    name: str
    ok: int = 0
    failed: int = 0
    seconds: float = 0.0


@dataclass
class PipelineSummary:
    """Accumulates counters across all pipeline steps."""

    steps: dict[str, StepCounter] = field(default_factory=dict)

    def counter(self, name: str) -> StepCounter:
        """Get or create a counter for a named step."""
        if name not in self.steps:
            self.steps[name] = StepCounter(name=name)
        return self.steps[name]

    @contextmanager
    def timed(self, name: str) -> Iterator[StepCounter]:
        """Yield the step's counter and add the block's wall time to it."""
        counter = self.counter(name)
        start = time.perf_counter()
        try:
            yield counter
        finally:
            counter.seconds += time.perf_counter() - start

    def report(self) -> str:
        """Format a human-readable summary block."""
        lines: list[str] = ["", "Build Summary", "=" * 40]
        for step in self.steps.values():
            parts = [f"{step.name}: {step.ok} ok"]
            if step.failed:
                parts.append(f"{step.failed} failed")
            parts.append(f"{step.seconds:.1f}s")
            lines.append("  ".join(parts))
        lines.append("=" * 40)
        return "\n".join(lines)
