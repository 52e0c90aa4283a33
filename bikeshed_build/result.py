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

"""Result pattern for error handling without exceptions.

Provides Ok[T] and Fail types as an alternative to raising exceptions.
Every pipeline step returns Result[T] = Ok[T] | Fail, and the caller
decides what a failure means (log, publish to CI, exit code).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")

# Failure kinds carried in Fail.kind. The orchestrator stops on any of them;
# the CLI picks the exit code and decides which ones reach CI variables.
#   prerequisite  Java, a tool binary or the PlantUML jar is missing
#   input         zero, several or non-file input candidates
#   self-test     PlantUML -testdot reported the error marker
#   tool          a tool exited non-zero, timed out or could not start
#   validation    Bikeshed dry-run rejected the document
#   compile       Bikeshed failed while writing HTML
#   config        bikeshed-build.yaml is unreadable or has bad values
#   io            filesystem error while staging or archiving output
PREREQUISITE = "prerequisite"
INPUT = "input"
SELF_TEST = "self-test"
TOOL = "tool"
VALIDATION = "validation"
COMPILE = "compile"
CONFIG = "config"
IO = "io"

# Kinds raised by the document step; these are routed to the CI error variable.
DOCUMENT_KINDS = frozenset({VALIDATION, COMPILE})


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result carrying typed data."""

    data: T
    ok: bool = field(default=True, init=False)


@dataclass(frozen=True, slots=True)
class Fail:
    """Failed result carrying error message, kind and optional context.

    kind is one of the constants above; context holds tool output or the
    offending path when there is one.
    """

    error: str
    context: Any = None
    kind: str = TOOL
    ok: bool = field(default=False, init=False)


# Return type of every step: Ok carrying the step's product, or Fail.
Result = Ok[T] | Fail
