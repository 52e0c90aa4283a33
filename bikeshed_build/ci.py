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

"""Azure Pipelines variable publishing.

Active only when the trigger variable (TF_BUILD by default) is present.
Values are emitted as ##vso logging commands on stdout, which the agent
turns into pipeline variables for later steps.
"""

from __future__ import annotations

import os
import re
import sys
from collections.abc import Mapping
from typing import TextIO

from bikeshed_build.config import CiConfig
from bikeshed_build.logger import get_logger
from bikeshed_build.result import DOCUMENT_KINDS, Fail

log = get_logger(__name__)

_LINE_BREAKS = re.compile(r"\s*[\r\n]+\s*")


def sanitize(value: str) -> str:
    """Collapse line breaks so the value fits a single logging command."""
    return _LINE_BREAKS.sub(" ", value).strip()


class CiPublisher:
    def __init__(
        self,
        config: CiConfig,
        env: Mapping[str, str] | None = None,
        stream: TextIO | None = None,
    ) -> None:
        self.config = config
        self.env = os.environ if env is None else env
        self.stream = stream or sys.stdout

    @property
    def active(self) -> bool:
        return self.config.trigger_env in self.env

    def set_variable(self, name: str, value: str) -> bool:
        if not self.active:
            return False
        self.stream.write(f"##vso[task.setvariable variable={name}]{sanitize(value)}\n")
        self.stream.flush()
        log.debug("Published CI variable %s", name)
        return True

    def publish_basename(self, basename: str) -> bool:
        return self.set_variable(self.config.basename_variable, basename)

    def publish_failure(self, failure: Fail) -> bool:
        """Publish document build failures; other kinds are left to the log."""
        if failure.kind not in DOCUMENT_KINDS:
            return False
        return self.set_variable(self.config.error_variable, failure.error)
