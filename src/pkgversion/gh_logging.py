# *******************************************************************************
# Copyright (c) 2025 Contributors to the Eclipse Foundation
#
# See the NOTICE file(s) distributed with this work for additional
# information regarding copyright ownership.
#
# This program and the accompanying materials are made available under the
# terms of the Apache License Version 2.0 which is available at
# https://www.apache.org/licenses/LICENSE-2.0
#
# SPDX-License-Identifier: Apache-2.0
# *******************************************************************************

import os
from pathlib import Path
from typing import NoReturn

# level -> (GitHub workflow command, local prefix)
_LEVELS: dict[str, tuple[str, str]] = {
    "debug": ("debug", "DEBUG"),
    "info": ("notice", "INFO"),
    "success": ("notice", "SUCCESS"),
    "warning": ("warning", "WARNING"),
    "error": ("error", "ERROR"),
}


def is_running_in_github_actions() -> bool:
    return "GITHUB_ACTIONS" in os.environ


def is_debug_enabled() -> bool:
    return bool(os.environ.get("PKGVERSION_DEBUG"))


class Logger:
    """Print based logger; emits workflow annotations on GitHub Actions.

    Debug messages are only shown when PKGVERSION_DEBUG is set.
    """

    def __init__(self, name: str):
        self.name = name
        self.warnings: list[str] = []
        self.errors: list[str] = []

    def _loc(self, file: Path | None, line: int | None) -> str:
        if file and file.is_absolute():
            try:
                file = file.relative_to(Path.cwd())
            except ValueError:
                pass

        if is_running_in_github_actions():
            parts = []
            if file:
                parts.append(f"file={file}")
                if line:
                    parts.append(f"line={line}")
            return " " + ",".join(parts) if parts else ""

        if file and line:
            return f" {file}:{line}"
        if file:
            return f" {file}"
        return ""

    def _print(
        self, level: str, msg: str, file: Path | None = None, line: int | None = None
    ) -> None:
        command, prefix = _LEVELS.get(level, (level, level.upper()))
        location = self._loc(file, line)
        if is_running_in_github_actions():
            print(f"::{command}{location}::{self.name} {msg}")
        else:
            print(f"{prefix}:{location} {self.name} {msg}")

    def debug(self, msg: str) -> None:
        if is_debug_enabled():
            self._print("debug", msg)

    def info(self, msg: str) -> None:
        self._print("info", msg)

    def ok(self, msg: str) -> None:
        self._print("success", msg)

    def warning(
        self, msg: str, file: Path | None = None, line: int | None = None
    ) -> None:
        self.warnings.append(msg)
        self._print("warning", msg, file, line)

    def error(self, msg: str, file: Path | None = None, line: int | None = None) -> None:
        self.errors.append(msg)
        self._print("error", msg, file, line)

    def fatal(
        self, msg: str, file: Path | None = None, line: int | None = None
    ) -> NoReturn:
        self.error(msg, file, line)
        raise SystemExit(1)
