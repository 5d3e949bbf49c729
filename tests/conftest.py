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
import json
from argparse import Namespace
from pathlib import Path
from typing import Any

import pytest

from pkgversion import PackageInfo, Version
from pkgversion import catalog, main
from pkgversion.gh_logging import Logger


class MockLogger(Logger):
    """Logger that captures messages for testing."""

    def __init__(self):
        super().__init__("test")
        self.debug_messages: list[str] = []
        self.info_messages: list[str] = []
        self.warning_messages: list[str] = []
        self.error_messages: list[str] = []

    def _print(
        self, level: str, msg: str, file: Path | None = None, line: int | None = None
    ) -> None:
        if level == "debug":
            self.debug_messages.append(msg)
        elif level in ("info", "success"):
            self.info_messages.append(msg)
        elif level == "warning":
            self.warning_messages.append(msg)
        elif level == "error":
            self.error_messages.append(msg)


@pytest.fixture
def mock_logger() -> MockLogger:
    """Create a mock logger for testing."""
    return MockLogger()


@pytest.fixture(autouse=True)
def reset_module_loggers(monkeypatch: pytest.MonkeyPatch):
    """Module level loggers accumulate warnings; start every test clean."""
    monkeypatch.setattr(main.log, "warnings", [])
    monkeypatch.setattr(main.log, "errors", [])
    monkeypatch.setattr(catalog.log, "warnings", [])
    monkeypatch.setattr(catalog.log, "errors", [])
    monkeypatch.delenv("GITHUB_ACTIONS", raising=False)
    monkeypatch.delenv("PKGVERSION_CATALOG", raising=False)
    monkeypatch.delenv("PKGVERSION_STRICT", raising=False)
    monkeypatch.delenv("PKGVERSION_DEBUG", raising=False)


@pytest.fixture
def build_fake_filesystem(fs: Any):
    """Convenience helper to build a fake filesystem from a nested dict."""

    def _build(structure: dict[str, object], base_path: str = "") -> None:
        base = base_path or "/"
        for name, value in structure.items():
            path = f"{base.rstrip('/')}/{name}"
            if isinstance(value, dict):
                fs.makedirs(path, exist_ok=True)
                _build(value, path)
            else:
                fs.create_file(path, contents=value)

    return _build


@pytest.fixture
def setup_catalog(build_fake_filesystem):
    """Setup package metadata files under /packages.

    Usage:
        setup_catalog({"org.example.app": {"versions": {"x86_64": ["1.0.0"]}}})
    """

    def _setup(packages_config: dict[str, Any], extra: dict[str, object] | None = None) -> None:
        packages_structure: dict[str, object] = {}
        for package_id, config in packages_config.items():
            if isinstance(config, str):
                # raw (possibly broken) metadata.json content
                packages_structure[package_id] = {"metadata.json": config}
            else:
                packages_structure[package_id] = {"metadata.json": json.dumps(config)}

        build_fake_filesystem({"packages": packages_structure, **(extra or {})})

    return _setup


def v(raw: str, allow_fallback: bool = True) -> Version:
    return Version.parse(raw, allow_fallback).unwrap()


def make_package_info(
    package_id: str = "org.example.app",
    channel: str = "main",
    versions: dict[str, list[str]] | None = None,
    obsolete: bool = False,
) -> PackageInfo:
    parsed = {
        arch: sorted((v(raw) for raw in raws), reverse=True)
        for arch, raws in (versions or {"x86_64": ["1.0.0"]}).items()
    }
    return PackageInfo(
        path=Path(f"/packages/{package_id}"),
        id=package_id,
        channel=channel,
        versions=parsed,
        obsolete=obsolete,
    )


def make_check_args(
    packages: list[str] | None = None, arch: str = "x86_64", strict: bool | None = None
) -> Namespace:
    return Namespace(packages=packages or [], arch=arch, strict=strict)
