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

from dataclasses import dataclass
from pathlib import Path

from .errors import ErrorKind, IncomparableVersionError, ParseResult, VersionError
from .fallback import FallbackVersion
from .reference import FuzzyReference, Reference
from .v1 import VersionV1
from .v2 import Increment, VersionV2
from .version import Version

__all__ = [
    "ErrorKind",
    "FallbackVersion",
    "FuzzyReference",
    "IncomparableVersionError",
    "Increment",
    "PackageInfo",
    "ParseResult",
    "Reference",
    "UpgradeInfo",
    "Version",
    "VersionError",
    "VersionV1",
    "VersionV2",
]


@dataclass
class PackageInfo:
    path: Path
    id: str
    channel: str
    # Per architecture, sorted list of versions, highest (latest) first
    versions: dict[str, list[Version]]
    obsolete: bool = False

    @property
    def architectures(self) -> list[str]:
        return sorted(self.versions)

    def latest_version(self, arch: str) -> Version:
        # A listed architecture must always have at least one version,
        # otherwise it simply does not make sense.
        if not self.versions.get(arch):
            raise ValueError(f"No versions available for {self.id} on {arch}")
        return self.versions[arch][0]

    def references(self, arch: str) -> list[Reference]:
        return [
            Reference(channel=self.channel, id=self.id, version=v, arch=arch)
            for v in self.versions.get(arch, [])
        ]


@dataclass
class UpgradeInfo:
    package: PackageInfo
    arch: str
    current: Version
    latest: Version

    @property
    def reference(self) -> Reference:
        return Reference(
            channel=self.package.channel,
            id=self.package.id,
            version=self.latest,
            arch=self.arch,
        )
