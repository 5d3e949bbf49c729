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

import re
from dataclasses import dataclass

from .version import Version

_REFERENCE_RE = re.compile(
    r"(?:(?P<channel>[^:/]+):)?(?P<id>[^:/]+)(?:/(?P<version>[^/]+)(?:/(?P<arch>[^/]+))?)?"
)


@dataclass
class Reference:
    """A concrete catalog entry, rendered as "channel:id/version/arch"."""

    channel: str
    id: str
    version: Version
    arch: str

    @classmethod
    def parse(cls, raw: str, allow_fallback: bool = True) -> "Reference":
        m = _REFERENCE_RE.fullmatch(raw)
        if not m or not all(m.group(g) for g in ("channel", "version", "arch")):
            raise ValueError(f"{raw!r} is not a reference like channel:id/version/arch")

        return cls(
            channel=m.group("channel"),
            id=m.group("id"),
            version=Version.parse(m.group("version"), allow_fallback).unwrap(),
            arch=m.group("arch"),
        )

    def __str__(self) -> str:
        return f"{self.channel}:{self.id}/{self.version}/{self.arch}"


@dataclass
class FuzzyReference:
    """A partially specified reference used to look up catalog entries."""

    id: str
    channel: str | None = None
    version: str | None = None
    arch: str | None = None

    @classmethod
    def parse(cls, raw: str) -> "FuzzyReference":
        m = _REFERENCE_RE.fullmatch(raw)
        if not m:
            raise ValueError(f"{raw!r} is not a reference like [channel:]id[/version[/arch]]")
        return cls(
            id=m.group("id"),
            channel=m.group("channel"),
            version=m.group("version"),
            arch=m.group("arch"),
        )

    def matches(self, ref: Reference) -> bool:
        if ref.id != self.id:
            return False
        if self.channel and ref.channel != self.channel:
            return False
        if self.arch and ref.arch != self.arch:
            return False
        if self.version:
            # "1.2" matches 1.2.3 and 1.2.3.1, but not 1.20.0
            wanted = [s for s in self.version.split(".") if s]
            return str(ref.version).split(".")[: len(wanted)] == wanted
        return True

    def __str__(self) -> str:
        s = f"{self.channel}:{self.id}" if self.channel else self.id
        if self.version:
            s += f"/{self.version}"
            if self.arch:
                s += f"/{self.arch}"
        return s
