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

from .errors import ErrorKind, ParseResult, VersionError, check_u64

_V1_RE = re.compile(
    r"(0|[1-9][0-9]*)\.(0|[1-9][0-9]*)\.(0|[1-9][0-9]*)(?:\.(0|[1-9][0-9]*))?"
)


@dataclass(eq=False)
class VersionV1:
    """Strict dotted version, "major.minor.patch[.tweak]".

    `==` requires both sides to agree on whether a tweak is present, while the
    ordering operators treat a missing tweak as 0. So "1.2.4" and "1.2.4.0" are
    not equal, yet each is <= the other.
    """

    major: int
    minor: int
    patch: int
    tweak: int | None = None

    @classmethod
    def from_string(cls, raw: str) -> "VersionV1":
        if not isinstance(raw, str):
            raise TypeError("Version must be a string")

        matched = _V1_RE.fullmatch(raw)
        if not matched:
            raise VersionError(
                ErrorKind.INVALID_FORMAT,
                raw,
                "version regex mismatched, please use four digits version like 1.0.0.0",
            )

        major, minor, patch, tweak = matched.groups()
        return cls(
            major=check_u64(int(major), "major", raw),
            minor=check_u64(int(minor), "minor", raw),
            patch=check_u64(int(patch), "patch", raw),
            tweak=check_u64(int(tweak), "tweak", raw) if tweak is not None else None,
        )

    @classmethod
    def parse(cls, raw: str) -> ParseResult["VersionV1"]:
        try:
            return ParseResult.success(cls.from_string(raw))
        except VersionError as e:
            return ParseResult.failure(e)

    @property
    def release(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def has_meaningful_tweak(self) -> bool:
        """A tweak of 0 carries no more information than no tweak at all."""
        return bool(self.tweak)

    def ignore_tweak(self) -> None:
        self.tweak = None

    def _key(self) -> tuple[int, int, int, int]:
        return (self.major, self.minor, self.patch, self.tweak or 0)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VersionV1):
            return NotImplemented
        if (self.tweak is None) != (other.tweak is None):
            return False
        return self._key() == other._key()

    def __lt__(self, other: "VersionV1") -> bool:
        return self._key() < other._key()

    def __gt__(self, other: "VersionV1") -> bool:
        return self._key() > other._key()

    def __le__(self, other: "VersionV1") -> bool:
        return self._key() <= other._key()

    def __ge__(self, other: "VersionV1") -> bool:
        return self._key() >= other._key()

    def __str__(self) -> str:
        s = f"{self.major}.{self.minor}.{self.patch}"
        if self.tweak is not None:
            s += f".{self.tweak}"
        return s
