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

import copy

from .comparator import rule_for
from .errors import ErrorKind, ParseResult, VersionError
from .fallback import FallbackVersion
from .v1 import VersionV1
from .v2 import VersionV2

Scheme = VersionV1 | VersionV2 | FallbackVersion


class Version:
    """A catalog version in exactly one of the three schemes.

    Use `Version.parse` to build one from a string. Callers never need to
    know which scheme is active; comparisons between schemes follow the
    rules in `comparator`.
    """

    def __init__(self, version: Scheme) -> None:
        if not isinstance(version, (VersionV1, VersionV2, FallbackVersion)):
            raise TypeError(
                "Version must wrap a VersionV1, VersionV2 or FallbackVersion"
            )
        self._version = version

    @classmethod
    def parse(cls, raw: str, allow_fallback: bool = True) -> ParseResult["Version"]:
        """Parse `raw` as V2, then (if allowed) V1, then as a fallback version."""
        if not isinstance(raw, str):
            raise TypeError("Version must be a string")

        v2 = VersionV2.parse(raw)
        if v2:
            return ParseResult.success(cls(v2.unwrap()))

        if not allow_fallback:
            assert v2.error is not None
            if v2.error.kind is ErrorKind.NUMERIC_OVERFLOW:
                return ParseResult.failure(v2.error)
            return ParseResult.failure(
                VersionError(ErrorKind.INVALID_FORMAT, raw, v2.error.message)
            )

        v1 = VersionV1.parse(raw)
        if v1:
            return ParseResult.success(cls(v1.unwrap()))

        fallback = FallbackVersion.parse(raw)
        if fallback:
            return ParseResult.success(cls(fallback.unwrap()))

        assert fallback.error is not None
        return ParseResult.failure(fallback.error)

    @property
    def scheme(self) -> Scheme:
        return self._version

    def is_v1(self) -> bool:
        return isinstance(self._version, VersionV1)

    def has_tweak(self) -> bool:
        return isinstance(self._version, VersionV1) and self._version.tweak is not None

    def ignore_tweak(self) -> None:
        if isinstance(self._version, VersionV1):
            self._version.ignore_tweak()

    def compare(self, other: "Version") -> int:
        if self < other:
            return -1
        if self == other:
            return 0
        return 1

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return rule_for(self._version, other._version).equals(
            self._version, other._version
        )

    def __lt__(self, other: "Version") -> bool:
        assert isinstance(other, Version)
        return rule_for(self._version, other._version).less(
            self._version, other._version
        )

    def __gt__(self, other: "Version") -> bool:
        return not self == other and not self < other

    def __le__(self, other: "Version") -> bool:
        return self == other or self < other

    def __ge__(self, other: "Version") -> bool:
        return not self < other

    def __copy__(self) -> "Version":
        return Version(copy.deepcopy(self._version))

    def __deepcopy__(self, memo: dict) -> "Version":
        return Version(copy.deepcopy(self._version, memo))

    def __str__(self) -> str:
        return str(self._version)

    def __repr__(self) -> str:
        return f"Version({str(self)!r})"
