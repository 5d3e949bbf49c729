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
from itertools import zip_longest

from .errors import ErrorKind, IncomparableVersionError, ParseResult, VersionError

_NUMERIC_RE = re.compile(r"[0-9]+")


def _segment_key(segment: str) -> tuple[int, int | str]:
    # Numbers sort before text so that mixed segments still order transitively.
    if _NUMERIC_RE.fullmatch(segment):
        return (0, int(segment))
    return (1, segment)


def compare_segments(lhs: tuple[str, ...], rhs: tuple[str, ...]) -> int:
    """Segment-wise three-way comparison, missing segments count as "0"."""
    for a, b in zip_longest(lhs, rhs, fillvalue="0"):
        ka, kb = _segment_key(a), _segment_key(b)
        if ka != kb:
            return -1 if ka < kb else 1
    return 0


@dataclass(frozen=True, eq=False)
class FallbackVersion:
    """Any dot separated string that neither stricter grammar accepts."""

    segments: tuple[str, ...]

    @classmethod
    def from_string(cls, raw: str) -> "FallbackVersion":
        if not isinstance(raw, str):
            raise TypeError("Version must be a string")

        segments = tuple(s for s in raw.split(".") if s)
        if not segments or not raw.strip():
            raise VersionError(
                ErrorKind.EMPTY_INPUT, raw, "parse fallback version failed"
            )
        return cls(segments)

    @classmethod
    def parse(cls, raw: str) -> ParseResult["FallbackVersion"]:
        try:
            return ParseResult.success(cls.from_string(raw))
        except VersionError as e:
            return ParseResult.failure(e)

    def compare(self, other: "FallbackVersion") -> int:
        return compare_segments(self.segments, other.segments)

    def compare_with_other_version(self, raw: str) -> int:
        """Compare against the canonical string of a version of another scheme.

        Returns a negative number, zero or a positive number as `self` is
        lower than, equal to or higher than `raw`.
        """
        result = FallbackVersion.parse(raw)
        if not result:
            assert result.error is not None
            raise IncomparableVersionError(
                result.error.kind, raw, result.error.message
            ) from result.error
        return self.compare(result.unwrap())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FallbackVersion):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: "FallbackVersion") -> bool:
        return self.compare(other) < 0

    def __gt__(self, other: "FallbackVersion") -> bool:
        return self.compare(other) > 0

    def __le__(self, other: "FallbackVersion") -> bool:
        return self.compare(other) <= 0

    def __ge__(self, other: "FallbackVersion") -> bool:
        return self.compare(other) >= 0

    def __str__(self) -> str:
        return ".".join(self.segments)
