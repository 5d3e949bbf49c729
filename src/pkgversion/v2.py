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

"""Semantic versions with an extra security counter.

Grammar, printing and semver precedence all come from the `semver` package.
The security counter rides in the build metadata as a trailing
`security.<n>` pair ("1.2.3+build.5.security.1"), and breaks ties between
versions that semver itself considers equal.
"""

import re
from dataclasses import dataclass, replace
from enum import Enum

import semver

from .errors import ErrorKind, ParseResult, VersionError, check_u64

_SECURITY_RE = re.compile(r"(?:^|\.)security\.(0|[1-9][0-9]*)$")
_NUMERIC_RE = re.compile(r"[0-9]+")


class Increment(Enum):
    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    PRERELEASE = "prerelease"
    SECURITY = "security"


def _split_security(build: str) -> tuple[str, int]:
    m = _SECURITY_RE.search(build)
    if not m:
        return build, 0
    return build[: m.start()], int(m.group(1))


@dataclass(frozen=True, eq=False)
class VersionV2:
    major: int = 0
    minor: int = 0
    patch: int = 0
    # Empty means a release version
    prerelease: str = ""
    # Never takes part in comparisons
    build_meta: str = ""
    # 0 means no security revision
    security: int = 0

    @classmethod
    def from_string(cls, raw: str) -> "VersionV2":
        if not isinstance(raw, str):
            raise TypeError("Version must be a string")

        text = raw[1:] if raw[:1] in ("v", "V") else raw
        # semver anchors its pattern with "$", which lets a trailing newline through
        if text.endswith("\n"):
            raise VersionError(
                ErrorKind.INVALID_FORMAT, raw, f"{text!r} is not valid SemVer string"
            )
        try:
            engine = semver.Version.parse(text)
        except ValueError as e:
            raise VersionError(ErrorKind.INVALID_FORMAT, raw, str(e)) from e
        except TypeError as e:
            raise VersionError(ErrorKind.UNDERLYING_ENGINE_ERROR, raw, str(e)) from e

        build_meta, security = _split_security(engine.build or "")
        return cls(
            major=check_u64(engine.major, "major", raw),
            minor=check_u64(engine.minor, "minor", raw),
            patch=check_u64(engine.patch, "patch", raw),
            prerelease=engine.prerelease or "",
            build_meta=build_meta,
            security=check_u64(security, "security", raw),
        )

    @classmethod
    def parse(cls, raw: str) -> ParseResult["VersionV2"]:
        try:
            return ParseResult.success(cls.from_string(raw))
        except VersionError as e:
            return ParseResult.failure(e)

    @classmethod
    def _from_engine(cls, engine: semver.Version) -> "VersionV2":
        build_meta, security = _split_security(engine.build or "")
        return cls(
            major=engine.major,
            minor=engine.minor,
            patch=engine.patch,
            prerelease=engine.prerelease or "",
            build_meta=build_meta,
            security=security,
        )

    @property
    def release(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    @property
    def build(self) -> str:
        """Build metadata as rendered, including the security pair."""
        parts = [self.build_meta] if self.build_meta else []
        if self.security:
            parts.append(f"security.{self.security}")
        return ".".join(parts)

    def _engine(self) -> semver.Version:
        return semver.Version(
            self.major,
            self.minor,
            self.patch,
            self.prerelease or None,
            self.build or None,
        )

    def compare(self, other: "VersionV2") -> int:
        result = self._engine().compare(other._engine())
        if result:
            return result
        return (self.security > other.security) - (self.security < other.security)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VersionV2):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: "VersionV2") -> bool:
        return self.compare(other) < 0

    def __gt__(self, other: "VersionV2") -> bool:
        return self.compare(other) > 0

    def __le__(self, other: "VersionV2") -> bool:
        return self.compare(other) <= 0

    def __ge__(self, other: "VersionV2") -> bool:
        return self.compare(other) >= 0

    def __str__(self) -> str:
        return str(self._engine())

    # Increments

    def _check_prerelease(self, prerelease: str) -> None:
        if not prerelease:
            return
        try:
            semver.Version.parse(f"0.0.0-{prerelease}")
        except ValueError as e:
            raise VersionError(
                ErrorKind.UNDERLYING_ENGINE_ERROR,
                prerelease,
                f"invalid prerelease identifier for {self}",
            ) from e

    def _bounded(self, bumped: "VersionV2") -> "VersionV2":
        for field in ("major", "minor", "patch", "security"):
            check_u64(getattr(bumped, field), field, str(self))
        return bumped

    def _with_prerelease(self, engine: semver.Version, prerelease: str) -> "VersionV2":
        return self._bounded(
            self._from_engine(engine.replace(prerelease=prerelease or None))
        )

    def next_major(self, prerelease: str = "") -> "VersionV2":
        self._check_prerelease(prerelease)
        return self._with_prerelease(self._engine().bump_major(), prerelease)

    def next_minor(self, prerelease: str = "") -> "VersionV2":
        self._check_prerelease(prerelease)
        return self._with_prerelease(self._engine().bump_minor(), prerelease)

    def next_patch(self, prerelease: str = "") -> "VersionV2":
        self._check_prerelease(prerelease)
        if self.prerelease and not prerelease:
            # Releasing a prerelease keeps the version core.
            return VersionV2(self.major, self.minor, self.patch)
        return self._with_prerelease(self._engine().bump_patch(), prerelease)

    def next_prerelease(self, prerelease: str = "") -> "VersionV2":
        self._check_prerelease(prerelease)
        if not self.prerelease:
            return self._bounded(
                VersionV2(self.major, self.minor, self.patch + 1, prerelease or "0")
            )

        identifiers = self.prerelease.split(".")
        if prerelease and identifiers[0] != prerelease:
            return VersionV2(self.major, self.minor, self.patch, prerelease)

        for i in reversed(range(len(identifiers))):
            if _NUMERIC_RE.fullmatch(identifiers[i]):
                identifiers[i] = str(int(identifiers[i]) + 1)
                break
        else:
            identifiers.append("0")
        return VersionV2(self.major, self.minor, self.patch, ".".join(identifiers))

    def next_security(self, prerelease: str = "") -> "VersionV2":
        self._check_prerelease(prerelease)
        return self._bounded(replace(self, security=self.security + 1))

    def increment(self, part: Increment, prerelease: str = "") -> "VersionV2":
        bump = {
            Increment.MAJOR: self.next_major,
            Increment.MINOR: self.next_minor,
            Increment.PATCH: self.next_patch,
            Increment.PRERELEASE: self.next_prerelease,
            Increment.SECURITY: self.next_security,
        }[part]
        return bump(prerelease)
