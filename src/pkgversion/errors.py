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
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")

# Every numeric version field is an unsigned 64-bit value.
U64_MAX = 2**64 - 1


class ErrorKind(Enum):
    INVALID_FORMAT = "invalid format"
    NUMERIC_OVERFLOW = "numeric overflow"
    UNDERLYING_ENGINE_ERROR = "underlying engine error"
    EMPTY_INPUT = "empty input"


class VersionError(ValueError):
    """A version string could not be turned into a version value.

    The offending input is kept on the error so diagnostics can echo it.
    """

    def __init__(self, kind: ErrorKind, raw: str, message: str) -> None:
        super().__init__(kind, raw, message)
        self.kind = kind
        self.raw = raw
        self.message = message

    def __str__(self) -> str:
        return f"parse version {self.raw!r}: {self.message} ({self.kind.value})"


class IncomparableVersionError(VersionError):
    """Raised when a string operand of a bridging comparison does not parse."""

    def __str__(self) -> str:
        return f"cannot compare against {self.raw!r}: {self.message} ({self.kind.value})"


@dataclass(frozen=True)
class ParseResult(Generic[T]):
    """Outcome of a parse: exactly one of `value` and `error` is set."""

    value: T | None = None
    error: VersionError | None = None

    @classmethod
    def success(cls, value: T) -> "ParseResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: VersionError) -> "ParseResult[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the parsed value or raise the recorded error."""
        if self.error is not None:
            raise self.error
        assert self.value is not None
        return self.value

    def __bool__(self) -> bool:
        return self.ok


def check_u64(value: int, field: str, raw: str) -> int:
    if value > U64_MAX:
        raise VersionError(ErrorKind.NUMERIC_OVERFLOW, raw, f"{field} too large")
    return value
