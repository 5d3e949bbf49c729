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

"""Comparison rules between version schemes.

Each pair of schemes has its own rule. The rules are consistent pairwise
(`<`, `==` and `>` never overlap and never leave a gap), but they do not
compose into a single order over all three schemes at once.
"""

import operator
from collections.abc import Callable
from typing import Any, NamedTuple

from .fallback import FallbackVersion
from .v1 import VersionV1
from .v2 import VersionV2


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def compare_v1_v2(v1: VersionV1, v2: VersionV2) -> int:
    """Order a plain V1 release against a V2 version.

    Same release tuple: equal only when V1 has no tweak (or tweak 0) and V2 is
    neither a prerelease nor a security release. A security release is newer
    than the plain V1 release; a nonzero tweak or a V2 prerelease makes the V1
    side the newer one.
    """
    if v1.release != v2.release:
        return _cmp(v1.release, v2.release)

    if not v1.has_meaningful_tweak() and not v2.prerelease:
        return -1 if v2.security else 0

    return 1


def compare_v1_fallback(v1: VersionV1, fallback: FallbackVersion) -> int:
    return -fallback.compare_with_other_version(str(v1))


def compare_v2_fallback(v2: VersionV2, fallback: FallbackVersion) -> int:
    return -fallback.compare_with_other_version(str(v2))


def compare_v2_release(v2: VersionV2, major: int, minor: int, patch: int) -> int:
    """Compare a V2 version against a bare (major, minor, patch) release."""
    release = (major, minor, patch)
    if v2.release != release:
        return _cmp(v2.release, release)
    if v2.prerelease:
        return -1
    return 1 if v2.security else 0


def _mirrored(compare: Callable[[Any, Any], int]) -> Callable[[Any, Any], int]:
    return lambda a, b: -compare(b, a)


class Rule(NamedTuple):
    equals: Callable[[Any, Any], bool]
    less: Callable[[Any, Any], bool]


def _rule(compare: Callable[[Any, Any], int]) -> Rule:
    return Rule(
        equals=lambda a, b: compare(a, b) == 0,
        less=lambda a, b: compare(a, b) < 0,
    )


# Within a scheme the scheme's own operators apply.
_HOMOGENEOUS = Rule(equals=operator.eq, less=operator.lt)

RULES: dict[tuple[type, type], Rule] = {
    (VersionV1, VersionV1): _HOMOGENEOUS,
    (VersionV2, VersionV2): _HOMOGENEOUS,
    (FallbackVersion, FallbackVersion): _HOMOGENEOUS,
    (VersionV1, VersionV2): _rule(compare_v1_v2),
    (VersionV2, VersionV1): _rule(_mirrored(compare_v1_v2)),
    (VersionV1, FallbackVersion): _rule(compare_v1_fallback),
    (FallbackVersion, VersionV1): _rule(_mirrored(compare_v1_fallback)),
    (VersionV2, FallbackVersion): _rule(compare_v2_fallback),
    (FallbackVersion, VersionV2): _rule(_mirrored(compare_v2_fallback)),
}


def rule_for(lhs: object, rhs: object) -> Rule:
    return RULES[(type(lhs), type(rhs))]
