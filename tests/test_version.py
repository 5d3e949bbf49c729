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

import pytest

from pkgversion import ErrorKind, FallbackVersion, Version, VersionV1, VersionV2
from tests.conftest import v


def as_v1(raw: str) -> Version:
    return Version(VersionV1.from_string(raw))


def test_version_smaller():
    assert v("1.0.0") < v("1.0.1")
    assert v("1.0.0") < v("1.1.0")
    assert v("1.0.0") < v("2.0.0")
    assert v("1.0.0-alpha") < v("1.0.0")
    assert v("A") < v("B")


def test_version_greater():
    assert v("1.0.1") > v("1.0.0")
    assert v("1.0.0") > v("1.0.0-rc.1")
    assert v("1.0.0+security.1") > v("1.0.0")
    assert v("B") > v("A")


class TestParse:
    @pytest.mark.parametrize(
        ("raw", "scheme"),
        [
            ("1.2.3", VersionV2),
            ("v1.2.3", VersionV2),
            ("1.2.3-rc.1+security.2", VersionV2),
            ("1.2.3.4", VersionV1),
            ("1.2.3.0", VersionV1),
            ("1.2", FallbackVersion),
            ("2024.01.15", FallbackVersion),
            ("1.2.3.4.5", FallbackVersion),
        ],
    )
    def test_scheme_selection(self, raw: str, scheme: type):
        assert isinstance(v(raw).scheme, scheme)

    def test_semver_wins_over_v1(self):
        assert not v("1.2.3").is_v1()

    @pytest.mark.parametrize("raw", ["", "1.2", "1.2.3.4", "foo"])
    def test_strict_mode_reports_invalid_format(self, raw: str):
        result = Version.parse(raw, allow_fallback=False)
        assert not result
        assert result.error is not None
        assert result.error.kind is ErrorKind.INVALID_FORMAT
        assert result.error.raw == raw

    def test_strict_mode_reports_overflow(self):
        result = Version.parse("1.2.99999999999999999999", allow_fallback=False)
        assert result.error is not None
        assert result.error.kind is ErrorKind.NUMERIC_OVERFLOW

    @pytest.mark.parametrize("raw", ["", "...", "  "])
    def test_nothing_left_to_parse(self, raw: str):
        result = Version.parse(raw, allow_fallback=True)
        assert result.error is not None
        assert result.error.kind is ErrorKind.EMPTY_INPUT

    def test_non_string_input(self):
        with pytest.raises(TypeError):
            Version.parse(123)  # type: ignore[arg-type]

    def test_constructor_requires_a_scheme(self):
        with pytest.raises(TypeError):
            Version("1.2.3")  # type: ignore[arg-type]


class TestCrossScheme:
    def test_v1_against_security_release(self):
        assert as_v1("1.2.3") < v("1.2.3+security.1")
        assert v("1.2.3+security.1") > as_v1("1.2.3")

    def test_v1_equals_plain_v2(self):
        assert as_v1("1.2.3") == v("1.2.3")
        assert v("1.2.3") == as_v1("1.2.3")
        assert v("1.2.3") == v("1.2.3.0")

    def test_v1_against_prerelease(self):
        assert as_v1("1.2.3") != v("1.2.3-alpha")
        assert as_v1("1.2.3") > v("1.2.3-alpha")
        assert v("1.2.3-alpha") < as_v1("1.2.3")

    def test_fallback_against_semver(self):
        assert v("1.2") < v("1.2.3")
        assert v("1.2.3") < v("1.2.3.a")
        assert v("1.3") > v("1.2.3")

    def test_tweak_presence_at_version_level(self):
        with_zero, without = as_v1("1.2.4.0"), as_v1("1.2.4")
        assert with_zero != without
        assert not with_zero < without
        assert not without < with_zero
        assert with_zero >= without and without >= with_zero

    def test_exactly_one_relation_within_pairs(self):
        values = [v(s) for s in ["1.2.3-rc.1", "1.2.3", "1.2.3+security.1", "1.2.3.1", "1.2.4", "1.2"]]
        for a in values:
            for b in values:
                assert [a < b, a == b, a > b].count(True) == 1

    def test_compare(self):
        assert v("1.0.0").compare(v("1.0.1")) == -1
        assert v("1.0.0").compare(v("1.0.0.0")) == 0
        assert v("1.0.1").compare(v("1.0.0")) == 1


def test_sorting_mixed_schemes():
    raws = ["1.2.3", "1.2.3-rc1", "1.2.4", "1.2.3.1"]
    ordered = sorted(v(raw) for raw in raws)
    assert [str(x) for x in ordered] == ["1.2.3-rc1", "1.2.3", "1.2.3.1", "1.2.4"]
    assert [x.is_v1() for x in ordered] == [False, False, True, False]


class TestTweak:
    def test_has_tweak(self):
        assert v("1.2.3.0").has_tweak()
        assert v("1.2.3.4").has_tweak()
        assert not v("1.2.3").has_tweak()
        assert not v("1.2").has_tweak()

    def test_ignore_tweak(self):
        x = v("1.2.3.4")
        x.ignore_tweak()
        assert not x.has_tweak()
        assert str(x) == "1.2.3"

    def test_ignore_tweak_on_other_schemes_is_a_noop(self):
        x = v("1.2.3-rc.1")
        x.ignore_tweak()
        assert str(x) == "1.2.3-rc.1"


class TestValueSemantics:
    def test_copy_is_independent(self):
        original = v("1.2.3.4")
        for duplicate in (copy.copy(original), copy.deepcopy(original)):
            duplicate.ignore_tweak()
            assert str(duplicate) == "1.2.3"
        assert str(original) == "1.2.3.4"

    def test_not_hashable(self):
        with pytest.raises(TypeError):
            hash(v("1.2.3"))

    def test_repr(self):
        assert repr(v("1.2.3")) == "Version('1.2.3')"

    @pytest.mark.parametrize("raw", ["1.2.3", "1.2.3-rc.1+build.1.security.2", "1.2.3.4", "1.2.a"])
    def test_str_round_trip(self, raw: str):
        assert str(v(raw)) == raw

    def test_not_equal_to_strings(self):
        assert v("1.2.3") != "1.2.3"
