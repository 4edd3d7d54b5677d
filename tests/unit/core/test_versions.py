"""Tests for dotted-component version ordering."""

from __future__ import annotations

import pytest

from mockito_agent.core.versions import DottedVersion, compare_versions, is_lower_than


class TestCompareVersions:
    @pytest.mark.parametrize(
        ("left", "right", "expected"),
        [
            ("5.13.0", "5.14.0", -1),
            ("5.14.0", "5.14.0", 0),
            ("5.15.0", "5.14.0", 1),
            ("5.9.0", "5.14.0", -1),
            ("5.14", "5.14.0", 0),
            ("5.14.0.1", "5.14.0", 1),
            ("10.0", "9.9.9", 1),
            (" 5.14.0 ", "5.14.0", 0),
            ("05.14.0", "5.14.0", 0),
        ],
    )
    def test_numeric_segments(self, left: str, right: str, expected: int) -> None:
        assert compare_versions(left, right) == expected
        assert compare_versions(right, left) == -expected

    def test_non_numeric_segments_compare_lexicographically(self) -> None:
        assert compare_versions("5.14.0-beta", "5.14.0-alpha") == 1
        assert compare_versions("1.a", "1.b") == -1

    def test_mixed_segment_falls_back_to_string_order(self) -> None:
        # "0-RC1" vs "0": not both numeric, so plain string order applies
        assert compare_versions("5.14.0-RC1", "5.14.0") == 1
        assert compare_versions("5.13.0-RC1", "5.14.0") == -1


class TestThreshold:
    def test_equal_is_not_lower(self) -> None:
        assert is_lower_than("5.14.0", "5.14.0") is False

    def test_lower(self) -> None:
        assert is_lower_than("5.13.0", "5.14.0") is True

    def test_higher(self) -> None:
        assert is_lower_than("5.15.0", "5.14.0") is False


class TestDottedVersion:
    def test_sorting(self) -> None:
        versions = [DottedVersion(v) for v in ["5.15.0", "4.11.0", "5.14.0", "5.9.1"]]

        assert [str(v) for v in sorted(versions)] == ["4.11.0", "5.9.1", "5.14.0", "5.15.0"]

    def test_padded_versions_are_equal_and_hash_alike(self) -> None:
        assert DottedVersion("5.14") == DottedVersion("5.14.0")
        assert len({DottedVersion("5.14"), DottedVersion("5.14.0")}) == 1

    def test_comparison_with_other_types(self) -> None:
        assert DottedVersion("1.0") != "1.0"
        with pytest.raises(TypeError):
            DottedVersion("1.0") < "1.0"  # noqa: B015
