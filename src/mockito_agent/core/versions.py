"""Dotted-component version ordering.

Maven versions are not guaranteed to be PEP 440 or semver, so versions are
compared segment by segment: numerically when both segments are decimal
integers, lexicographically otherwise. The shorter version is padded with
``"0"`` segments, which makes ``5.14`` equal to ``5.14.0``.
"""

from __future__ import annotations

from functools import total_ordering

_PAD_SEGMENT = "0"


def _segments(version: str) -> list[str]:
    return version.strip().split(".")


def _compare_segment(left: str, right: str) -> int:
    if left.isdecimal() and right.isdecimal():
        left_num, right_num = int(left), int(right)
        return (left_num > right_num) - (left_num < right_num)
    return (left > right) - (left < right)


def compare_versions(left: str, right: str) -> int:
    """Return -1, 0 or 1 as ``left`` is lower than, equal to or higher than ``right``."""
    left_parts = _segments(left)
    right_parts = _segments(right)
    width = max(len(left_parts), len(right_parts))
    left_parts += [_PAD_SEGMENT] * (width - len(left_parts))
    right_parts += [_PAD_SEGMENT] * (width - len(right_parts))

    for left_part, right_part in zip(left_parts, right_parts):
        result = _compare_segment(left_part, right_part)
        if result:
            return result
    return 0


def is_lower_than(version: str, threshold: str) -> bool:
    return compare_versions(version, threshold) < 0


@total_ordering
class DottedVersion:
    """Orderable wrapper around a version string."""

    __slots__ = ("raw",)

    def __init__(self, raw: str) -> None:
        self.raw = raw

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DottedVersion):
            return NotImplemented
        return compare_versions(self.raw, other.raw) == 0

    def __lt__(self, other: "DottedVersion") -> bool:
        if not isinstance(other, DottedVersion):
            return NotImplemented
        return compare_versions(self.raw, other.raw) < 0

    def __hash__(self) -> int:
        # Equal versions must hash alike: drop trailing padding segments.
        parts = [
            str(int(part)) if part.isdecimal() else part for part in _segments(self.raw)
        ]
        while len(parts) > 1 and parts[-1] == _PAD_SEGMENT:
            parts.pop()
        return hash(tuple(parts))

    def __repr__(self) -> str:
        return f"DottedVersion({self.raw!r})"

    def __str__(self) -> str:
        return self.raw


__all__ = ["DottedVersion", "compare_versions", "is_lower_than"]
