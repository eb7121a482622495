"""Segment-wise glob matching for ignore patterns.

Patterns are matched against POSIX relative paths one segment at a time.
``**`` matches zero or more whole segments; ``*``, ``?`` and ``[...]``
match within a single segment.  Matching is case-sensitive.

Wildcards never match a segment that starts with ``.``; spell the dot
out (``.*``, ``.cache/**``) to reach hidden files and directories.
"""

from __future__ import annotations

from fnmatch import fnmatchcase as _fnmatchcase
from typing import Sequence

DEFAULT_IGNORE: tuple[str, ...] = ("**/repos",)


def _normalize(path: str) -> str:
    """Return *path* with forward slashes and no leading ``./`` or ``/``."""
    path = path.replace("\\", "/")
    while path.startswith("./"):
        path = path[2:]
    return path.strip("/")


def _split(path: str) -> list[str]:
    return [seg for seg in path.split("/") if seg]


def _is_hidden(segment: str) -> bool:
    return segment.startswith(".")


def _segment_matches(part: str, pat: str) -> bool:
    if _is_hidden(part) and not _is_hidden(pat):
        return False
    return _fnmatchcase(part, pat)


def _match_segments(pat: Sequence[str], parts: Sequence[str]) -> bool:
    """Match path *parts* against pattern segments *pat*."""
    # memo[(i, j)]: does pat[i:] match parts[j:]
    memo: dict[tuple[int, int], bool] = {}

    def _m(i: int, j: int) -> bool:
        key = (i, j)
        if key in memo:
            return memo[key]
        if i == len(pat):
            result = j == len(parts)
        elif pat[i] == "**":
            # zero segments, or consume one non-hidden segment and stay on **
            result = _m(i + 1, j) or (
                j < len(parts) and not _is_hidden(parts[j]) and _m(i, j + 1)
            )
        elif j == len(parts):
            result = False
        else:
            result = _segment_matches(parts[j], pat[i]) and _m(i + 1, j + 1)
        memo[key] = result
        return result

    return _m(0, 0)


class IgnoreMatcher:
    """A compiled list of glob patterns.

    A path is ignored if it, or any of its ancestor directories, matches
    at least one pattern.
    """

    def __init__(self, patterns: Sequence[str]) -> None:
        self._patterns = tuple(patterns)
        self._compiled = [_split(_normalize(p)) for p in self._patterns if _normalize(p)]

    def __repr__(self) -> str:
        return f"IgnoreMatcher({list(self._patterns)!r})"

    @property
    def patterns(self) -> tuple[str, ...]:
        return self._patterns

    def match(self, path: str) -> bool:
        """True if *path* itself matches any pattern."""
        parts = _split(_normalize(path))
        if not parts:
            return False
        return any(_match_segments(pat, parts) for pat in self._compiled)

    def is_ignored(self, path: str) -> bool:
        """True if *path* or one of its parent directories matches."""
        parts = _split(_normalize(path))
        for depth in range(1, len(parts) + 1):
            prefix = parts[:depth]
            if any(_match_segments(pat, prefix) for pat in self._compiled):
                return True
        return False

    __call__ = is_ignored


def compile_patterns(patterns: Sequence[str] | None = None) -> IgnoreMatcher:
    """Compile *patterns* (default ``["**/repos"]``) into a matcher."""
    if patterns is None:
        patterns = DEFAULT_IGNORE
    return IgnoreMatcher(patterns)
