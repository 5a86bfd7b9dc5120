"""Shell-glob matching of entry names.

fnmatch silently treats malformed patterns as literals and has no
backslash escapes, so patterns are checked and normalised first: a
malformed pattern is rejected, and ``\\*``, ``\\?``, ``\\[`` are turned
into single-character classes that fnmatch understands.
"""

import fnmatch

_GLOB_SPECIAL = "*?["


class PatternError(ValueError):
    """Raised when a glob pattern is malformed."""


def normalize_pattern(pattern: str) -> str:
    """Validate a glob pattern and rewrite it for fnmatch.

    A pattern is malformed if it ends with an unescaped backslash or
    contains a character class ``[...]`` that is empty or never closed.

    Args:
        pattern: Glob pattern to check.

    Returns:
        Equivalent pattern with backslash escapes removed.

    Raises:
        PatternError: If the pattern is malformed.
    """
    out: list[str] = []
    i = 0
    n = len(pattern)
    while i < n:
        char = pattern[i]
        if char == "\\":
            if i + 1 >= n:
                raise PatternError(f"syntax error in pattern {pattern!r}: trailing backslash")
            escaped = pattern[i + 1]
            out.append(f"[{escaped}]" if escaped in _GLOB_SPECIAL else escaped)
            i += 2
        elif char == "[":
            end = _class_end(pattern, i + 1)
            body = pattern[i + 1 : end]
            # fnmatch only knows "!" for negation
            if body.startswith("^"):
                body = "!" + body[1:]
            out.append("[" + body)
            i = end
        else:
            out.append(char)
            i += 1
    return "".join(out)


def _class_end(pattern: str, start: int) -> int:
    """Return the index just past the character class opened before ``start``."""
    i = start
    n = len(pattern)
    if i < n and pattern[i] in "!^":
        i += 1
    if i < n and pattern[i] == "]":
        raise PatternError(f"syntax error in pattern {pattern!r}: empty character class")
    while i < n:
        if pattern[i] == "]":
            return i + 1
        i += 1
    raise PatternError(f"syntax error in pattern {pattern!r}: unterminated character class")


def match_pattern(pattern: str, name: str) -> bool:
    """Match a base name against a glob pattern.

    Matching is case-sensitive on every platform. An empty pattern
    matches everything.

    Args:
        pattern: Glob pattern (``*``, ``?``, ``[...]``).
        name: Entry base name, without directory components.

    Returns:
        True if the name matches.

    Raises:
        PatternError: If the pattern is malformed.
    """
    if not pattern:
        return True
    return fnmatch.fnmatchcase(name, normalize_pattern(pattern))
