"""Glob matching for repository-relative POSIX paths."""

from __future__ import annotations

import re
from functools import lru_cache


def expand_braces(pattern: str) -> list[str]:
    """Expand `{a,b}` alternations, innermost groups included, in source order."""
    depth = 0
    start = -1
    for index, char in enumerate(pattern):
        if char == "{":
            if depth == 0:
                start = index
            depth += 1
        elif char == "}" and depth > 0:
            depth -= 1
            if depth == 0:
                options = _split_top_level(pattern[start + 1 : index])
                if len(options) < 2:
                    continue
                prefix = pattern[:start]
                suffix = pattern[index + 1 :]
                expanded: list[str] = []
                for option in options:
                    expanded.extend(expand_braces(prefix + option + suffix))
                return expanded
    return [pattern]


def _split_top_level(body: str) -> list[str]:
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for char in body:
        if char == "," and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
        current.append(char)
    parts.append("".join(current))
    return parts


def translate_glob(pattern: str, dot: bool = False) -> str:
    """Translate one brace-free glob into a regular expression body.

    Unless `dot` is set, wildcards never match a path segment that starts
    with `.`; a literal `.` in the glob still does.
    """
    hidden = "" if dot else r"(?!\.)"
    output: list[str] = []
    index = 0
    length = len(pattern)
    while index < length:
        segment_start = index == 0 or pattern[index - 1] == "/"
        if pattern.startswith("**/", index):
            output.append(f"(?:{hidden}[^/]*/)*")
            index += 3
            continue
        if pattern.startswith("**", index):
            output.append(f"(?:{hidden}[^/]*(?:/{hidden}[^/]*)*)?" if hidden else ".*")
            index += 2
            continue
        char = pattern[index]
        if segment_start and char in "*?[":
            output.append(hidden)
        if char == "*":
            output.append("[^/]*")
        elif char == "?":
            output.append("[^/]")
        elif char == "[":
            end = pattern.find("]", index + 2)
            if end == -1:
                output.append(re.escape(char))
            else:
                body = pattern[index + 1 : end].replace("\\", "\\\\")
                if body.startswith("!"):
                    body = "^" + body[1:]
                output.append(f"[{body}]")
                index = end
        else:
            output.append(re.escape(char))
        index += 1
    return "".join(output)


@lru_cache(maxsize=64)
def compile_glob(pattern: str, dot: bool = False) -> re.Pattern[str]:
    """Compile a glob (with `**`, `*`, `?`, `[...]` and `{a,b}`) to a full-match regex."""
    alternatives = [translate_glob(item, dot) for item in expand_braces(pattern)]
    return re.compile("(?:" + "|".join(alternatives) + ")")


def glob_matches(relative_path: str, pattern: str, dot: bool = False) -> bool:
    """Return True when a POSIX relative path matches the glob."""
    return compile_glob(pattern, dot).fullmatch(relative_path) is not None


def pruned_dir_names(pattern: str) -> set[str]:
    """Extract literal directory names from `**/name/**` alternatives for walk pruning."""
    output: set[str] = set()
    for item in expand_braces(pattern):
        if not item.startswith("**/") or not item.endswith("/**"):
            continue
        name = item[3:-3].strip("/")
        if not name or "/" in name:
            continue
        if any(char in name for char in "*?[]{}"):
            continue
        output.add(name)
    return output
