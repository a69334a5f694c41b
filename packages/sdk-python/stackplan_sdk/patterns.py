"""
Glob Pattern Resolution
=======================

Resolves source-tree glob patterns to files. Supports:
- Recursive patterns: "**/index.ts" matches "index.ts" and "src/index.ts"
- Brace alternatives: "*.{ts,js}" expands to "*.ts" and "*.js"

Hidden files and directories (any path segment starting with ".") are skipped.
"""

import os
import re
from pathlib import Path
from typing import List, Pattern

from stackplan_common.logger import get_logger

logger = get_logger(__name__)

_BRACE_RE = re.compile(r"\{([^{}]*)\}")


def expand_braces(pattern: str) -> List[str]:
    """
    Expand ``{a,b}`` alternatives into separate patterns.

    Examples:
        >>> expand_braces("**/index.{ts,js}")
        ['**/index.ts', '**/index.js']

        >>> expand_braces("src/*.py")
        ['src/*.py']
    """
    match = _BRACE_RE.search(pattern)
    if not match:
        return [pattern]

    prefix, suffix = pattern[: match.start()], pattern[match.end() :]
    expanded: List[str] = []
    for option in match.group(1).split(","):
        for candidate in expand_braces(f"{prefix}{option}{suffix}"):
            if candidate not in expanded:
                expanded.append(candidate)
    return expanded


def compile_glob(pattern: str) -> Pattern[str]:
    """
    Compile a brace-free glob into a regex over POSIX relative paths.

    ``**`` spans any number of directories (including none), ``*`` and
    ``?`` never cross a ``/``.

    Examples:
        >>> bool(compile_glob("**/index.ts").fullmatch("src/index.ts"))
        True
        >>> bool(compile_glob("*.ts").fullmatch("src/index.ts"))
        False
    """
    segments = pattern.strip("/").split("/")
    regex = ""
    for i, segment in enumerate(segments):
        last = i == len(segments) - 1
        if segment == "**":
            regex += ".*" if last else "(?:[^/]+/)*"
            continue
        for char in segment:
            if char == "*":
                regex += "[^/]*"
            elif char == "?":
                regex += "[^/]"
            else:
                regex += re.escape(char)
        if not last:
            regex += "/"
    return re.compile(regex, re.DOTALL)


def find_matching_files(pattern: str, root: Path) -> List[Path]:
    """
    Find files under ``root`` matching ``pattern``.

    The tree is walked once for all brace alternatives, and hidden
    directories are pruned before they are entered.

    Args:
        pattern: Glob pattern relative to root (e.g., "**/*.{ts,js}")
        root: Directory to search from

    Returns:
        Sorted list of absolute file paths

    Examples:
        >>> find_matching_files("**/index.{ts,js}", Path("/project"))
        [Path('/project/index.ts'), Path('/project/src/index.js')]
    """
    if not pattern.strip("/"):
        return []

    regexes = [compile_glob(expanded) for expanded in expand_braces(pattern.lstrip("/"))]
    matched: List[Path] = []

    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [name for name in dirnames if not name.startswith(".")]
        rel_dir = Path(dirpath).relative_to(root)
        for filename in filenames:
            if filename.startswith("."):
                continue
            rel_path = (rel_dir / filename).as_posix()
            if not any(regex.fullmatch(rel_path) for regex in regexes):
                continue
            path = root / rel_dir / filename
            if path.is_file():
                matched.append(path)

    logger.debug("Resolved glob pattern", pattern=pattern, matches=len(matched))
    return sorted(matched)
