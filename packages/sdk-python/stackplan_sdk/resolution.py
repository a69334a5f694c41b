"""
Runtime Version Resolution
==========================

Maps a declared runtime-version constraint (e.g. ``engines.node`` in
package.json) to a package reference.

Strategies are tried in order and the first match wins:

1. No constraint, or the "any version" wildcard -> default package
2. ``N`` / ``N.x``                               -> major N
3. ``>=N...``                                    -> major N
4. Anything else                                 -> default package

A major extracted by strategy 2 or 3 must be in the supported allow-list,
otherwise resolution fails. It never falls back to the default.
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional, Pattern, Tuple

from stackplan_common import NodeDefaults, UnsupportedVersionError
from stackplan_common.logger import get_logger
from stackplan_schema import Pkg

logger = get_logger(__name__)

# ASCII digits only, anchored at the true end of the string
MAJOR_PATTERN = re.compile(r"^(\d+)\.?x?\Z", re.ASCII)
GTE_PATTERN = re.compile(r"^>=(\d+)", re.ASCII)


@dataclass(frozen=True)
class VersionMatch:
    """Outcome of the first matching strategy."""

    strategy: str
    """Name of the strategy that matched"""

    major: Optional[int] = None
    """Extracted major version; None selects the default package"""


Strategy = Callable[[Optional[str]], Optional[VersionMatch]]


def _regex_strategy(name: str, pattern: Pattern[str]) -> Strategy:
    def strategy(constraint: Optional[str]) -> Optional[VersionMatch]:
        if constraint is None:
            return None
        match = pattern.match(constraint)
        if not match:
            return None
        return VersionMatch(strategy=name, major=int(match.group(1)))

    return strategy


class VersionResolver:
    """
    Ordered version-constraint resolution for one runtime.

    Example:
        >>> NODE_VERSION_RESOLVER.resolve(">=14.10.3 <16")
        Pkg(name='nodejs-14_x')
        >>> NODE_VERSION_RESOLVER.resolve(None)
        Pkg(name='pkgs.nodejs')
    """

    def __init__(
        self,
        runtime: str,
        supported: Tuple[int, ...],
        default_pkg: str,
        pkg_template: str,
        any_version: str = "*",
    ):
        self.runtime = runtime
        self.supported = supported
        self.default_pkg = default_pkg
        self.pkg_template = pkg_template
        self.any_version = any_version
        self.strategies: Tuple[Tuple[str, Strategy], ...] = (
            ("default", self._unset_or_any),
            ("major", _regex_strategy("major", MAJOR_PATTERN)),
            ("range", _regex_strategy("range", GTE_PATTERN)),
            ("fallback", lambda _constraint: VersionMatch(strategy="fallback")),
        )

    def _unset_or_any(self, constraint: Optional[str]) -> Optional[VersionMatch]:
        if constraint is None or constraint == self.any_version:
            return VersionMatch(strategy="default")
        return None

    def match(self, constraint: Optional[str]) -> VersionMatch:
        """Return the result of the first strategy that matches."""
        for _name, strategy in self.strategies:
            result = strategy(constraint)
            if result is not None:
                return result
        # The fallback strategy always matches
        raise AssertionError("no version strategy matched")

    def package_for(self, major: int) -> Pkg:
        """
        Raises:
            UnsupportedVersionError: If ``major`` is not in the allow-list
        """
        if major not in self.supported:
            raise UnsupportedVersionError(self.runtime, major)
        return Pkg(name=self.pkg_template.format(version=major))

    def resolve(self, constraint: Optional[str]) -> Pkg:
        """
        Resolve ``constraint`` to a package.

        Raises:
            UnsupportedVersionError: If the extracted major is not supported
        """
        result = self.match(constraint)
        logger.debug(
            "Resolved version constraint",
            runtime=self.runtime,
            constraint=constraint,
            strategy=result.strategy,
            major=result.major,
        )
        if result.major is None:
            return Pkg(name=self.default_pkg)
        return self.package_for(result.major)


NODE_VERSION_RESOLVER = VersionResolver(
    runtime=NodeDefaults.RUNTIME,
    supported=NodeDefaults.SUPPORTED_VERSIONS,
    default_pkg=NodeDefaults.DEFAULT_PKG,
    pkg_template=NodeDefaults.VERSION_PKG_TEMPLATE,
    any_version=NodeDefaults.ANY_VERSION,
)
