"""
StackPlan Constants

Process-lifetime configuration values shared by every package. These are
the single source of truth for supported versions, default packages and
configuration key names.
"""

from typing import Tuple

LOG_LEVELS: Tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_STREAMS: Tuple[str, ...] = ("stdout", "stderr")


class ConfigDefaults:
    """Environment-derived configuration."""

    PREFIX = "STACKPLAN_"
    TRUTHY_VALUES: Tuple[str, ...] = ("1", "true")

    # Plan overrides, read as STACKPLAN_<KEY>
    INSTALL_CMD = "INSTALL_CMD"
    BUILD_CMD = "BUILD_CMD"
    START_CMD = "START_CMD"
    PKGS = "PKGS"


class PhaseNames:
    """Conventional phase names used by generic assembly."""

    SETUP = "setup"
    INSTALL = "install"
    BUILD = "build"


class NodeDefaults:
    """Node.js package resolution."""

    RUNTIME = "Node"
    SUPPORTED_VERSIONS: Tuple[int, ...] = (10, 12, 14, 16, 17)
    DEFAULT_PKG = "pkgs.nodejs"
    STDENV_PKG = "pkgs.stdenv"
    VERSION_PKG_TEMPLATE = "nodejs-{version}_x"
    ANY_VERSION = "*"


class DenoDefaults:
    """Deno provider settings."""

    PKG = "deno"
    USE_DENO_2_FLAG = "USE_DENO_2"
    # nixpkgs archive pinned when USE_DENO_2 is truthy
    ARCHIVE_LATEST = "bc8f8d1be58e8c8383e683a06e1e1e57893fff87"
    MANIFESTS: Tuple[str, ...] = ("deno.json", "deno.jsonc")
    SOURCE_GLOB = "**/*.{ts,tsx,js,jsx}"
    INDEX_GLOB = "**/index.{ts,tsx,js,jsx}"
    IMPORT_PATTERN = (
        r"""import .+ from (?:"|'|`)https://deno.land/[^"`']+\.(?:ts|js|tsx|jsx)(?:"|'|`);?"""
    )


class PixiDefaults:
    """Pixi provider settings."""

    MANIFEST = "pixi.toml"
    LOCKFILE = "pixi.lock"
    BIN = "~/.pixi/bin/pixi"
    INSTALLER_CMD = "curl -fsSL https://pixi.sh/install.sh | bash"
