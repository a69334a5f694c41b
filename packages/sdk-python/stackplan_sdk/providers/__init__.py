"""Ecosystem providers and the registry that selects among them."""

from .base import Provider
from .deno import DenoProvider
from .node import NodeProvider
from .pixi import PixiProvider
from .registry import ProviderRegistry, default_providers

__all__ = [
    "Provider",
    "DenoProvider",
    "NodeProvider",
    "PixiProvider",
    "ProviderRegistry",
    "default_providers",
]
