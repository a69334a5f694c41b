"""
Provider registry.

Fixed, ordered list of providers. Detection walks the list and returns
the first match; list order is the only tie-break. No plugin discovery:
every provider ships with the package.
"""

from typing import List, Optional, Sequence, Tuple

from stackplan_common import NoProviderMatchedError, ValidationError
from stackplan_common.logger import get_logger

from ..app import App
from ..environment import Environment
from .base import Provider
from .deno import DenoProvider
from .node import NodeProvider
from .pixi import PixiProvider

logger = get_logger(__name__)


def default_providers() -> Tuple[Provider, ...]:
    """All providers in detection priority order."""
    return (
        DenoProvider(),  # Deno projects may also carry a package.json
        NodeProvider(),
        PixiProvider(),
    )


class ProviderRegistry:
    """
    Ordered provider lookup.

    Example:
        >>> registry = ProviderRegistry()
        >>> registry.detect(App("/project"), Environment()).name()
        'node'
    """

    def __init__(self, providers: Optional[Sequence[Provider]] = None):
        self._providers: Tuple[Provider, ...] = (
            tuple(providers) if providers is not None else default_providers()
        )

    @property
    def providers(self) -> Tuple[Provider, ...]:
        return self._providers

    def names(self) -> List[str]:
        return [provider.name() for provider in self._providers]

    def get(self, name: str) -> Provider:
        """
        Get a provider by name.

        Raises:
            ValidationError: If no provider has that name
        """
        for provider in self._providers:
            if provider.name() == name:
                return provider
        raise ValidationError(
            f"Unknown provider '{name}'. Available providers: {', '.join(self.names())}"
        )

    def find(self, app: App, env: Environment) -> Optional[Provider]:
        """First provider that detects the app, or None."""
        for provider in self._providers:
            detected = provider.detect(app, env)
            logger.debug("Provider detection", provider=provider.name(), detected=detected)
            if detected:
                logger.info("Detected provider", provider=provider.name(), source=str(app.source))
                return provider
        return None

    def detect(self, app: App, env: Environment) -> Provider:
        """
        First provider that detects the app.

        Raises:
            NoProviderMatchedError: If no provider matches
        """
        provider = self.find(app, env)
        if provider is None:
            raise NoProviderMatchedError(
                f"No provider matched '{app.source}'. Tried: {', '.join(self.names())}"
            )
        return provider
