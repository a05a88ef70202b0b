"""Registry of catalog providers keyed by name."""

import logging
from collections.abc import Iterator

from modmanager.errors import ProviderUnknownError
from modmanager.providers.base import BaseProvider

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """Case-insensitive mapping of provider name to provider."""

    def __init__(self, providers: list[BaseProvider] | None = None):
        self._providers: dict[str, BaseProvider] = {}
        for provider in providers or []:
            self.register(provider)

    def register(self, provider: BaseProvider) -> None:
        """Register a provider under its lowercased name."""
        key = provider.name.lower()
        if key in self._providers:
            logger.warning("Provider %s registered twice, replacing", provider.name)
        self._providers[key] = provider

    def get(self, name: str) -> BaseProvider | None:
        """Get provider by name or None if unknown."""
        return self._providers.get(name.lower())

    def require(self, name: str) -> BaseProvider:
        """
        Get provider by name.

        Raises:
            ProviderUnknownError: If no provider has that name
        """
        provider = self.get(name)
        if provider is None:
            raise ProviderUnknownError(name)
        return provider

    async def close_all(self) -> None:
        """Close every registered provider."""
        for provider in self._providers.values():
            await provider.close()

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._providers

    def __getitem__(self, name: str) -> BaseProvider:
        return self.require(name)

    def __iter__(self) -> Iterator[str]:
        return iter(self._providers)

    def __len__(self) -> int:
        return len(self._providers)
