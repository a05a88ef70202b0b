"""Mod catalog providers."""

from modmanager.providers.base import (
    BaseProvider,
    CatalogError,
    CategoriesResult,
    ModResult,
    ModsResult,
    Sorting,
    VersionsResult,
)
from modmanager.providers.modrinth import ModrinthProvider
from modmanager.providers.registry import ProviderRegistry

__all__ = [
    "BaseProvider",
    "CatalogError",
    "CategoriesResult",
    "ModResult",
    "ModrinthProvider",
    "ModsResult",
    "ProviderRegistry",
    "Sorting",
    "VersionsResult",
]
