"""Base interface for mod catalog providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

from modmanager.errors import ErrorKind
from modmanager.mods.models import CatalogMod, CatalogVersion, Category


class Sorting(str, Enum):
    """Sort order for general mod listings."""

    RELEVANCE = "relevance"
    DOWNLOADS = "downloads"
    UPDATED = "updated"
    NEWEST = "newest"


@dataclass
class CatalogError:
    """Why a catalog call failed."""

    kind: ErrorKind
    message: str
    cause: BaseException | None = None

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message


@dataclass
class ModsResult:
    """Result of a search or listing call."""

    mods: list[CatalogMod] = field(default_factory=list)
    error: CatalogError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ModResult:
    """Result of a mod detail call."""

    mod: CatalogMod | None = None
    error: CatalogError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class VersionsResult:
    """Result of a version list call."""

    versions: list[CatalogVersion] = field(default_factory=list)
    error: CatalogError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class CategoriesResult:
    """Result of a category list call."""

    categories: list[Category] = field(default_factory=list)
    error: CatalogError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class BaseProvider(ABC):
    """
    Abstract base class for mod catalogs.

    Each catalog (Modrinth, ...) implements this interface to provide
    searching, browsing and version listing. Implementations report
    failures through the ``error`` field of the returned result and never
    raise for network or payload problems.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name (e.g., 'Modrinth'), used case-insensitively as key."""
        ...

    @abstractmethod
    async def search(self, query: str, page: int = 0, limit: int = 10) -> ModsResult:
        """
        Search the catalog.

        Args:
            query: Search query
            page: Zero-based page number
            limit: Page size

        Returns:
            Matching mods or an error
        """
        ...

    @abstractmethod
    async def get_versions_for_mod(self, catalog_id: str) -> VersionsResult:
        """
        Get all published versions of a mod.

        Args:
            catalog_id: Catalog mod id or slug

        Returns:
            Versions (newest first when the catalog orders them) or an error
        """
        ...

    async def get_categories(self) -> CategoriesResult:
        """Get catalog categories."""
        return CategoriesResult()

    async def get_mods(
        self,
        sorting: Sorting = Sorting.RELEVANCE,
        page: int = 0,
        limit: int = 10,
    ) -> ModsResult:
        """General listing in the given order."""
        return await self.search("", page, limit)

    async def get_mods_by_category(
        self,
        category: Category,
        page: int = 0,
        limit: int = 10,
    ) -> ModsResult:
        """Listing restricted to one category."""
        return ModsResult()

    async def get_mod(self, catalog_id: str) -> ModResult:
        """Get detailed information about a mod."""
        return ModResult(
            error=CatalogError(ErrorKind.INVALID_RESPONSE, f"{self.name} has no mod details")
        )

    async def close(self) -> None:
        """Release network resources."""

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()
