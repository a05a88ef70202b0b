"""Modrinth catalog provider."""

import json
import logging
from typing import Any

import httpx

from modmanager import __version__
from modmanager.errors import ErrorKind
from modmanager.mods.models import Asset, CatalogMod, CatalogVersion, Category
from modmanager.providers.base import (
    BaseProvider,
    CatalogError,
    CategoriesResult,
    ModResult,
    ModsResult,
    Sorting,
    VersionsResult,
)
from modmanager.storage.models import ReleaseType

logger = logging.getLogger(__name__)


class CatalogFailure(Exception):
    """Internal carrier for a CatalogError inside the provider."""

    def __init__(self, error: CatalogError):
        super().__init__(str(error))
        self.error = error


class ModrinthProvider(BaseProvider):
    """
    Modrinth API client.

    Modrinth is a modern mod hosting platform with a free, open API.
    No API key required.
    """

    BASE_URL = "https://api.modrinth.com/v2"
    USER_AGENT = f"ModManager/{__version__}"

    def __init__(
        self,
        game_version: str = "1.17.1",
        loader: str = "fabric",
        timeout: float = 30.0,
        user_agent: str | None = None,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the provider.

        Args:
            game_version: Game version used to filter listings
            loader: Mod loader used to filter listings and versions
            timeout: Per-request timeout in seconds
            user_agent: User-Agent header override
            base_url: API root override
            transport: Custom httpx transport (tests)
        """
        self.game_version = game_version
        self.loader = loader
        self.timeout = timeout
        self.user_agent = user_agent or self.USER_AGENT
        self.base_url = base_url or self.BASE_URL
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._categories: list[Category] = []
        self._cache: dict[str, ModsResult] = {}

    @property
    def name(self) -> str:
        return "Modrinth"

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """
        GET a JSON document.

        Raises:
            CatalogFailure: On transport errors, non-200 status or bad JSON
        """
        client = await self._get_client()
        try:
            response = await client.get(path, params=params)
        except httpx.HTTPError as e:
            logger.error("Request to %s failed: %s", path, e)
            raise CatalogFailure(
                CatalogError(ErrorKind.NETWORK_FAILURE, "Network error", e)
            ) from e

        if response.status_code != 200:
            raise CatalogFailure(
                CatalogError(
                    ErrorKind.INVALID_RESPONSE,
                    f"Invalid status {response.status_code} for {path}",
                )
            )

        try:
            return response.json()
        except ValueError as e:
            logger.error("Failed to parse response of %s", path)
            raise CatalogFailure(
                CatalogError(ErrorKind.INVALID_RESPONSE, "Failed to parse response", e)
            ) from e

    def _facets(self, *extra: list[str]) -> str:
        facets = [
            ["project_type:mod"],
            [f"categories:{self.loader}"],
            [f"versions:{self.game_version}"],
            ["client_side:optional", "client_side:required"],
            *extra,
        ]
        return json.dumps(facets)

    async def _list_mods(self, params: dict[str, Any], page: int, limit: int) -> ModsResult:
        params = {**params, "offset": page * limit, "limit": limit}
        try:
            data = await self._get_json("/search", params=params)
            hits = data["hits"]
        except CatalogFailure as e:
            return ModsResult(error=e.error)
        except (KeyError, TypeError) as e:
            return ModsResult(
                error=CatalogError(ErrorKind.INVALID_RESPONSE, "Failed to parse search result", e)
            )
        if not isinstance(hits, list):
            return ModsResult(
                error=CatalogError(ErrorKind.INVALID_RESPONSE, "Search result has no hit list")
            )

        mods = []
        for hit in hits:
            try:
                mods.append(
                    CatalogMod(
                        id=hit["project_id"],
                        slug=hit["slug"],
                        name=hit["title"],
                        author=hit.get("author", "Unknown"),
                        short_description=hit.get("description", ""),
                        icon_url=hit.get("icon_url"),
                        downloads=hit.get("downloads", 0),
                        categories=[Category(c, c) for c in hit.get("categories", [])],
                    )
                )
            except (KeyError, TypeError):
                continue

        return ModsResult(mods=mods)

    async def search(self, query: str, page: int = 0, limit: int = 10) -> ModsResult:
        """
        Search for mods on Modrinth.

        Args:
            query: Search query
            page: Zero-based page number
            limit: Maximum results to return

        Returns:
            Matching mods or an error
        """
        logger.info("Searching for '%s' in Modrinth", query)
        return await self._list_mods({"query": query, "facets": self._facets()}, page, limit)

    async def get_mods(
        self,
        sorting: Sorting = Sorting.RELEVANCE,
        page: int = 0,
        limit: int = 10,
    ) -> ModsResult:
        """General listing of mods in the given order."""
        logger.info("Getting a general list of mods")
        return await self._list_mods({"index": sorting.value, "facets": self._facets()}, page, limit)

    async def get_mods_by_category(
        self,
        category: Category,
        page: int = 0,
        limit: int = 10,
    ) -> ModsResult:
        """Listing of one category, cached on success."""
        key = f"{category.id}|{page}|{limit}"
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        logger.info("Getting category '%s' from Modrinth", category.id)
        result = await self._list_mods(
            {"facets": self._facets([f"categories:{category.id}"])}, page, limit
        )
        if result.ok:
            self._cache[key] = result
        return result

    async def get_categories(self) -> CategoriesResult:
        """Get mod categories, cached after the first success."""
        if self._categories:
            return CategoriesResult(categories=list(self._categories))

        logger.info("Getting categories")
        try:
            data = await self._get_json("/tag/category")
            categories = [
                Category(id=c["name"], name=c["name"].replace("-", " ").title())
                for c in data
                if c.get("project_type", "mod") == "mod"
            ]
        except CatalogFailure as e:
            return CategoriesResult(error=e.error)
        except (KeyError, TypeError, AttributeError) as e:
            logger.error("Error while getting categories: %s", e)
            return CategoriesResult(
                error=CatalogError(ErrorKind.INVALID_RESPONSE, "Failed to parse categories", e)
            )

        self._categories = categories
        return CategoriesResult(categories=list(categories))

    async def get_mod(self, catalog_id: str) -> ModResult:
        """
        Get detailed information about a mod.

        Args:
            catalog_id: Mod ID or slug

        Returns:
            Detailed mod or an error
        """
        try:
            data = await self._get_json(f"/project/{catalog_id}")
            license_info = data.get("license") or {}
            mod = CatalogMod(
                id=data["id"],
                slug=data["slug"],
                name=data["title"],
                author=data.get("team", "Unknown"),
                short_description=data.get("description", ""),
                icon_url=data.get("icon_url"),
                description=data.get("body", ""),
                license=license_info.get("name") or license_info.get("id", ""),
                downloads=data.get("downloads", 0),
                categories=[Category(c, c) for c in data.get("categories", [])],
            )
        except CatalogFailure as e:
            return ModResult(error=e.error)
        except (KeyError, TypeError, AttributeError) as e:
            return ModResult(
                error=CatalogError(ErrorKind.INVALID_RESPONSE, "Failed to parse mod", e)
            )
        return ModResult(mod=mod)

    async def get_versions_for_mod(self, catalog_id: str) -> VersionsResult:
        """
        Get available versions of a mod.

        Args:
            catalog_id: Mod ID or slug

        Returns:
            List of mod versions (newest first) or an error
        """
        params = {"loaders": json.dumps([self.loader])}
        try:
            data = await self._get_json(f"/project/{catalog_id}/version", params=params)
            versions = [self._parse_version(v) for v in data]
        except CatalogFailure as e:
            return VersionsResult(error=e.error)
        except (KeyError, TypeError, AttributeError) as e:
            return VersionsResult(
                error=CatalogError(ErrorKind.INVALID_RESPONSE, "Failed to parse versions", e)
            )
        return VersionsResult(versions=versions)

    @staticmethod
    def _parse_version(data: dict[str, Any]) -> CatalogVersion:
        assets = [
            Asset(
                url=f["url"],
                filename=f["filename"],
                hashes=f.get("hashes", {}),
                primary=f.get("primary", False),
                size_bytes=f.get("size", 0),
            )
            for f in data.get("files", [])
        ]
        return CatalogVersion(
            id=data.get("id"),
            version=str(data["version_number"]),
            release_type=ReleaseType.from_api(data.get("version_type")),
            game_versions=list(data.get("game_versions", [])),
            assets=assets,
            changelog=data.get("changelog") or "",
        )
