"""Update checking for installed mods."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import TypeVar

from modmanager.errors import ErrorKind
from modmanager.mods.models import (
    CatalogMod,
    CatalogVersion,
    InstalledMod,
    NoUpdate,
    ResolutionOutcome,
    Unresolved,
    Update,
    UpdateAvailable,
)
from modmanager.mods.version import Ordering, SemanticVersion, compare, try_parse_version
from modmanager.providers.base import BaseProvider, CatalogError, ModsResult, VersionsResult
from modmanager.storage.models import ModState
from modmanager.storage.state import ModStateRegistry
from modmanager.utils.config import Config

logger = logging.getLogger(__name__)

R = TypeVar("R")


class UpdateManager:
    """
    Resolves available updates for installed mods.

    A mod is identified on a catalog either through the provider ids it
    declares in its metadata or, failing that, by searching the default
    provider for its name. Every resolution writes one entry to the state
    registry.
    """

    SEARCH_LIMIT = 10

    def __init__(
        self,
        states: ModStateRegistry,
        providers: Mapping[str, BaseProvider],
        config: Config,
    ):
        """
        Initialize update manager.

        Args:
            states: Registry receiving the resolved states
            providers: Providers by lowercased name
            config: Read-only configuration
        """
        self.states = states
        self.providers = providers
        self.config = config
        self.updates: list[Update] = []

    async def check_updates(
        self,
        mods: list[InstalledMod],
        default_provider: BaseProvider | None = None,
    ) -> dict[str, ResolutionOutcome]:
        """
        Check all mods for updates concurrently.

        Args:
            mods: Installed mods
            default_provider: Provider for fallback searches; the configured
                default provider when omitted

        Returns:
            Outcome per local mod id
        """
        if default_provider is None:
            default_provider = self.providers.get(self.config.default_provider)
            if default_provider is None:
                logger.warning("Default provider %s not found", self.config.default_provider)

        self.updates = []
        semaphore = asyncio.Semaphore(self.config.network.max_concurrent_checks)

        async def check(mod: InstalledMod) -> ResolutionOutcome:
            async with semaphore:
                return await self.resolve(mod, default_provider, self.providers)

        results = await asyncio.gather(*(check(mod) for mod in mods), return_exceptions=True)

        outcomes: dict[str, ResolutionOutcome] = {}
        for mod, result in zip(mods, results):
            if isinstance(result, Exception):
                logger.error("Update check for %s failed", mod.id, exc_info=result)
                result = await self._unresolved(mod, mod.id, None, str(result))
            elif isinstance(result, BaseException):
                raise result
            outcomes[mod.id] = result
        return outcomes

    async def resolve(
        self,
        mod: InstalledMod,
        default_provider: BaseProvider | None,
        providers: Mapping[str, BaseProvider],
    ) -> ResolutionOutcome:
        """
        Resolve the update state of one mod.

        Args:
            mod: Installed mod
            default_provider: Provider used for the fallback search
            providers: Providers by lowercased name, for declared ids

        Returns:
            The outcome; the matching state is stored before returning
        """
        if mod.provider_mappings:
            provider, catalog_id = self._select_mapping(mod, providers)
            if provider is not None and catalog_id is not None:
                logger.info("Searching for updates for %s using defined mod id", mod.id)
                result = await self._call(provider.get_versions_for_mod(catalog_id), VersionsResult)
                return await self._apply(mod, catalog_id, result)
            logger.warning("No valid provider for %s found", mod.id)

        logger.info("Searching for updates for %s using fallback method", mod.id)
        return await self._resolve_by_search(mod, default_provider)

    def _select_mapping(
        self,
        mod: InstalledMod,
        providers: Mapping[str, BaseProvider],
    ) -> tuple[BaseProvider | None, str | None]:
        # Every entry is visited; the last one with a known provider is used
        provider: BaseProvider | None = None
        catalog_id: str | None = None
        for provider_name, mapped_id in mod.provider_mappings.items():
            candidate = providers.get(provider_name.lower())
            if candidate is None:
                logger.warning("Update provider %s for %s not found!", provider_name, mod.id)
                continue
            provider = candidate
            catalog_id = mapped_id
        return provider, catalog_id

    async def _resolve_by_search(
        self,
        mod: InstalledMod,
        provider: BaseProvider | None,
    ) -> ResolutionOutcome:
        if provider is None:
            return await self._unresolved(
                mod, mod.id, ErrorKind.PROVIDER_UNKNOWN, "No default provider"
            )

        if self.config.direct_id_lookup:
            result = await self._call(provider.get_versions_for_mod(mod.id), VersionsResult)
            if result.ok:
                return await self._apply(mod, mod.id, result)

        search = await self._call(provider.search(mod.name, 0, self.SEARCH_LIMIT), ModsResult)
        if search.error is not None:
            logger.warning(
                "Error while searching for fallback id for mod %s: %s", mod.id, search.error
            )
            return await self._unresolved(mod, mod.id, search.error.kind, str(search.error))

        match = self.find_match(mod, search.mods)
        if match is None:
            logger.warning(
                "Error while searching for fallback id for mod %s: No possible match found",
                mod.id,
            )
            return await self._unresolved(mod, mod.id, ErrorKind.NO_MATCH, "No possible match found")

        result = await self._call(provider.get_versions_for_mod(match.id), VersionsResult)
        return await self._apply(mod, match.id, result)

    @staticmethod
    def find_match(mod: InstalledMod, candidates: list[CatalogMod]) -> CatalogMod | None:
        """First catalog mod whose slug is the local id or whose name is the display name."""
        return next((c for c in candidates if c.slug == mod.id or c.name == mod.name), None)

    async def _apply(
        self,
        mod: InstalledMod,
        catalog_id: str,
        result: VersionsResult,
    ) -> ResolutionOutcome:
        if result.error is not None:
            logger.error("Error while getting versions for mod %s: %s", mod.id, result.error)
            return await self._unresolved(mod, catalog_id, result.error.kind, str(result.error))

        installed = try_parse_version(mod.version)
        if installed is None:
            logger.warning("Installed version %r of %s is not comparable", mod.version, mod.id)
            return await self._unresolved(
                mod, catalog_id, ErrorKind.MALFORMED_VERSION, f"Malformed version {mod.version!r}"
            )

        latest = self.find_latest_compatible(result.versions)
        if latest is None or compare(latest[1], installed) is not Ordering.GREATER:
            logger.info("No update for %s found!", mod.id)
            await self.states.set_state(mod.id, catalog_id, ModState.INSTALLED)
            self._forget_update(mod.id)
            return NoUpdate()

        version = latest[0]
        logger.info("Update for %s found [%s -> %s]", mod.id, mod.version, version.version)
        await self.states.set_state(mod.id, catalog_id, ModState.OUTDATED)
        self._forget_update(mod.id)
        self.updates.append(Update(catalog_id=catalog_id, local_id=mod.id, version=version))
        return UpdateAvailable(catalog_id, version.version, version)

    def is_compatible(self, version: CatalogVersion) -> bool:
        """Check game version and release channel of a catalog version."""
        return self.config.target_game_version in version.game_versions and (
            self.config.is_release_allowed(version.release_type)
        )

    def find_latest_compatible(
        self,
        versions: list[CatalogVersion],
    ) -> tuple[CatalogVersion, SemanticVersion] | None:
        """
        Pick the greatest compatible version.

        Versions that do not parse are skipped. Among equal versions the
        first one listed wins.

        Returns:
            The version and its parsed form, or None if nothing is compatible
        """
        latest: tuple[CatalogVersion, SemanticVersion] | None = None
        for version in versions:
            if not self.is_compatible(version):
                continue
            parsed = try_parse_version(version.version)
            if parsed is None:
                logger.debug("Skipping unparsable version %r", version.version)
                continue
            if latest is None or compare(parsed, latest[1]) is Ordering.GREATER:
                latest = (version, parsed)
        return latest

    def get_update_for_mod(self, mod: CatalogMod) -> Update | None:
        """Find an available update by catalog id or by slug."""
        return next(
            (u for u in self.updates if u.catalog_id == mod.id or u.local_id == mod.slug),
            None,
        )

    def _forget_update(self, local_id: str) -> None:
        self.updates = [u for u in self.updates if u.local_id != local_id]

    async def _call(self, call: Awaitable[R], result_type: Callable[..., R]) -> R:
        try:
            return await asyncio.wait_for(call, timeout=self.config.network.timeout)
        except TimeoutError as e:
            return result_type(
                error=CatalogError(ErrorKind.NETWORK_FAILURE, "Catalog call timed out", e)
            )

    async def _unresolved(
        self,
        mod: InstalledMod,
        catalog_id: str,
        kind: ErrorKind | None,
        message: str,
    ) -> Unresolved:
        await self.states.set_state(mod.id, catalog_id, ModState.UNKNOWN)
        self._forget_update(mod.id)
        return Unresolved(kind, message)
