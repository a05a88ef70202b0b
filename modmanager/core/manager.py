"""Main mod manager that owns providers, states and the update check."""

import logging

from modmanager.mods.models import InstalledMod, ResolutionOutcome
from modmanager.mods.scanner import HostMod, ModScanner
from modmanager.mods.update_manager import UpdateManager
from modmanager.providers.base import BaseProvider
from modmanager.providers.modrinth import ModrinthProvider
from modmanager.providers.registry import ProviderRegistry
from modmanager.storage.models import ModState
from modmanager.storage.state import ModStateRegistry
from modmanager.utils.config import Config

logger = logging.getLogger(__name__)


class ModManager:
    """
    Context for one mod manager session.

    Holds the provider registry, the state registry and the update manager,
    and is passed to whatever needs them instead of living in a global.
    """

    def __init__(self, config: Config, providers: list[BaseProvider] | None = None):
        """
        Initialize mod manager.

        Args:
            config: Application configuration
            providers: Catalog providers; Modrinth when omitted
        """
        self.config = config
        if providers is None:
            providers = [
                ModrinthProvider(
                    game_version=config.target_game_version,
                    loader=config.loader,
                    timeout=config.network.timeout,
                    user_agent=config.network.user_agent,
                )
            ]
        self.providers = ProviderRegistry(providers)
        self.states = ModStateRegistry()
        self.update = UpdateManager(self.states, self.providers, config)
        self.scanner = ModScanner(config.paths.mods_dir, config.deny_list)

    @property
    def default_provider(self) -> BaseProvider | None:
        """Provider used for browsing and fallback searches."""
        return self.providers.get(self.config.default_provider)

    def get_selected_provider(self) -> BaseProvider | None:
        """Get the configured default provider."""
        return self.default_provider

    def get_mod_state(self, mod_id: str) -> ModState:
        """Get last known state for a local or catalog id."""
        return self.states.get_state(mod_id)

    def scan_installed_mods(self, host_mods: list[HostMod] | None = None) -> list[InstalledMod]:
        """List installed mods that can be checked for updates."""
        mods = self.scanner.scan(host_mods)
        logger.info("Found %d checkable mods in %s", len(mods), self.config.paths.mods_dir)
        return mods

    async def check_updates(
        self,
        host_mods: list[HostMod] | None = None,
    ) -> dict[str, ResolutionOutcome]:
        """
        Scan installed mods and resolve their update state.

        Args:
            host_mods: Host inventory; read from the mods folder when omitted

        Returns:
            Outcome per local mod id
        """
        mods = self.scan_installed_mods(host_mods)
        return await self.update.check_updates(mods, self.default_provider)

    async def close(self) -> None:
        """Close all providers."""
        await self.providers.close_all()

    async def __aenter__(self) -> "ModManager":
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()
