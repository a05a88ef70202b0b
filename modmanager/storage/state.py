"""Registry of last known mod states."""

import asyncio
import logging

from modmanager.storage.models import ModState, ModStateEntry

logger = logging.getLogger(__name__)


class ModStateRegistry:
    """
    Holds the last known state per mod.

    An entry is keyed by two identifiers, the local mod id and the catalog id.
    Setting a state replaces every entry that shares either identifier, so at
    most one entry exists per id at any time.
    """

    def __init__(self, default: ModState = ModState.DOWNLOADABLE):
        self.default = default
        self._entries: list[ModStateEntry] = []
        self._lock = asyncio.Lock()

    async def set_state(self, local_id: str, catalog_id: str, state: ModState) -> ModStateEntry:
        """
        Replace the state of a mod.

        Args:
            local_id: Id of the installed mod
            catalog_id: Id of the mod on the catalog (may equal local_id)
            state: New state

        Returns:
            The inserted entry
        """
        entry = ModStateEntry(local_id=local_id, catalog_id=catalog_id, state=state)
        async with self._lock:
            self._entries = [
                e for e in self._entries if e.local_id != local_id and e.catalog_id != catalog_id
            ]
            self._entries.append(entry)
        logger.debug("State of %s (%s) set to %s", local_id, catalog_id, state.value)
        return entry

    def get_state(self, mod_id: str) -> ModState:
        """Get state for a local or catalog id."""
        entry = self.find(mod_id)
        return entry.state if entry else self.default

    def find(self, mod_id: str) -> ModStateEntry | None:
        """Get the entry matching a local or catalog id."""
        return next((e for e in self._entries if e.matches(mod_id)), None)

    def entries(self) -> list[ModStateEntry]:
        """Snapshot of all entries."""
        return list(self._entries)

    async def clear(self) -> None:
        """Forget all states."""
        async with self._lock:
            self._entries = []

    def __len__(self) -> int:
        return len(self._entries)
