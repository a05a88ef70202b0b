"""Scanner for installed mods."""

import json
import logging
import zipfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from modmanager.mods.models import InstalledMod

logger = logging.getLogger(__name__)

METADATA_FILE = "fabric.mod.json"
MAPPING_KEY = "modmanager"
GENERATED_KEY = "fabric-loom:generated"
PLATFORM_PREFIX = "fabric"
DEFAULT_DENY_LIST = ("java", "minecraft")


@dataclass
class HostMod:
    """A mod as reported by the host loader."""

    id: str
    name: str
    version: str
    custom_data: dict[str, Any] = field(default_factory=dict)


def read_mod_metadata(jar: Path) -> dict[str, Any] | None:
    """
    Read fabric.mod.json from a mod jar.

    Args:
        jar: Path to the jar

    Returns:
        Parsed metadata or None if the jar has none or is unreadable
    """
    try:
        with zipfile.ZipFile(jar) as archive:
            with archive.open(METADATA_FILE) as f:
                data = json.load(f)
    except KeyError:
        return None
    except (zipfile.BadZipFile, json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
        logger.warning("Could not read %s: %s", jar.name, e)
        return None
    return data if isinstance(data, dict) else None


def read_host_inventory(mods_dir: Path) -> list[HostMod]:
    """
    Build the host inventory from the jars in a mods folder.

    Args:
        mods_dir: Mod storage directory

    Returns:
        One entry per jar with readable metadata
    """
    inventory: list[HostMod] = []
    if not mods_dir.exists():
        return inventory

    for jar in sorted(mods_dir.glob("*.jar")):
        meta = read_mod_metadata(jar)
        if not meta or "id" not in meta:
            continue
        custom = meta.get("custom") or {}
        if not isinstance(custom, dict):
            logger.warning("Ignoring malformed custom block in %s", jar.name)
            custom = {}
        inventory.append(
            HostMod(
                id=str(meta["id"]),
                name=str(meta.get("name") or meta["id"]),
                version=str(meta.get("version", "")),
                custom_data=custom,
            )
        )
    return inventory


class ModScanner:
    """
    Scanner for installed, updatable mods.

    Filters host platform entries, build-generated mods and mods without
    a jar in the mods folder out of the host inventory.
    """

    def __init__(self, mods_dir: Path, deny_list: list[str] | tuple[str, ...] = DEFAULT_DENY_LIST):
        self.mods_dir = mods_dir
        self.deny_list = set(deny_list)
        self._jar_ids: dict[str, Path] | None = None

    def scan(self, host_mods: list[HostMod] | None = None) -> list[InstalledMod]:
        """
        Scan for installed mods that can be checked for updates.

        Args:
            host_mods: Host inventory; read from the mods folder when omitted

        Returns:
            Installed mods in inventory order
        """
        self._jar_ids = None
        if host_mods is None:
            host_mods = read_host_inventory(self.mods_dir)

        installed = []
        for host_mod in host_mods:
            if not self.is_checkable(host_mod):
                continue
            if self.find_jar(host_mod.id) is None:
                logger.info("Skipping update for %s because it has no jar in mods", host_mod.id)
                continue
            installed.append(
                InstalledMod(
                    id=host_mod.id,
                    name=host_mod.name,
                    version=host_mod.version,
                    provider_mappings=self._provider_mappings(host_mod),
                )
            )
        return installed

    def is_checkable(self, host_mod: HostMod) -> bool:
        """Check if a host entry is a real, user-installed mod."""
        if host_mod.id in self.deny_list or host_mod.id.startswith(PLATFORM_PREFIX):
            return False
        return host_mod.custom_data.get(GENERATED_KEY) is not True

    def find_jar(self, mod_id: str) -> Path | None:
        """Find the jar in the mods folder that declares mod_id."""
        if self._jar_ids is None:
            self._jar_ids = {}
            if self.mods_dir.exists():
                for jar in sorted(self.mods_dir.glob("*.jar")):
                    meta = read_mod_metadata(jar)
                    if meta and "id" in meta:
                        self._jar_ids.setdefault(str(meta["id"]), jar)
        return self._jar_ids.get(mod_id)

    @staticmethod
    def _provider_mappings(host_mod: HostMod) -> dict[str, str]:
        block = host_mod.custom_data.get(MAPPING_KEY)
        if not isinstance(block, dict):
            return {}

        mappings = {}
        for provider, catalog_id in block.items():
            if not isinstance(catalog_id, str):
                logger.warning("Ignoring non-string %s id for %s", provider, host_mod.id)
                continue
            mappings[provider] = catalog_id
        return mappings
