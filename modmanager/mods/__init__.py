"""Installed mods, catalog models and version comparison."""

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
from modmanager.mods.scanner import HostMod, ModScanner
from modmanager.mods.version import Ordering, SemanticVersion, compare, parse_version

__all__ = [
    "CatalogMod",
    "CatalogVersion",
    "HostMod",
    "InstalledMod",
    "ModScanner",
    "NoUpdate",
    "Ordering",
    "ResolutionOutcome",
    "SemanticVersion",
    "Unresolved",
    "Update",
    "UpdateAvailable",
    "compare",
    "parse_version",
]
