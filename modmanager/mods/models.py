"""Data models for installed and catalog mods."""

from dataclasses import dataclass, field

from modmanager.errors import ErrorKind
from modmanager.storage.models import ReleaseType


@dataclass(frozen=True)
class InstalledMod:
    """A mod present in the mods folder."""

    id: str
    name: str
    version: str
    provider_mappings: dict[str, str] = field(default_factory=dict, hash=False)


@dataclass
class Category:
    """Catalog category."""

    id: str
    name: str


@dataclass
class Asset:
    """Downloadable file of a catalog version."""

    url: str
    filename: str
    hashes: dict[str, str] = field(default_factory=dict)
    primary: bool = False
    size_bytes: int = 0


@dataclass
class CatalogVersion:
    """A published release of a mod on a catalog."""

    version: str
    release_type: ReleaseType = ReleaseType.RELEASE
    game_versions: list[str] = field(default_factory=list)
    assets: list[Asset] = field(default_factory=list)
    changelog: str = ""
    id: str | None = None

    @property
    def primary_asset(self) -> Asset | None:
        """Primary file, or the first one if none is flagged."""
        return next((a for a in self.assets if a.primary), self.assets[0] if self.assets else None)


@dataclass
class CatalogMod:
    """A mod as listed by a catalog."""

    id: str
    slug: str
    name: str
    author: str = "Unknown"
    short_description: str = ""
    icon_url: str | None = None
    description: str = ""
    license: str = ""
    downloads: int = 0
    categories: list[Category] = field(default_factory=list)


@dataclass
class Update:
    """An available update for an installed mod."""

    catalog_id: str
    local_id: str
    version: CatalogVersion


@dataclass(frozen=True)
class NoUpdate:
    """Installed version is the latest compatible one, or nothing compatible exists."""


@dataclass(frozen=True)
class UpdateAvailable:
    """A newer compatible version exists."""

    catalog_mod_id: str
    candidate_version: str
    version: CatalogVersion | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class Unresolved:
    """No strategy identified the mod or the catalog failed."""

    kind: ErrorKind | None = None
    message: str = field(default="", compare=False)


ResolutionOutcome = NoUpdate | UpdateAvailable | Unresolved
