"""Data models using Pydantic."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class ModState(str, Enum):
    """
    Last known state of a mod.

    - INSTALLED: installed and already on the latest compatible version
    - OUTDATED: installed, a newer compatible version exists
    - DOWNLOADABLE: not installed (also the answer for ids never resolved)
    - UNKNOWN: update status unavailable
    """

    INSTALLED = "installed"
    OUTDATED = "outdated"
    DOWNLOADABLE = "downloadable"
    UNKNOWN = "unknown"


class ReleaseType(str, Enum):
    """Release kind of a published mod version."""

    RELEASE = "release"
    BETA = "beta"
    ALPHA = "alpha"
    UNKNOWN = "unknown"

    @classmethod
    def from_api(cls, value: str | None) -> "ReleaseType":
        """Map a catalog version type to a ReleaseType."""
        try:
            return cls((value or "").lower())
        except ValueError:
            return cls.UNKNOWN


class ReleaseChannel(str, Enum):
    """Which release kinds are considered update candidates."""

    STABLE_ONLY = "stable_only"
    ALLOW_BETA = "allow_beta"
    ALLOW_ALPHA = "allow_alpha"

    @property
    def allowed(self) -> frozenset[ReleaseType]:
        """Release types permitted by this channel."""
        channels = {
            ReleaseChannel.STABLE_ONLY: frozenset({ReleaseType.RELEASE}),
            ReleaseChannel.ALLOW_BETA: frozenset({ReleaseType.RELEASE, ReleaseType.BETA}),
            ReleaseChannel.ALLOW_ALPHA: frozenset(ReleaseType),
        }
        return channels[self]

    def permits(self, release_type: ReleaseType) -> bool:
        """Check if a release type passes this channel."""
        return release_type in self.allowed


class ModStateEntry(BaseModel):
    """State of one mod as seen by the browsing UI."""

    model_config = ConfigDict(frozen=True)

    local_id: str
    catalog_id: str
    state: ModState = ModState.UNKNOWN

    def matches(self, mod_id: str) -> bool:
        """Check if either identifier equals mod_id."""
        return self.local_id == mod_id or self.catalog_id == mod_id
