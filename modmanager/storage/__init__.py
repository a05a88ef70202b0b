"""Storage modules for mod state."""

from modmanager.storage.models import ModState, ModStateEntry, ReleaseChannel, ReleaseType
from modmanager.storage.state import ModStateRegistry

__all__ = [
    "ModState",
    "ModStateEntry",
    "ModStateRegistry",
    "ReleaseChannel",
    "ReleaseType",
]
