"""Core session objects."""

from modmanager.core.manager import ModManager

__all__ = ["ModManager"]
