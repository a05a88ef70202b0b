"""Mod update checker for Fabric mod folders."""

__version__ = "1.1.0"
