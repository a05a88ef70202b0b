#!/usr/bin/env python3
"""
Mod Manager - checks installed Fabric mods for updates.

Usage:
    python -m modmanager.main [--config config.yaml] [--mods-dir ./mods]

Or after installation:
    modmanager
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from modmanager.core.manager import ModManager
from modmanager.mods.models import NoUpdate, Unresolved, UpdateAvailable
from modmanager.storage.models import ReleaseChannel
from modmanager.utils.config import Config, load_config


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the application."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Reduce noise from libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Check installed mods for updates")
    parser.add_argument("--config", type=Path, help="Path to config.yaml")
    parser.add_argument("--mods-dir", type=Path, help="Mods folder to scan")
    parser.add_argument("--game-version", help="Target game version (e.g. 1.17.1)")
    parser.add_argument(
        "--channel",
        choices=[c.value for c in ReleaseChannel],
        help="Release channel for update candidates",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    """Apply command line overrides to the loaded config."""
    if args.mods_dir:
        config.paths.mods_dir = args.mods_dir.resolve()
    if args.game_version:
        config.target_game_version = args.game_version
    if args.channel:
        config.release_channel = ReleaseChannel(args.channel)
    return config


async def async_main(config: Config) -> int:
    """Run one update check and log a summary."""
    logger = logging.getLogger(__name__)

    if not config.paths.mods_dir.exists():
        logger.error(f"Mods directory not found: {config.paths.mods_dir}")
        return 1

    logger.info(f"Checking mods in {config.paths.mods_dir} for {config.target_game_version}")

    async with ModManager(config) as manager:
        outcomes = await manager.check_updates()

    outdated = [o for o in outcomes.values() if isinstance(o, UpdateAvailable)]
    up_to_date = sum(1 for o in outcomes.values() if isinstance(o, NoUpdate))
    unknown = sum(1 for o in outcomes.values() if isinstance(o, Unresolved))

    for mod_id, outcome in outcomes.items():
        if isinstance(outcome, UpdateAvailable):
            logger.info(f"  {mod_id}: {outcome.candidate_version} ({outcome.catalog_mod_id})")

    logger.info(
        f"Update check complete: {len(outdated)} outdated, "
        f"{up_to_date} up to date, {unknown} unknown"
    )
    return 0


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        config = apply_overrides(load_config(args.config), args)
    except Exception as e:
        logger.error(f"Failed to load configuration: {e}")
        logger.info("You can copy config.example.yaml to config.yaml")
        sys.exit(1)

    try:
        sys.exit(asyncio.run(async_main(config)))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
