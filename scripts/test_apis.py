#!/usr/bin/env python3
"""Smoke test against the live Modrinth API."""

import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))


async def test_config():
    """Test configuration loading."""
    from modmanager.utils.config import load_config

    print("🔍 Testing Config...")

    try:
        config = load_config()
        print("   ✅ Config loaded")
        print(f"   ✅ Mods dir: {config.paths.mods_dir}")
        print(f"   ✅ Default provider: {config.default_provider}")
        print(f"   ✅ Channel: {config.release_channel.value}")
    except Exception as e:
        print(f"   ❌ Config error: {e}")
        return False

    return True


async def test_modrinth_api():
    """Test Modrinth search and version listing."""
    from modmanager.providers.modrinth import ModrinthProvider

    print("🔍 Testing Modrinth API...")

    async with ModrinthProvider(game_version="1.20.1") as api:
        result = await api.search("sodium", 0, 10)
        if not result.ok:
            print(f"   ❌ Search failed: {result.error}")
            return False
        print(f"   ✅ Found {len(result.mods)} mods for 'sodium'")

        if result.mods:
            mod = result.mods[0]
            print(f"   ✅ Top result: {mod.name} ({mod.downloads:,} downloads)")

            versions = await api.get_versions_for_mod(mod.id)
            if not versions.ok:
                print(f"   ❌ Versions failed: {versions.error}")
                return False
            print(f"   ✅ Found {len(versions.versions)} versions")

        categories = await api.get_categories()
        print(f"   ✅ Categories: {len(categories.categories)}")

    return True


async def test_update_check():
    """Resolve one mod against the live catalog."""
    from modmanager.core.manager import ModManager
    from modmanager.mods.models import InstalledMod
    from modmanager.utils.config import Config

    print("🔍 Testing update check...")

    config = Config(target_game_version="1.20.1")
    async with ModManager(config) as manager:
        mod = InstalledMod(id="sodium", name="Sodium", version="0.4.0+mc1.19")
        outcome = await manager.update.resolve(mod, manager.default_provider, manager.providers)
        print(f"   ✅ Outcome: {outcome}")
        print(f"   ✅ State: {manager.get_mod_state('sodium').value}")

    return True


async def main():
    """Run all tests."""
    print("=" * 50)
    print("🧪 Mod Manager - API Tests")
    print("=" * 50)
    print()

    tests = [
        ("Config", test_config),
        ("Modrinth API", test_modrinth_api),
        ("Update check", test_update_check),
    ]

    results = []
    for name, test_func in tests:
        try:
            result = await test_func()
            results.append((name, result))
        except Exception as e:
            print(f"   ❌ Error: {e}")
            results.append((name, False))
        print()

    # Summary
    print("=" * 50)
    print("📊 Summary")
    print("=" * 50)

    passed = sum(1 for _, r in results if r)
    total = len(results)

    for name, result in results:
        status = "✅ PASS" if result else "❌ FAIL"
        print(f"   {status}: {name}")

    print()
    print(f"   Result: {passed}/{total} tests passed")

    return all(r for _, r in results)


if __name__ == "__main__":
    success = asyncio.run(main())
    sys.exit(0 if success else 1)
