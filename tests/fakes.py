"""In-memory catalog provider and jar helpers for tests."""

import asyncio
import json
import zipfile

from modmanager.errors import ErrorKind
from modmanager.mods.models import CatalogMod, CatalogVersion
from modmanager.providers.base import BaseProvider, CatalogError, ModsResult, VersionsResult
from modmanager.storage.models import ReleaseType


def release(version, game_versions=("1.17.1",), release_type=ReleaseType.RELEASE):
    return CatalogVersion(version=version, release_type=release_type, game_versions=list(game_versions))


class FakeProvider(BaseProvider):
    def __init__(self, name="Fake", mods=None, versions=None, search_error=None, versions_error=None, delay=0.0):
        self._name = name
        self.mods = mods or []
        self.versions = versions or {}
        self.search_error = search_error
        self.versions_error = versions_error
        self.delay = delay
        self.searches = []
        self.version_requests = []
        self.closed = False

    @property
    def name(self):
        return self._name

    async def search(self, query, page=0, limit=10):
        self.searches.append((query, page, limit))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.search_error:
            return ModsResult(error=CatalogError(self.search_error, "search failed"))
        return ModsResult(mods=list(self.mods))

    async def get_versions_for_mod(self, catalog_id):
        self.version_requests.append(catalog_id)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.versions_error:
            return VersionsResult(error=CatalogError(self.versions_error, "versions failed"))
        if catalog_id not in self.versions:
            return VersionsResult(error=CatalogError(ErrorKind.INVALID_RESPONSE, "Invalid status 404"))
        return VersionsResult(versions=list(self.versions[catalog_id]))

    async def close(self):
        self.closed = True


def catalog_mod(slug, name=None, mod_id=None):
    return CatalogMod(id=mod_id or slug, slug=slug, name=name or slug.title())


def write_jar(mods_dir, filename, metadata):
    path = mods_dir / filename
    with zipfile.ZipFile(path, "w") as archive:
        if metadata is not None:
            archive.writestr("fabric.mod.json", json.dumps(metadata))
        archive.writestr("META-INF/MANIFEST.MF", "Manifest-Version: 1.0\n")
    return path
