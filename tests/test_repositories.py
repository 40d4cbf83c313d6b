"""Tests for the catalog stores."""

import json
from datetime import date, datetime

import pytest

from media_catalog.domain.catalog import MediaKind
from media_catalog.exceptions import EntryNotFoundError, StorageError
from media_catalog.infrastructure.repositories import (
    FileBasedCatalogEntryRepository,
    InMemoryCatalogEntryRepository,
)
from media_catalog.infrastructure.repositories.file_based_repository import ENTRIES_FILENAME


@pytest.fixture(params=["memory", "file"])
def repo(request, tmp_path):
    """Run each contract test against both stores."""
    if request.param == "memory":
        return InMemoryCatalogEntryRepository()
    return FileBasedCatalogEntryRepository(tmp_path / "library")


class TestRepositoryContract:
    """Behaviour shared by every store."""

    @pytest.mark.asyncio
    async def test_save_and_find(self, repo, make_entry):
        entry = make_entry("Dune", release_date=date(1965, 8, 1), tags=("sci-fi",))
        await repo.save(entry)
        assert await repo.find_by_id(entry.id) == entry
        assert await repo.count() == 1

    @pytest.mark.asyncio
    async def test_save_duplicate_id_fails(self, repo, make_entry):
        entry = make_entry()
        await repo.save(entry)
        with pytest.raises(StorageError):
            await repo.save(entry)

    @pytest.mark.asyncio
    async def test_update(self, repo, make_entry):
        entry = make_entry("Dune")
        await repo.save(entry)
        changed = entry.with_changes(now=datetime(2024, 9, 1), rating=4)
        await repo.update(changed)
        assert (await repo.find_by_id(entry.id)).rating == 4

    @pytest.mark.asyncio
    async def test_update_missing_fails(self, repo, make_entry):
        with pytest.raises(EntryNotFoundError):
            await repo.update(make_entry())

    @pytest.mark.asyncio
    async def test_delete(self, repo, make_entry):
        entry = make_entry()
        await repo.save(entry)
        assert await repo.delete(entry.id) is True
        assert await repo.delete(entry.id) is False
        assert await repo.find_by_id(entry.id) is None

    @pytest.mark.asyncio
    async def test_find_all_pagination(self, repo, make_entry):
        entries = [make_entry(str(i)) for i in range(5)]
        for entry in entries:
            await repo.save(entry)

        page = [e async for e in repo.find_all(limit=2, offset=1)]
        assert [e.title for e in page] == ["1", "2"]
        assert len(await repo.query_all()) == 5


class TestFileBasedRepository:
    """Behaviour specific to the JSON store."""

    @pytest.mark.asyncio
    async def test_missing_file_is_empty_catalog(self, tmp_path):
        repo = FileBasedCatalogEntryRepository(tmp_path)
        assert await repo.count() == 0
        assert await repo.query_all() == []

    @pytest.mark.asyncio
    async def test_persists_across_instances(self, tmp_path, make_entry):
        entry = make_entry("Blue", kind=MediaKind.ALBUM, cover_image=b"\x00\x01")
        await FileBasedCatalogEntryRepository(tmp_path).save(entry)

        reloaded = await FileBasedCatalogEntryRepository(tmp_path).find_by_id(entry.id)
        assert reloaded == entry

        data = json.loads((tmp_path / ENTRIES_FILENAME).read_text(encoding="utf-8"))
        assert data[entry.id]["title"] == "Blue"

    @pytest.mark.asyncio
    async def test_invalid_json_raises(self, tmp_path):
        (tmp_path / ENTRIES_FILENAME).write_text("{not json", encoding="utf-8")
        with pytest.raises(StorageError):
            await FileBasedCatalogEntryRepository(tmp_path).count()

    @pytest.mark.asyncio
    async def test_non_object_file_raises(self, tmp_path):
        (tmp_path / ENTRIES_FILENAME).write_text("[]", encoding="utf-8")
        with pytest.raises(StorageError):
            await FileBasedCatalogEntryRepository(tmp_path).count()

    @pytest.mark.asyncio
    async def test_malformed_records_skipped(self, tmp_path, make_entry):
        good = make_entry("Good")
        payload = {
            good.id: good.to_dict(),
            "broken": {"id": "broken", "title": "No timestamps"},
        }
        (tmp_path / ENTRIES_FILENAME).write_text(json.dumps(payload), encoding="utf-8")

        repo = FileBasedCatalogEntryRepository(tmp_path)
        entries = await repo.query_all()
        assert [e.title for e in entries] == ["Good"]
        assert await repo.count() == len(entries)
