"""
Tests for the filesystem object store.
"""

from unittest.mock import patch

import pytest

pytest.importorskip("aiofiles")

from segmove.core.exceptions import MissingDependencyError
from segmove.storage.backends.filesystem import FilesystemObjectStore
from segmove.storage.core import ObjectNotFoundError, StorageError

KEY = "baseKey/test/2013-01-01T00:00:00.000Z_2013-01-02T00:00:00.000Z/1/0/index.zip"


@pytest.fixture
def fs_store(tmp_path):
    return FilesystemObjectStore(base_path=tmp_path, chunk_size=4)


def write(tmp_path, bucket, key, data=b"segment-bytes"):
    path = tmp_path / bucket / key
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path


class TestFilesystemObjectStore:
    """Tests for FilesystemObjectStore"""

    def test_missing_aiofiles(self, tmp_path):
        with patch("segmove.storage.backends.filesystem.AIOFILES_AVAILABLE", False):
            with pytest.raises(MissingDependencyError, match="aiofiles"):
                FilesystemObjectStore(base_path=tmp_path)

    @pytest.mark.asyncio
    async def test_exists(self, fs_store, tmp_path):
        write(tmp_path, "main", KEY)

        assert await fs_store.exists("main", KEY) is True
        assert await fs_store.exists("archive", KEY) is False

    @pytest.mark.asyncio
    async def test_copy_in_chunks(self, fs_store, tmp_path):
        write(tmp_path, "main", KEY, b"0123456789")

        await fs_store.copy("main", KEY, "archive", "cold/index.zip")

        assert (tmp_path / "archive" / "cold" / "index.zip").read_bytes() == b"0123456789"
        assert (tmp_path / "main" / KEY).exists()

    @pytest.mark.asyncio
    async def test_copy_leaves_no_temp_files(self, fs_store, tmp_path):
        write(tmp_path, "main", KEY)

        await fs_store.copy("main", KEY, "archive", KEY)

        leftovers = [p for p in (tmp_path / "archive").rglob("*.tmp")]
        assert leftovers == []

    @pytest.mark.asyncio
    async def test_copy_missing_source(self, fs_store):
        with pytest.raises(ObjectNotFoundError):
            await fs_store.copy("main", KEY, "archive", KEY)

    @pytest.mark.asyncio
    async def test_copy_onto_itself(self, fs_store, tmp_path):
        write(tmp_path, "main", KEY, b"same")

        await fs_store.copy("main", KEY, "main", KEY)

        assert (tmp_path / "main" / KEY).read_bytes() == b"same"

    @pytest.mark.asyncio
    async def test_delete_prunes_empty_dirs(self, fs_store, tmp_path):
        write(tmp_path, "main", KEY)

        await fs_store.delete("main", KEY)

        assert not (tmp_path / "main" / "baseKey").exists()
        assert (tmp_path / "main").is_dir()

    @pytest.mark.asyncio
    async def test_delete_absent(self, fs_store):
        await fs_store.delete("main", KEY)

    @pytest.mark.asyncio
    async def test_list(self, fs_store, tmp_path):
        write(tmp_path, "main", "base/b", b"22")
        write(tmp_path, "main", "base/a", b"1")
        write(tmp_path, "main", "other/c")
        write(tmp_path, "main", "base/.a.deadbeef.tmp")

        summaries = await fs_store.list("main", "base/")

        assert [s.key for s in summaries] == ["base/a", "base/b"]
        assert summaries[1].size == 2
        assert summaries[0].last_modified is not None
        assert len(await fs_store.list("main", "", limit=1)) == 1
        assert await fs_store.list("nope", "") == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(("bucket", "key"), [("..", "x"), ("main", "../../etc/passwd"), ("a/b", "x")])
    async def test_rejects_paths_outside_bucket(self, fs_store, bucket, key):
        with pytest.raises(StorageError, match="Invalid"):
            await fs_store.exists(bucket, key)
