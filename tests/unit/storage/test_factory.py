"""
Tests for the object store factory.
"""

from unittest.mock import patch

import pytest

from segmove.storage import backends
from segmove.storage.backends.memory import InMemoryObjectStore
from segmove.storage.factory import create_object_store, create_object_store_from_url


class TestCreateObjectStore:
    def test_memory_default(self):
        assert isinstance(create_object_store(), InMemoryObjectStore)

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="Unknown object store backend"):
            create_object_store("ftp")

    @pytest.mark.parametrize("alias", ["filesystem", "file", "LOCAL"])
    def test_filesystem_aliases(self, alias, tmp_path):
        pytest.importorskip("aiofiles")
        from segmove.storage.backends.filesystem import FilesystemObjectStore

        store = create_object_store(alias, base_path=tmp_path)

        assert isinstance(store, FilesystemObjectStore)
        assert store.base_path == tmp_path

    def test_s3_options(self):
        pytest.importorskip("aioboto3")
        with patch("segmove.storage.backends.s3.object_store.aioboto3"):
            store = create_object_store(
                "s3",
                region_name="eu-west-1",
                endpoint_url="http://localhost:4566",
                aws_access_key_id="test",
            )

        assert store.region_name == "eu-west-1"
        assert store.endpoint_url == "http://localhost:4566"
        assert store.s3_kwargs == {"aws_access_key_id": "test"}


class TestCreateObjectStoreFromUrl:
    def test_memory(self):
        assert isinstance(create_object_store_from_url("memory://"), InMemoryObjectStore)

    def test_file_absolute(self, tmp_path):
        pytest.importorskip("aiofiles")

        store = create_object_store_from_url(f"file://{tmp_path}")

        assert store.base_path == tmp_path

    def test_s3_query(self):
        pytest.importorskip("aioboto3")
        with patch("segmove.storage.backends.s3.object_store.aioboto3"):
            store = create_object_store_from_url("s3://?region=eu-west-1&endpoint=http://minio:9000")

        assert store.region_name == "eu-west-1"
        assert store.endpoint_url == "http://minio:9000"

    def test_s3_explicit_options_win(self):
        pytest.importorskip("aioboto3")
        with patch("segmove.storage.backends.s3.object_store.aioboto3"):
            store = create_object_store_from_url(
                "s3://?endpoint=http://minio:9000", endpoint_url="http://other:9000"
            )

        assert store.endpoint_url == "http://other:9000"

    def test_unsupported(self):
        with pytest.raises(ValueError, match="Unsupported storage URL"):
            create_object_store_from_url("gs://bucket")


class TestLazyBackends:
    def test_lazy_import(self):
        assert backends.InMemoryObjectStore is InMemoryObjectStore

    def test_unknown_attribute(self):
        with pytest.raises(AttributeError):
            _ = backends.DoesNotExist
