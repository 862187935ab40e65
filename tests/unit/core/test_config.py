"""
Tests for RelocationConfig and EnvManager.
"""

import json

import pytest

import segmove.core.config as config_module
from segmove.core.config import RelocationConfig, configure, get_config
from segmove.core.env import EnvManager


@pytest.fixture(autouse=True)
def reset_global_config():
    yield
    config_module._global_config = None


class TestRelocationConfig:
    """Tests for RelocationConfig"""

    def test_defaults(self):
        config = RelocationConfig()

        assert config.storage_url == "memory://"
        assert config.verify_copy is True
        assert config.main_target is None
        assert config.archive_target is None

    def test_targets(self):
        config = RelocationConfig(
            main_bucket="main", main_base_key="baseKey", archive_bucket="archive", archive_base_key=""
        )

        assert config.main_target == {"bucket": "main", "baseKey": "baseKey"}
        assert config.archive_target == {"bucket": "archive", "baseKey": ""}

    def test_log_level_normalized(self):
        assert RelocationConfig(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValueError, match="Invalid log level"):
            RelocationConfig(log_level="LOUD")

    def test_dict_layout(self):
        config = RelocationConfig(
            storage_url="s3://?region=eu-west-1",
            archive_bucket="archive",
            archive_base_key="cold",
            verify_copy=False,
        )

        data = config.to_dict()

        assert data["locations"]["archive"] == {"bucket": "archive", "baseKey": "cold"}
        assert data["mover"]["verify_copy"] is False
        assert RelocationConfig.from_dict(data) == config

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("SEGMOVE_STORAGE_URL", "s3://?region=eu-west-1")
        monkeypatch.setenv("SEGMOVE_S3_ENDPOINT_URL", "http://localhost:9000")
        monkeypatch.setenv("SEGMOVE_ARCHIVE_BUCKET", "archive")
        monkeypatch.setenv("SEGMOVE_ARCHIVE_BASE_KEY", "cold")
        monkeypatch.setenv("SEGMOVE_VERIFY_COPY", "false")
        monkeypatch.setenv("SEGMOVE_LOG_LEVEL", "warning")
        monkeypatch.setenv("SEGMOVE_METRICS", "0")

        config = RelocationConfig.from_env(load_dotenv=False)

        assert config.storage_url == "s3://?region=eu-west-1"
        assert config.storage_options == {"endpoint_url": "http://localhost:9000"}
        assert config.archive_target == {"bucket": "archive", "baseKey": "cold"}
        assert config.verify_copy is False
        assert config.log_level == "WARNING"
        assert config.metrics is False

    def test_from_yaml_file_with_substitution(self, tmp_path, monkeypatch):
        monkeypatch.setenv("ARCHIVE_BUCKET", "segments-archive")
        monkeypatch.delenv("STORAGE_URL", raising=False)
        path = tmp_path / "segmove.yaml"
        path.write_text(
            "storage:\n"
            "  url: ${STORAGE_URL:-memory://}\n"
            "locations:\n"
            "  archive: {bucket: '${ARCHIVE_BUCKET}', baseKey: prod}\n"
            "observability:\n"
            "  json_logs: true\n"
        )

        config = RelocationConfig.from_file(path)

        assert config.storage_url == "memory://"
        assert config.archive_target == {"bucket": "segments-archive", "baseKey": "prod"}
        assert config.json_logs is True

    def test_from_json_file(self, tmp_path):
        path = tmp_path / "segmove.json"
        path.write_text(json.dumps({"locations": {"main": {"bucket": "m", "baseKey": "k"}}}))

        config = RelocationConfig.from_file(path)

        assert config.main_target == {"bucket": "m", "baseKey": "k"}

    def test_from_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RelocationConfig.from_file(tmp_path / "nope.yaml")

    def test_from_file_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ValueError, match="mapping"):
            RelocationConfig.from_file(path)

    def test_global_config(self):
        assert get_config() == RelocationConfig()

        config = RelocationConfig(archive_bucket="a", archive_base_key="b")
        configure(config)

        assert get_config() is config


class TestEnvManager:
    """Tests for EnvManager"""

    def test_load_env_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("SEGMOVE_TEST_VALUE", raising=False)
        (tmp_path / ".env").write_text("SEGMOVE_TEST_VALUE=hello\n")

        env = EnvManager(project_root=tmp_path)

        assert env.loaded is True
        assert env.get("SEGMOVE_TEST_VALUE") == "hello"
        monkeypatch.delenv("SEGMOVE_TEST_VALUE")

    def test_missing_env_file(self, tmp_path):
        env = EnvManager(project_root=tmp_path)

        assert env.loaded is False

    def test_required(self, tmp_path, monkeypatch):
        monkeypatch.delenv("SEGMOVE_UNSET", raising=False)
        env = EnvManager(project_root=tmp_path, auto_load=False)

        with pytest.raises(ValueError, match="SEGMOVE_UNSET"):
            env.get("SEGMOVE_UNSET", required=True)

    def test_get_bool(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SEGMOVE_FLAG", "yes")
        env = EnvManager(project_root=tmp_path, auto_load=False)

        assert env.get_bool("SEGMOVE_FLAG") is True
        assert env.get_bool("SEGMOVE_MISSING_FLAG", True) is True

    def test_substitute(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SEGMOVE_BUCKET", "cold")
        monkeypatch.delenv("SEGMOVE_NOPE", raising=False)
        env = EnvManager(project_root=tmp_path, auto_load=False)

        assert env.substitute("${SEGMOVE_BUCKET}/x") == "cold/x"
        assert env.substitute("${SEGMOVE_NOPE:-dflt}") == "dflt"
        assert env.substitute("${SEGMOVE_NOPE}") == "${SEGMOVE_NOPE}"
        with pytest.raises(ValueError, match="needed"):
            env.substitute("${SEGMOVE_NOPE:?needed}")

    def test_substitute_dict(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SEGMOVE_BUCKET", "cold")
        env = EnvManager(project_root=tmp_path, auto_load=False)

        result = env.substitute_dict({"a": {"b": "${SEGMOVE_BUCKET}"}, "c": ["${SEGMOVE_BUCKET}", 1]})

        assert result == {"a": {"b": "cold"}, "c": ["cold", 1]}
