"""
RelocationConfig - configuration for segment relocation.

Wires together:
- Object store location (storage URL + backend options)
- Main and archive locations (bucket + base key) for archive/restore
- Mover behaviour (copy verification)
- Observability (log level, JSON logs, metrics)

Example:
    >>> from segmove.core.config import RelocationConfig, configure
    >>>
    >>> config = RelocationConfig(
    ...     storage_url="s3://?region=eu-west-1",
    ...     main_bucket="segments",
    ...     main_base_key="prod",
    ...     archive_bucket="segments-archive",
    ...     archive_base_key="prod",
    ... )
    >>> configure(config)

Example (YAML file):
    # segmove.yaml
    storage:
      url: ${SEGMOVE_STORAGE_URL:-memory://}
    locations:
      main: {bucket: segments, baseKey: prod}
      archive: {bucket: segments-archive, baseKey: prod}
    mover:
      verify_copy: true
    observability:
      log_level: INFO
      json_logs: true
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from segmove.core.env import get_env
from segmove.core.logger import get_logger

logger = get_logger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class RelocationConfig:
    """
    Configuration for segment relocation.

    Attributes:
        storage_url: Object store URL (memory://, file:///path, s3://?region=...)
        storage_options: Extra backend options (endpoint_url, credentials, ...)
        main_bucket: Bucket holding live segments
        main_base_key: Base key of live segments within main_bucket
        archive_bucket: Bucket archived segments are moved to
        archive_base_key: Base key of archived segments within archive_bucket
        verify_copy: Re-check target existence after a copy before deleting the source
        log_level: Logging level for the segmove namespace
        json_logs: Emit structured JSON log lines
        metrics: Collect in-process move metrics
    """

    storage_url: str = "memory://"
    storage_options: dict[str, Any] = field(default_factory=dict)
    main_bucket: str | None = None
    main_base_key: str | None = None
    archive_bucket: str | None = None
    archive_base_key: str | None = None
    verify_copy: bool = True
    log_level: str = "INFO"
    json_logs: bool = False
    metrics: bool = True

    def __post_init__(self) -> None:
        self.log_level = self.log_level.upper()
        if self.log_level not in _LOG_LEVELS:
            msg = f"Invalid log level: {self.log_level!r} (expected one of {', '.join(_LOG_LEVELS)})"
            raise ValueError(msg)

    @property
    def main_target(self) -> dict[str, str] | None:
        """Relocation target for the main location, if configured"""
        if not self.main_bucket or self.main_base_key is None:
            return None
        return {"bucket": self.main_bucket, "baseKey": self.main_base_key}

    @property
    def archive_target(self) -> dict[str, str] | None:
        """Relocation target for the archive location, if configured"""
        if not self.archive_bucket or self.archive_base_key is None:
            return None
        return {"bucket": self.archive_bucket, "baseKey": self.archive_base_key}

    def to_dict(self) -> dict[str, Any]:
        """Convert to the nested dictionary layout used by configuration files."""
        return {
            "storage": {"url": self.storage_url, "options": dict(self.storage_options)},
            "locations": {
                "main": {"bucket": self.main_bucket, "baseKey": self.main_base_key},
                "archive": {"bucket": self.archive_bucket, "baseKey": self.archive_base_key},
            },
            "mover": {"verify_copy": self.verify_copy},
            "observability": {
                "log_level": self.log_level,
                "json_logs": self.json_logs,
                "metrics": self.metrics,
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RelocationConfig:
        """Build configuration from the nested dictionary layout."""
        storage = data.get("storage") or {}
        locations = data.get("locations") or {}
        main = locations.get("main") or {}
        archive = locations.get("archive") or {}
        mover = data.get("mover") or {}
        observability = data.get("observability") or {}

        return cls(
            storage_url=storage.get("url", "memory://"),
            storage_options=dict(storage.get("options") or {}),
            main_bucket=main.get("bucket"),
            main_base_key=main.get("baseKey"),
            archive_bucket=archive.get("bucket"),
            archive_base_key=archive.get("baseKey"),
            verify_copy=bool(mover.get("verify_copy", True)),
            log_level=str(observability.get("log_level", "INFO")),
            json_logs=bool(observability.get("json_logs", False)),
            metrics=bool(observability.get("metrics", True)),
        )

    @classmethod
    def from_env(cls, load_dotenv: bool = True) -> RelocationConfig:
        """
        Create configuration from environment variables.

        Environment variables:
            SEGMOVE_STORAGE_URL: Object store URL (default memory://)
            SEGMOVE_S3_ENDPOINT_URL: Endpoint for S3-compatible stores
            SEGMOVE_MAIN_BUCKET, SEGMOVE_MAIN_BASE_KEY: Live segment location
            SEGMOVE_ARCHIVE_BUCKET, SEGMOVE_ARCHIVE_BASE_KEY: Archive location
            SEGMOVE_VERIFY_COPY: Verify copies before deleting sources (true/false)
            SEGMOVE_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR
            SEGMOVE_JSON_LOGS: Structured JSON logs (true/false)
            SEGMOVE_METRICS: Collect move metrics (true/false)
        """
        env = get_env()
        if load_dotenv:
            env.load()

        storage_options: dict[str, Any] = {}
        endpoint_url = env.get("SEGMOVE_S3_ENDPOINT_URL")
        if endpoint_url:
            storage_options["endpoint_url"] = endpoint_url

        return cls(
            storage_url=env.get("SEGMOVE_STORAGE_URL", "memory://"),
            storage_options=storage_options,
            main_bucket=env.get("SEGMOVE_MAIN_BUCKET"),
            main_base_key=env.get("SEGMOVE_MAIN_BASE_KEY"),
            archive_bucket=env.get("SEGMOVE_ARCHIVE_BUCKET"),
            archive_base_key=env.get("SEGMOVE_ARCHIVE_BASE_KEY"),
            verify_copy=env.get_bool("SEGMOVE_VERIFY_COPY", True),
            log_level=env.get("SEGMOVE_LOG_LEVEL", "INFO"),
            json_logs=env.get_bool("SEGMOVE_JSON_LOGS", False),
            metrics=env.get_bool("SEGMOVE_METRICS", True),
        )

    @classmethod
    def from_file(cls, file_path: str | Path, substitute_env: bool = True) -> RelocationConfig:
        """
        Load configuration from a YAML or JSON file.

        ${VAR} references are substituted from the environment when
        substitute_env is True.
        """
        path = Path(file_path)
        if not path.exists():
            msg = f"Configuration file not found: {file_path}"
            raise FileNotFoundError(msg)

        with path.open() as f:
            data = json.load(f) if path.suffix == ".json" else yaml.safe_load(f)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            msg = f"Configuration file must contain a mapping: {file_path}"
            raise ValueError(msg)

        if substitute_env:
            data = get_env().substitute_dict(data)

        logger.debug(f"Loaded relocation config from {path}")
        return cls.from_dict(data)


_global_config: RelocationConfig | None = None


def configure(config: RelocationConfig) -> None:
    """Set the global relocation configuration."""
    global _global_config
    _global_config = config
    logger.info(f"Relocation configured: storage={config.storage_url}")


def get_config() -> RelocationConfig:
    """Get the global relocation configuration (defaults if never configured)."""
    global _global_config
    if _global_config is None:
        _global_config = RelocationConfig()
    return _global_config
