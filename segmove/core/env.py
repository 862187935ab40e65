"""
Environment variable management with .env file support.

Loads .env files, reads typed values and substitutes ${VAR} references
in configuration files.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

_BRACED_VAR = re.compile(r"\$\{([^}:]+)(?::([?-])([^}]*))?\}")
_BARE_VAR = re.compile(r"\$([A-Z_][A-Z0-9_]*)")


class EnvManager:
    """
    Manages environment variables for segmove deployments.

    Example:
        >>> env = EnvManager()
        >>> env.load()  # Loads .env if it exists
        >>> bucket = env.get("SEGMOVE_ARCHIVE_BUCKET")
    """

    def __init__(self, project_root: Path | str | None = None, auto_load: bool = True):
        """
        Initialize the environment manager.

        Args:
            project_root: Directory searched for the .env file
            auto_load: Load the .env file right away if found
        """
        self.project_root = Path(project_root) if project_root else Path.cwd()
        self._loaded = False

        if auto_load:
            self.load()

    @property
    def loaded(self) -> bool:
        return self._loaded

    def load(self, env_file: str | Path | None = None, override: bool = False) -> bool:
        """
        Load environment variables from a .env file.

        Returns:
            True if the file was loaded, False if it does not exist
        """
        env_path = self.project_root / ".env" if env_file is None else Path(env_file)

        if not env_path.exists():
            return False

        load_dotenv(env_path, override=override)
        self._loaded = True
        return True

    def get(self, key: str, default: str | None = None, required: bool = False) -> str | None:
        """
        Get an environment variable value.

        Raises:
            ValueError: If required=True and the variable is not set
        """
        value = os.environ.get(key, default)

        if required and value is None:
            msg = f"Required environment variable not set: {key}"
            raise ValueError(msg)

        return value

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Get environment variable as boolean."""
        value = (self.get(key, "") or "").lower()
        if value in ("true", "1", "yes", "on"):
            return True
        if value in ("false", "0", "no", "off"):
            return False
        return default

    def substitute(self, text: str) -> str:
        """
        Substitute environment variables in text.

        Supports ${VAR}, ${VAR:-default}, ${VAR:?error} and bare $VAR.
        Unknown ${VAR} references are left untouched.

        Example:
            >>> os.environ["ARCHIVE"] = "cold-bucket"
            >>> env.substitute("bucket: ${ARCHIVE}")
            'bucket: cold-bucket'
        """

        def replace(match: re.Match) -> str:
            var_name, operator, operand = match.group(1), match.group(2), match.group(3)
            value = os.environ.get(var_name)

            if operator == "-":
                return value if value is not None else operand
            if operator == "?":
                if value is None:
                    raise ValueError(operand or f"Required variable not set: {var_name}")
                return value
            return value if value is not None else match.group(0)

        text = _BRACED_VAR.sub(replace, text)
        return _BARE_VAR.sub(lambda m: os.environ.get(m.group(1), m.group(0)), text)

    def substitute_dict(self, data: dict[str, Any]) -> dict[str, Any]:
        """Recursively substitute environment variables in dictionary values."""
        result: dict[str, Any] = {}
        for key, value in data.items():
            if isinstance(value, str):
                result[key] = self.substitute(value)
            elif isinstance(value, dict):
                result[key] = self.substitute_dict(value)
            elif isinstance(value, list):
                result[key] = [
                    self.substitute(item)
                    if isinstance(item, str)
                    else self.substitute_dict(item)
                    if isinstance(item, dict)
                    else item
                    for item in value
                ]
            else:
                result[key] = value
        return result


_global_env: EnvManager | None = None


def get_env() -> EnvManager:
    """Get the global environment manager instance."""
    global _global_env
    if _global_env is None:
        _global_env = EnvManager(auto_load=False)
    return _global_env

