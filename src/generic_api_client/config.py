"""Client settings resolved from explicit values, the environment and ``.env`` files.

Resolution order (highest to lowest priority):
1. Explicitly provided value
2. Environment variable
3. .env file (python-dotenv)
4. Default value

Example:
    ```python
    settings = ClientSettings.from_env(prefix="DUMMYJSON")  # DUMMYJSON_BASE_URL, DUMMYJSON_TOKEN
    client = Client.from_settings(settings)
    ```
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from threading import Lock

from dotenv import dotenv_values, find_dotenv

from generic_api_client.errors import ConfigurationError

logger = logging.getLogger(__name__)


class SettingsResolver:
    """Resolve setting values from several sources with priority ordering.

    The ``.env`` file is read once, lazily, and never copied into
    ``os.environ``.

    Args:
        dotenv_path: Path to a .env file. If None, the nearest .env file
            from the current working directory upwards is used.
        load_dotenv: Whether to consult a .env file at all.
    """

    def __init__(self, dotenv_path: str | Path | None = None, load_dotenv: bool = True):
        self._dotenv_path = dotenv_path
        self._load_dotenv_enabled = load_dotenv
        self._dotenv_values: dict[str, str | None] | None = None
        self._dotenv_lock = Lock()

    def _dotenv(self) -> dict[str, str | None]:
        if not self._load_dotenv_enabled:
            return {}
        if self._dotenv_values is not None:
            return self._dotenv_values

        with self._dotenv_lock:
            if self._dotenv_values is None:
                path = self._dotenv_path or find_dotenv(usecwd=True)
                self._dotenv_values = dotenv_values(path) if path else {}
                logger.debug(f"Loaded {len(self._dotenv_values)} values from .env file {path or '(none found)'}")
        return self._dotenv_values

    def resolve(
        self,
        *,
        value: str | None = None,
        env_var_name: str | None = None,
        default: str | None = None,
        required: bool = False,
        secret: bool = False,
    ) -> str | None:
        """Resolve a single setting.

        Args:
            value: Explicit value; wins over every other source
            env_var_name: Environment variable (and .env key) to check
            default: Value used when no other source has one
            required: Raise instead of returning None when nothing resolves
            secret: Mask the value as ``***`` in log output

        Raises:
            ConfigurationError: ``required`` is set and no source has a value
        """
        result = None
        source = None

        if value is not None:
            result, source = value, "explicit parameter"
        elif env_var_name and env_var_name in os.environ:
            result, source = os.environ[env_var_name], f"environment variable '{env_var_name}'"
        elif env_var_name and self._dotenv().get(env_var_name) is not None:
            result, source = self._dotenv()[env_var_name], f".env key '{env_var_name}'"
        elif default is not None:
            result, source = default, "default value"

        if result is not None:
            logger.debug(f"Resolved setting from {source}: {'***' if secret else result}")

        if required and result is None:
            message = "Required setting not found"
            if env_var_name:
                message += f" (checked env var: {env_var_name})"
            raise ConfigurationError(message, env_var_name=env_var_name)

        return result


@dataclass(frozen=True)
class ClientSettings:
    """Connection settings for a ``Client``."""

    base_url: str | None = None
    token: str | None = field(default=None, repr=False)

    @classmethod
    def from_env(
        cls,
        prefix: str = "GENERIC_API",
        *,
        base_url: str | None = None,
        token: str | None = None,
        resolver: SettingsResolver | None = None,
    ) -> "ClientSettings":
        """Read ``<prefix>_BASE_URL`` and ``<prefix>_TOKEN``; explicit arguments win."""
        resolver = resolver or SettingsResolver()
        return cls(
            base_url=resolver.resolve(value=base_url, env_var_name=f"{prefix}_BASE_URL"),
            token=resolver.resolve(value=token, env_var_name=f"{prefix}_TOKEN", secret=True),
        )
