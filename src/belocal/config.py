# SPDX-License-Identifier: Apache-2.0
"""Engine configuration loaded from arguments or the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

from dotenv import load_dotenv

from belocal.errors import ConfigurationError


@dataclass
class EngineConfig:
    """Configuration for BeLocalEngine.

    Attributes:
        api_key: BeLocal API key.
        base_url: API base URL. None uses the production endpoint.
        timeout: Overall request timeout in seconds.
    """

    api_key: str
    base_url: str | None = None
    timeout: float = 30.0

    # Environment variable names
    API_KEY_ENV_VAR: ClassVar[str] = "BELOCAL_API_KEY"
    BASE_URL_ENV_VAR: ClassVar[str] = "BELOCAL_BASE_URL"
    TIMEOUT_ENV_VAR: ClassVar[str] = "BELOCAL_TIMEOUT"

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ConfigurationError(
                f"BeLocal API key is required (set {self.API_KEY_ENV_VAR})"
            )
        if self.timeout <= 0:
            raise ConfigurationError(f"Timeout must be positive, got {self.timeout}")

    @classmethod
    def from_env(cls, env_file: Path | str | None = None) -> EngineConfig:
        """Build configuration from environment variables.

        Values from ``env_file`` (default: ``.env`` lookup by python-dotenv)
        never override variables that are already set.

        Args:
            env_file: Optional path to a .env file.

        Returns:
            Loaded configuration.

        Raises:
            ConfigurationError: If the API key is missing or the timeout is
                not a positive number.
        """
        load_dotenv(env_file)

        timeout_value = os.environ.get(cls.TIMEOUT_ENV_VAR)
        timeout = 30.0
        if timeout_value:
            try:
                timeout = float(timeout_value)
            except ValueError:
                raise ConfigurationError(
                    f"{cls.TIMEOUT_ENV_VAR} must be a number, got {timeout_value!r}"
                ) from None

        return cls(
            api_key=os.environ.get(cls.API_KEY_ENV_VAR, ""),
            base_url=os.environ.get(cls.BASE_URL_ENV_VAR) or None,
            timeout=timeout,
        )
