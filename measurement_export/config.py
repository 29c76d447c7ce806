import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .exceptions import ConfigError

DEFAULT_WORKING_DIR = "/tmp/"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Connection settings for the measurement API.

    Read from the environment (and a ``.env`` file, if one exists):
    - DAP_BASE_URL: API root, e.g. https://dap.example.org
    - DAP_PRIVATE_TOKEN: token sent as ``private_token`` with every request
    - DAP_VERIFY_SSL: verify TLS certificates (off unless set to 1/true)
    - DAP_TIMEOUT: request timeout in seconds (unset = wait forever)
    - EXPORT_WORKING_DIR: where CSV files land
    """

    base_url: str
    private_token: str
    verify_ssl: bool = False
    timeout: Optional[float] = None
    working_dir: str = DEFAULT_WORKING_DIR

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "Settings":
        load_dotenv(env_file or Path.cwd() / ".env")

        base_url = os.getenv("DAP_BASE_URL", "").strip().rstrip("/")
        token = os.getenv("DAP_PRIVATE_TOKEN", "").strip()
        if not base_url:
            raise ConfigError("DAP_BASE_URL is not set")
        if not token:
            raise ConfigError("DAP_PRIVATE_TOKEN is not set")

        raw_timeout = os.getenv("DAP_TIMEOUT", "").strip()
        try:
            timeout = float(raw_timeout) if raw_timeout else None
        except ValueError:
            raise ConfigError(f"DAP_TIMEOUT must be a number, got {raw_timeout!r}")

        return cls(
            base_url=base_url,
            private_token=token,
            verify_ssl=os.getenv("DAP_VERIFY_SSL", "").strip().lower() in _TRUTHY,
            timeout=timeout,
            working_dir=os.getenv("EXPORT_WORKING_DIR", DEFAULT_WORKING_DIR),
        )
