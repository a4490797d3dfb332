"""Client configuration for the Mochow SDK.

Configuration is an immutable pydantic model. It can be built in code or loaded
from a YAML file (``conf/mochow.yml`` by default, overridable with the
``MOCHOW_CONFIG_PATH`` environment variable)::

    account: root
    api_key: mochow
    endpoint: "127.0.0.1:5287"
    timeout_seconds: 10
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from omegaconf import OmegaConf
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from .errors import ParamsError

SDK_NAME = "mochow-sdk-python"
API_VERSION = "v1"
DEFAULT_TIMEOUT_SECONDS = 30
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_BACKOFF_SECONDS = 1.0
DEFAULT_CONFIG_FILE = "conf/mochow.yml"
CONFIG_PATH_ENV = "MOCHOW_CONFIG_PATH"

_REQUIRED_KEYS = ("account", "api_key", "endpoint")
_STRING_KEYS = ("account", "api_key", "endpoint", "user_agent")


def _candidate_paths(raw: Path) -> tuple[Path, ...]:
    if raw.is_absolute():
        return (raw,)
    return (Path.cwd() / raw,)


def _resolve_config_location(spec: Path | str, *, source: str) -> Path:
    raw = Path(spec).expanduser()
    for candidate in _candidate_paths(raw):
        if candidate.exists():
            return candidate.resolve()
    raise FileNotFoundError(f"Mochow config file not found for {source}: {raw}")


def _normalize_key(key: Any) -> str:
    normalized = str(key).lower()
    return normalized.removeprefix("mochow_")


def load_settings(path: Path | str | None = None) -> dict[str, Any]:
    """Load a YAML settings file into a dict with lower-case, unprefixed keys.

    ``MOCHOW_ACCOUNT`` and ``account`` both map to ``account``.
    """
    env_path = os.environ.get(CONFIG_PATH_ENV)
    if env_path:
        location = _resolve_config_location(env_path, source=CONFIG_PATH_ENV)
    elif path is not None:
        location = _resolve_config_location(path, source="path")
    else:
        location = _resolve_config_location(DEFAULT_CONFIG_FILE, source="default")

    raw_config = OmegaConf.load(location)
    config = OmegaConf.to_container(raw_config, resolve=True)
    if not isinstance(config, dict):
        raise ParamsError(f"config file must contain a mapping: {location}")
    return {_normalize_key(key): value for key, value in config.items()}


class ClientConfiguration(BaseModel):
    """Settings shared by every request a client sends.

    Attributes:
        account: Mochow account name
        api_key: API key for the account
        endpoint: Service address; ``http://`` is prepended when no scheme is given
        timeout_seconds: Per-request timeout
        max_retries: Retries of transient failures performed by the transport
        retry_backoff_seconds: Base delay of the exponential backoff
        user_agent: Suffix appended to the SDK user agent
    """

    model_config = ConfigDict(frozen=True)

    account: str
    api_key: str
    endpoint: str
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, ge=0)
    retry_backoff_seconds: float = Field(default=DEFAULT_RETRY_BACKOFF_SECONDS, ge=0)
    user_agent: str = ""

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise ParamsError(f"invalid client configuration: {exc}") from exc

    @model_validator(mode="before")
    @classmethod
    def _require_connection_settings(cls, data: Any) -> Any:
        if isinstance(data, dict):
            missing = [key for key in _REQUIRED_KEYS if not data.get(key)]
            if missing:
                raise ParamsError(
                    f"{', '.join(missing)} missing for creating mochow client"
                )
        return data

    @field_validator("endpoint")
    @classmethod
    def _normalize_endpoint(cls, value: str) -> str:
        if value.startswith(("http://", "https://")):
            return value
        return f"http://{value}"

    @property
    def version(self) -> str:
        return API_VERSION

    @property
    def base_url(self) -> str:
        return f"{self.endpoint.rstrip('/')}/{self.version}"

    def request_headers(self) -> dict[str, str]:
        """Headers attached to every request; always contains ``User-Agent``."""
        user_agent = f"{SDK_NAME}/{self.user_agent}" if self.user_agent else SDK_NAME
        return {"User-Agent": user_agent}

    @classmethod
    def from_file(cls, path: Path | str | None = None, **overrides: Any) -> ClientConfiguration:
        """Build a configuration from a YAML file; keyword overrides win.

        Scalar YAML values such as a numeric ``api_key`` are read as strings.
        """
        settings = load_settings(path)
        known = {key: value for key, value in settings.items() if key in cls.model_fields}
        for key in _STRING_KEYS:
            if known.get(key) is not None:
                known[key] = str(known[key])
        known.update(overrides)
        return cls(**known)


__all__ = [
    "API_VERSION",
    "ClientConfiguration",
    "SDK_NAME",
    "load_settings",
]
