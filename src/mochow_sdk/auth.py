"""Authentication primitives for the Mochow client."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from .config import load_settings
from .errors import ParamsError


class Credentials(BaseModel):
    """Validated Mochow account credentials.

    The bearer token sent with every request is derived from the account and
    api key at construction time and never changes afterwards.
    """

    model_config = ConfigDict(frozen=True)

    account: str = Field(description="Mochow account name", examples=["root"])
    api_key: str = Field(description="API key issued for the account", examples=["mochow"])

    def __init__(self, account: str, api_key: str) -> None:
        super().__init__(account=account, api_key=api_key)

    @field_validator("account", "api_key")
    @classmethod
    def _require_non_empty(cls, value: str, info: ValidationInfo) -> str:
        if not value:
            raise ParamsError(f"{info.field_name} should not be empty")
        return value

    @property
    def token(self) -> str:
        return f"account={self.account}&api_key={self.api_key}"

    def __str__(self) -> str:
        return f"account: {self.account}, api_key: {'*' * 8}"

    @classmethod
    def from_file(cls, path: Path | str | None = None) -> Credentials:
        """Create credentials from the ``account``/``api_key`` keys of a YAML file."""
        settings = load_settings(path)
        missing = [key for key in ("account", "api_key") if not settings.get(key)]
        if missing:
            raise ParamsError(f"missing Mochow credentials: {', '.join(missing)}")
        return cls(str(settings["account"]), str(settings["api_key"]))


__all__ = ["Credentials"]
