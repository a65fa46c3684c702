"""Server configuration read from the environment."""

from __future__ import annotations

import shlex

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_GATEWAY_URL = "https://w3s.link/ipfs/"


class ServerSettings(BaseSettings):
    """
    Settings for the w3 bridge. Every field maps to a ``W3_*`` environment
    variable (``login_email`` -> ``W3_LOGIN_EMAIL``) or a ``.env`` entry.
    """

    model_config = SettingsConfigDict(
        env_prefix="W3_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    login_email: str | None = Field(
        default=None,
        description="Email used by `w3 login`; must match the storacha.network account.",
    )
    command: str = Field(
        default="w3",
        min_length=1,
        description="Executable (plus leading arguments) used to invoke the w3 CLI.",
    )
    gateway_url: str = Field(
        default=DEFAULT_GATEWAY_URL,
        min_length=8,
        description="IPFS gateway prefix used to build content URLs.",
    )
    command_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Upper bound for a single w3 invocation (seconds). Unset waits indefinitely.",
    )

    def command_argv(self) -> list[str]:
        return shlex.split(self.command)

    def gateway_prefix(self) -> str:
        if self.gateway_url.endswith("/"):
            return self.gateway_url
        return self.gateway_url + "/"
