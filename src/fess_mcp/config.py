"""Server settings — Fess endpoint, paging bounds, content limits."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from fess_mcp.errors import SettingsError

ENV_PREFIX = "FESS_MCP_"


class McpSettings(BaseModel):
    """Configuration consumed by the dispatcher, mapper and Fess client.

    ``max_page_size`` is the fallback for any out-of-range ``num``;
    ``default_start`` is the fallback for a negative or unparsable ``start``.
    """

    model_config = {"frozen": True}

    fess_url: str = "http://localhost:8080"
    default_start: int = Field(default=0, ge=0)
    default_page_size: int = Field(default=20, ge=1)
    max_page_size: int = Field(default=100, ge=1)
    content_max_length: int = Field(default=10000, ge=0)
    server_name: str = "fess-mcp-server"
    server_version: str = "1.0.0"
    request_timeout: float = Field(default=30.0, gt=0)

    @model_validator(mode="after")
    def _validate_page_sizes(self) -> McpSettings:
        if self.default_page_size > self.max_page_size:
            msg = (
                f"default_page_size ({self.default_page_size}) must not exceed "
                f"max_page_size ({self.max_page_size})"
            )
            raise ValueError(msg)
        return self

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: Any,
    ) -> McpSettings:
        """Build settings from ``FESS_MCP_*`` environment variables.

        Explicit *overrides* win over the environment.
        """
        env = os.environ if environ is None else environ
        data: dict[str, Any] = {}
        for name in cls.model_fields:
            value = env.get(ENV_PREFIX + name.upper())
            if value is not None:
                data[name] = value
        data.update({k: v for k, v in overrides.items() if v is not None})
        return cls.model_validate(data)


class SettingsLoader:
    """Load and validate a YAML settings file into :class:`McpSettings`."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self) -> McpSettings:
        """Read YAML, interpolate env vars, and validate.

        Raises:
            SettingsError: On unreadable files, YAML errors or validation failures.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise SettingsError(f"Cannot read {self._path}: {exc}") from exc

        expanded = os.path.expandvars(raw)

        try:
            data: Any = yaml.safe_load(expanded)
        except yaml.YAMLError as exc:
            raise SettingsError(f"YAML parse error: {exc}") from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise SettingsError("Settings YAML must be a mapping")

        try:
            return McpSettings.model_validate(data)
        except ValidationError as exc:
            raise SettingsError(str(exc)) from exc
