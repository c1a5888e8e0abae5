"""Settings resolution shared by the ``serve`` and ``call`` commands."""

from __future__ import annotations

from pathlib import Path

from fess_mcp.config import McpSettings, SettingsLoader


def resolve_settings(config: str | None, fess_url: str | None) -> McpSettings:
    """Load *config* (YAML) or the environment, then apply ``--fess-url``.

    Raises:
        SettingsError: If the settings file is invalid.
    """
    if config is not None:
        settings = SettingsLoader(Path(config)).load()
        if fess_url:
            settings = settings.model_copy(update={"fess_url": fess_url})
        return settings
    return McpSettings.from_env(fess_url=fess_url)
