from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from scribe.domain.constants import DEFAULT_HISTORY_LIMIT

CONFIG_FILES = [
    Path.home() / ".config/scribe/config.toml",
    Path.home() / ".scribe.toml",
]


class AppConfig(BaseSettings):
    """
    Configuration model for scribe.
    Supports loading from:
    1. Environment variables (SCRIBE_*)
    2. Config file (~/.config/scribe/config.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="SCRIBE_",
        extra="ignore",
    )

    # Storage
    data_dir: Path = Field(default_factory=lambda: Path.home() / ".local/share/scribe")
    vocabulary_file: str = "vocabulary.json"
    writings_file: str = "writings.json"
    stats_file: str = "stats.json"

    # Scoring and review
    history_limit: int = Field(default=DEFAULT_HISTORY_LIMIT, ge=1)
    due_limit: int | None = Field(default=None, ge=1)
    lang: Literal["en", "ja"] = "en"

    verbose: int = 0

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        # First existing file wins; init (CLI) overrides beat env, env beats the file
        toml_file = next((f for f in CONFIG_FILES if f.exists()), None)

        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (
            init_settings,
            env_settings,
        )

    @field_validator("data_dir", mode="before")
    @classmethod
    def resolve_data_dir(cls, v: Any) -> Path:
        return Path(v).expanduser().resolve()

    @property
    def vocabulary_path(self) -> Path:
        return self.data_dir / self.vocabulary_file

    @property
    def writings_path(self) -> Path:
        return self.data_dir / self.writings_file

    @property
    def stats_path(self) -> Path:
        return self.data_dir / self.stats_file


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/scribe/config.toml (if exists)
    3. Environment variables (SCRIBE_*)
    4. cli_overrides (passed from Typer); None values are ignored
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
