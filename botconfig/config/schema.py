"""
Settings for locating and opening the configuration documents.

Validated at startup so a bad data directory or missing schema shows up
before the first repository call.
"""

from pathlib import Path
from typing import Literal, Optional, Tuple, Type

from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

DocumentKind = Literal["strategies", "markets", "exchange"]

PACKAGE_SCHEMA_DIR = Path(__file__).resolve().parent.parent / "schemas"


class FileNames(BaseModel):
    """Data file names inside the data directory."""

    strategies: str = Field(default="strategies.yaml")
    markets: str = Field(default="markets.yaml")
    exchange: str = Field(default="exchange.yaml")


class SchemaFileNames(BaseModel):
    """Schema file names inside the schema directory."""

    strategies: str = Field(default="strategies.schema.json")
    markets: str = Field(default="markets.schema.json")
    exchange: str = Field(default="exchange.schema.json")


class LoggingSettings(BaseModel):
    """Logging output settings."""

    level: str = Field(default="INFO")
    json_output: bool = Field(default=False)
    log_file: Optional[str] = None

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {v}")
        return level


class Settings(BaseSettings):
    """
    Root settings model.

    BOTCONFIG_* environment variables take precedence over constructor
    values (and so over a settings file). Nested fields use a double
    underscore, e.g. BOTCONFIG_LOGGING__LEVEL.
    """

    model_config = SettingsConfigDict(
        env_prefix="BOTCONFIG_",
        env_nested_delimiter="__",
        env_ignore_empty=True,
        extra="ignore",
    )

    # Directory holding the YAML data files
    data_dir: Path = Field(default=Path("config"))

    # Directory holding the JSON schemas (shipped with the package by default)
    schema_dir: Path = Field(default=PACKAGE_SCHEMA_DIR)

    files: FileNames = Field(default_factory=FileNames)
    schemas: SchemaFileNames = Field(default_factory=SchemaFileNames)

    # Needed only when a data file is encrypted
    master_password: Optional[SecretStr] = None

    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    def data_path(self, kind: DocumentKind) -> Path:
        """Path of the data file for a configuration class."""
        return self.data_dir / getattr(self.files, kind)

    def schema_path(self, kind: DocumentKind) -> Path:
        """Path of the schema file for a configuration class."""
        return self.schema_dir / getattr(self.schemas, kind)

    def get_master_password(self) -> Optional[str]:
        if self.master_password is None:
            return None
        return self.master_password.get_secret_value() or None
