# config/settings.py
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict, SettingsError
from typing import Annotated, Optional, List
import json
from enum import Enum
from dotenv import load_dotenv

from kubemeta.core.exceptions import ConfigurationException


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    JSON = "json"
    TEXT = "text"


class Environment(str, Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class MetadataSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="KUBEMETA_", extra="ignore")

    include_labels: Annotated[List[str], NoDecode] = Field(default_factory=list, description="Labels to keep; empty keeps all")
    exclude_labels: Annotated[List[str], NoDecode] = Field(default_factory=list, description="Labels to drop")
    include_annotations: Annotated[List[str], NoDecode] = Field(default_factory=list, description="Annotations to keep")
    labels_dedot: bool = Field(True, description="Replace dots in label keys")
    annotations_dedot: bool = Field(True, description="Replace dots in annotation keys")
    include_creator_metadata: bool = Field(True, description="Add controller owner names")
    cluster_name: Optional[str] = Field(None, description="Cluster name for orchestrator.cluster.name")
    cluster_url: Optional[str] = Field(None, description="Cluster URL for orchestrator.cluster.url")

    @field_validator('include_labels', 'exclude_labels', 'include_annotations', mode='before')
    @classmethod
    def split_comma_separated(cls, v):
        if isinstance(v, str) and v.strip().startswith("["):
            return json.loads(v)
        if isinstance(v, str):
            return [item.strip() for item in v.split(',') if item.strip()]
        return v


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    environment: Environment = Field(Environment.DEVELOPMENT, description="Environment")
    debug: bool = Field(False, description="Debug mode")
    log_level: LogLevel = Field(LogLevel.INFO, description="Log level")
    log_format: LogFormat = Field(LogFormat.TEXT, description="Log format (json or text)")

    metadata: MetadataSettings = Field(default_factory=lambda: MetadataSettings())

    @field_validator('environment', mode='before')
    @classmethod
    def validate_environment(cls, v):
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    @field_validator('log_level', mode='before')
    @classmethod
    def validate_log_level(cls, v):
        if isinstance(v, str):
            return LogLevel(v.upper())
        return v

    @field_validator('log_format', mode='before')
    @classmethod
    def validate_log_format(cls, v):
        if isinstance(v, str):
            return LogFormat(v.lower())
        return v

    @classmethod
    def create_from_env(cls) -> "Settings":
        """Create settings instance from environment variables and .env."""
        load_dotenv()
        try:
            return cls()
        except (ValidationError, SettingsError) as e:
            raise ConfigurationException(f"Invalid settings: {e}")
