"""Configuration management for safariwatch.

Loads settings from a YAML configuration file. Environment variables
(prefixed SAFARIWATCH_ values and a few well-known unprefixed keys) and
.env files override anything the YAML sets.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, SecretStr
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/safariwatch.yaml")

TIGER_PREVIEW_URL = "https://zssd-tiger.preview.api.camzonecdn.com/previewimage"
GIRAFFE_PREVIEW_URL = "https://zssd-kijami.preview.api.camzonecdn.com/previewimage"


class AnchorConfig(BaseModel):
    base_url: str = Field(default="https://api.anchorbrowser.io/v1")
    timeout: float = Field(default=120.0, gt=0, description="HTTP timeout in seconds")
    proxy_type: str = Field(default="anchor_residential")
    proxy_country: str = Field(default="us")
    max_duration_minutes: int = Field(default=15, gt=0)
    idle_timeout_minutes: int = Field(default=1, gt=0)
    viewport_width: int = Field(default=1440, gt=0)
    viewport_height: int = Field(default=900, gt=0)


class FeedConfig(BaseModel):
    species: str = Field(description="Plural species noun used in prompts")
    noun: str = Field(description="Singular noun used in log and error text")
    image_url: str


class FeedsConfig(BaseModel):
    tiger: FeedConfig = Field(
        default_factory=lambda: FeedConfig(
            species="tigers", noun="tiger", image_url=TIGER_PREVIEW_URL
        )
    )
    giraffe: FeedConfig = Field(
        default_factory=lambda: FeedConfig(
            species="giraffes", noun="giraffe", image_url=GIRAFFE_PREVIEW_URL
        )
    )


class AgentConfig(BaseModel):
    model: str = Field(default="meta-llama/llama-4-scout-17b-16e-instruct")
    base_url: str = Field(default="https://api.groq.com/openai/v1")
    max_tokens: int = Field(default=1024, gt=0)
    temperature: float = Field(default=0.2, ge=0.0, le=2.0)
    max_tool_rounds: int = Field(default=5, gt=0)


class WorkflowConfig(BaseModel):
    interval_seconds: float = Field(default=3600.0, gt=0)


class ServerConfig(BaseModel):
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=4111, ge=1, le=65535)


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    file: str | None = Field(default=None)


class Settings(BaseSettings):
    """Root configuration for safariwatch.

    Loads from YAML file and supports environment variable overrides.
    Reads .env files automatically.
    """

    model_config = {
        "env_prefix": "SAFARIWATCH_",
        "env_nested_delimiter": "__",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    # API Keys
    anchor_api_key: SecretStr = Field(default=SecretStr(""))
    groq_api_key: SecretStr = Field(default=SecretStr(""))

    # Configuration sections
    anchor: AnchorConfig = Field(default_factory=AnchorConfig)
    feeds: FeedsConfig = Field(default_factory=FeedsConfig)
    agent: AgentConfig = Field(default_factory=AgentConfig)
    workflow: WorkflowConfig = Field(default_factory=WorkflowConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Init kwargs carry the YAML file, so they rank below the environment.
        return env_settings, dotenv_settings, init_settings, file_secret_settings


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from YAML + .env + environment variables.

    Priority: env vars > .env file > YAML file > defaults
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    # Load .env file manually for non-prefixed vars
    _load_dotenv()

    yaml_data = {}
    if path.exists():
        with open(path) as f:
            yaml_data = yaml.safe_load(f) or {}
        logger.info("Loaded configuration from %s", path)
    else:
        logger.warning("Config file %s not found, using defaults + env vars", path)

    _apply_env_overrides(yaml_data)

    return Settings(**yaml_data)


def _load_dotenv() -> None:
    """Load .env file into os.environ if it exists."""
    env_path = Path(".env")
    if not env_path.exists():
        return
    with open(env_path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip()
                if not os.environ.get(key):
                    os.environ[key] = value


def _apply_env_overrides(yaml_data: dict) -> None:
    """Apply environment variable overrides for non-prefixed vars."""
    anchor_key = os.environ.get("ANCHOR_API_KEY", "")
    groq_key = os.environ.get("GROQ_API_KEY", "")
    groq_base_url = os.environ.get("GROQ_BASE_URL", "")
    agent_model = os.environ.get("ZOOKEEPER_MODEL", "")

    if anchor_key:
        yaml_data["anchor_api_key"] = anchor_key
    if groq_key:
        yaml_data["groq_api_key"] = groq_key

    if "agent" not in yaml_data or yaml_data["agent"] is None:
        yaml_data["agent"] = {}

    if groq_base_url:
        yaml_data["agent"]["base_url"] = groq_base_url

    if agent_model:
        yaml_data["agent"]["model"] = agent_model
