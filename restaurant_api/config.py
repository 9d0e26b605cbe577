"""Configuration management for the Restaurant API using Pydantic."""

import logging
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_CONTRACT_PATH = Path(__file__).parent / "contract" / "restaurants.yaml"


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server Configuration
    server_host: str = Field(default="0.0.0.0", description="Server host")
    server_port: int = Field(default=3000, description="Server port")
    server_url: str = Field(
        default="http://localhost:3000",
        description="Server URL for CLI to connect to API",
    )

    # Contract Configuration
    contract_path: Path = Field(
        default=DEFAULT_CONTRACT_PATH,
        description="OpenAPI document declaring routes and operationIds",
    )

    # Store Configuration
    load_seed_data: bool = Field(
        default=True, description="Populate the store with the seed restaurants"
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")

    def model_post_init(self, __context) -> None:
        """Validate configuration after initialization."""
        if not self.contract_path.is_file():
            logger.warning(f"Contract file not found at {self.contract_path}")


# Global config instance
config: Config | None = None


def get_config() -> Config:
    """Get or create the global configuration instance."""
    global config
    if config is None:
        config = Config()
    return config


def setup_logging(cfg: Config | None = None) -> None:
    """Configure logging for the application."""
    if cfg is None:
        cfg = get_config()

    log_level = getattr(logging, cfg.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Reduce noise from external libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
