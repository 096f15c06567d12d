"""
Configuration management for the content scoring engine.
"""
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

# Find the project root (where .env file lives)
_THIS_FILE = Path(__file__).resolve()
_PROJECT_ROOT = _THIS_FILE.parent.parent.parent  # src/utils -> src -> project root
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Content Database Configuration (PostgreSQL)
    database_url: Optional[str] = None
    enable_database: bool = True

    # Evidence Recommendation Configuration
    claim_limit: int = 5
    visual_limit: int = 5
    module_limit: int = 5
    include_non_mlr_approved: bool = True
    default_asset_type: str = "website-landing-page"

    # Fetch Configuration
    fetch_max_workers: int = 6
    campaign_fetch_limit: int = 50
    compliance_fetch_limit: int = 100
    performance_fetch_limit: int = 200
    intelligence_feedback_limit: int = 10

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @property
    def has_database(self) -> bool:
        """Check if the content database is configured"""
        return self.enable_database and bool(self.database_url)


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get or create the global settings instance.

    Returns:
        Settings instance loaded from environment
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """
    Force reload settings from environment.

    Returns:
        New Settings instance
    """
    global _settings
    _settings = Settings()
    return _settings
