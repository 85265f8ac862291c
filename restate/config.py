"""
Configuration management using Pydantic settings.
Handles the Appwrite endpoint, project, database and collection identifiers.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings
from typing import Optional, List
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from the environment or a .env file."""

    # Application configuration
    app_name: str = "ReState API"
    app_version: str = "1.0.0"
    environment: str = "development"
    debug: bool = False

    # Appwrite project
    appwrite_endpoint: str = "https://cloud.appwrite.io/v1"
    appwrite_project_id: str = ""
    appwrite_platform: str = "com.rahul.restate"
    appwrite_api_key: Optional[str] = None
    appwrite_timeout: float = 15.0

    # Database and collections
    appwrite_database_id: str = ""
    appwrite_galleries_collection_id: str = ""
    appwrite_reviews_collection_id: str = ""
    appwrite_agents_collection_id: str = ""
    appwrite_properties_collection_id: str = ""

    # OAuth redirect target; Appwrite appends ?secret=...&userId=...
    oauth_redirect_url: str = "http://localhost:8000/api/v1/auth/callback"

    # API configuration
    api_v1_prefix: str = "/api/v1"
    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:8081"]

    # Server configuration
    host: str = "0.0.0.0"
    port: int = 8000

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment setting."""
        allowed_envs = ["development", "testing", "staging", "production"]
        if v not in allowed_envs:
            raise ValueError(f"Environment must be one of: {allowed_envs}")
        return v

    @field_validator("appwrite_endpoint")
    @classmethod
    def validate_appwrite_endpoint(cls, v):
        """Require an absolute http(s) endpoint and drop the trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("APPWRITE_ENDPOINT must start with http:// or https://")
        return v.rstrip("/")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one instance of settings throughout the app lifecycle.
    """
    return Settings()


# Global settings instance
settings = get_settings()
