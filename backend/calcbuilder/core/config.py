"""
Application configuration settings
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # Application Settings
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    ALLOWED_HOSTS: List[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]

    # Database Configuration
    DATABASE_URL: str = "sqlite:///./calcbuilder.db"

    # Monitoring and Logging
    LOG_LEVEL: str = "INFO"

    # Admin scripts
    DEFAULT_SUPER_ADMIN_EMAIL: str = "admin@swedprime.com"
    DEFAULT_SUPER_ADMIN_NAME: str = "Super Administrator"

# Create settings instance
settings = Settings()

# Validate required settings in production
if settings.ENVIRONMENT == "production":
    required_settings = [
        "DATABASE_URL",
        "DEFAULT_SUPER_ADMIN_EMAIL",
    ]

    missing_settings = []
    for setting in required_settings:
        if not getattr(settings, setting):
            missing_settings.append(setting)

    if settings.DATABASE_URL.startswith("sqlite"):
        raise ValueError("SQLite is not supported in production, set DATABASE_URL")

    if missing_settings:
        raise ValueError(f"Missing required production settings: {', '.join(missing_settings)}")

# Database URL for SQLAlchemy
DATABASE_URL = settings.DATABASE_URL
if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)
