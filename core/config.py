"""
Recipes API Configuration Settings
Manages all application configuration with environment-based overrides
"""

from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from pydantic import Field, field_validator
from typing import Annotated, List


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # Application
    APP_NAME: str = "Recipes App API"
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)
    VERSION: str = "1.0.0"

    # Server
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=5000)

    # CORS
    CORS_ORIGINS: Annotated[List[str], NoDecode] = Field(default=["*"])

    # Document store
    MONGODB_URI: str = Field(default="mongodb://localhost:27017/recipes_db")
    MONGODB_DATABASE: str = Field(default="recipes_db")
    MONGODB_COLLECTION: str = Field(default="recipes")
    MONGODB_TIMEOUT_MS: int = Field(default=5000)

    # Logging
    LOG_LEVEL: str = Field(default="INFO")

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


# Create global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings instance"""
    return settings
