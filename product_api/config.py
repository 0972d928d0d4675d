"""
Configuration for the product API.

Values come from the environment (or a ``.env`` file in the working
directory).  ``API_KEY`` is the shared secret every ``/api/products``
request must present in the ``x-api-key`` header.
"""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=3000, description="Server port")
    api_key: str = Field(default="", description="Shared secret for x-api-key")
    log_level: str = Field(default="INFO", description="Log level")
    cors_origins: List[str] = Field(default=["*"], description="Allowed CORS origins")
    seed_products: bool = Field(default=True, description="Load the demo products on boot")


settings = Settings()
