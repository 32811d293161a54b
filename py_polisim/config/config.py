from pathlib import Path
from typing import Optional

from dotenv import dotenv_values
from pydantic import Field
from pydantic_settings import BaseSettings

import os

# Explicitly load .env for local/dev environments only if values are missing from the environment
BASE_DIR = Path(__file__).resolve().parent.parent.parent
env_file = BASE_DIR / ".env"

if env_file.exists():
    file_env = dotenv_values(env_file)
    for k, v in file_env.items():
        if k not in os.environ and v is not None:
            os.environ[k] = v


class Settings(BaseSettings):
    """Application settings pulled from environment variables."""

    # Database Configuration
    db_url: Optional[str] = Field(default=None, description="Full SQLAlchemy URL; overrides the sqlite path")
    db_path: str = Field(default="./polisim.db", description="Sqlite database file")

    @property
    def database_url(self) -> str:
        """Construct full database URL."""
        return self.db_url or f"sqlite:///{self.db_path}"

    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")
    debug: bool = Field(default=False, description="Enable debug mode")
    allowed_origins: str = Field(default="http://localhost:3000", description="CORS allowed origins")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Logging format (e.g., plain, json)")

    # Simulation Configuration
    default_seed: str = Field(default="polisim", description="Seed used when a request gives none")
    default_country_id: str = Field(default="USA", description="Country for new campaigns")
    default_city_population: int = Field(default=120000, description="Population of a new campaign city")
    default_start_year: int = Field(default=2025, description="Calendar year a new campaign starts in")
    ai_bill_probability: float = Field(default=0.15, ge=0, le=1, description="Monthly chance a council member proposes a bill")
    incumbent_running_chance_single: float = Field(default=0.8, ge=0, le=1, description="Re-run chance for single-seat incumbents")
    incumbent_running_chance_multi: float = Field(default=0.7, ge=0, le=1, description="Re-run chance for council incumbents")
    default_min_party_popularity: float = Field(default=1.0, ge=0, description="Floor used when normalising party popularity")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Instantiate singleton settings object
settings = Settings()
