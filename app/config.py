"""Application settings loaded from environment variables."""
from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Trexo Engineering API"
    environment: str = Field(default="development", description="development | production")
    log_level: str = "INFO"
    cors_origins: str = Field(
        default="http://localhost:3000,http://127.0.0.1:3000",
        description="Comma-separated list of allowed CORS origins",
    )

    # Database (empty -> in-memory store)
    database_url: Optional[str] = Field(default=None, description="SQLAlchemy URL for the record store")

    # Company details used in emails and /api/company-info
    company_name: str = "Trexo Engineering & Construction"
    company_email: str = "info@trexo.com"
    company_phone: str = "(555) 123-4567"
    company_address: str = "123 Construction Ave, City, State 12345"

    # SMTP
    email_host: str = "smtp.gmail.com"
    email_port: int = 587
    email_user: str = ""
    email_password: str = ""
    email_use_tls: bool = True

    # Payments / listings
    simulate_payments: bool = True
    list_limit_max: int = 200

    @property
    def cors_origin_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    return Settings()
