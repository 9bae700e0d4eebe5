"""Application configuration for the listing site."""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    app_env: str = Field(default="development")
    log_level: str = Field(default="INFO")
    cors_allow_origins: list[str] = Field(default_factory=lambda: ["*"])

    # Empty base URL means the catalog is read from the package directory.
    listings_base_url: str = Field(default="")
    listings_path: str = Field(default="data/immobili.json")
    listings_timeout_seconds: float = Field(default=10.0, gt=0)

    home_card_limit: int = Field(default=6, ge=0)
    placeholder_image: str = Field(default="assets/img/placeholders/placeholder.jpg")
    placeholder_alt: str = Field(default="Immobile")
    description_max_length: int = Field(default=160, ge=1)

    site_base_url: str = Field(default="")
    fallback_base_url: str = Field(default="https://example.com/")

    agency_name: str = Field(default="Agenzia Immobiliare")
    agency_description: str = Field(
        default="Vendita e affitto di immobili. Consulenza professionale e trasparente."
    )
    agency_telephone: str = Field(default="+39-02-1234567")
    agency_street_address: str = Field(default="Via Example 1")
    agency_locality: str = Field(default="Milano")
    agency_postal_code: str = Field(default="20100")
    agency_country: str = Field(default="IT")
    agency_area_served: str = Field(default="Italia")
    price_currency: str = Field(default="EUR")

    @field_validator("cors_allow_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: object) -> object:
        """Allow comma-separated env values for CORS origins."""

        if isinstance(value, str):
            parts = [item.strip() for item in value.split(",") if item.strip()]
            return parts
        return value


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()


settings = get_settings()
