"""Application configuration loaded from environment variables."""

from pydantic_settings import BaseSettings
from pydantic import Field
from functools import lru_cache


class Settings(BaseSettings):
    """Centralised settings — no hardcoded values anywhere else."""

    # Database
    database_url: str = Field(...)

    # Auth
    jwt_secret: str = Field(...)
    jwt_algorithm: str = Field("HS256")
    jwt_expiry_seconds: int = Field(3600)
    auth_cookie_name: str = Field("authToken")
    cookie_secure: bool = Field(False)
    bcrypt_rounds: int = Field(12, ge=4, le=31)

    # Admin routes (seeding) are guarded by a shared token
    service_token: str = Field(...)

    # Google Places seeding — empty key disables the admin seeding route
    google_maps_api_key: str = Field("")
    places_radius_m: int = Field(5000)
    places_page_delay_s: float = Field(2.0)
    seed_default_limit: int = Field(50)

    # Rankings cache
    rankings_cache_ttl: int = Field(300)

    allowed_origins: str = Field("http://localhost:3000")

    # App
    app_env: str = Field("development")
    log_level: str = Field("INFO")

    # Derived
    @property
    def allowed_origins_list(self) -> list[str]:
        """Return ALLOWED_ORIGINS as a list."""
        return [o.strip() for o in self.allowed_origins.split(",")]

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached Settings instance."""
    return Settings()


settings = get_settings()
