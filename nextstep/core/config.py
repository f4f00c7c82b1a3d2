"""Application configuration from environment."""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """App settings loaded from env / .env."""

    app_name: str = "Your Next Step"
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Entity store (volatile in-memory SQLite unless overridden)
    database_url: str = "sqlite+aiosqlite://"

    # Auth cookie carrying the opaque session token
    auth_cookie_name: str = "auth_token"
    session_ttl_days: int = 7
    bcrypt_rounds: int = 10

    # SPA origins allowed to call the API with credentials
    cors_origins: str = "http://localhost:5173,http://localhost:3000"

    # AI coach
    openai_api_key: str | None = None
    openai_model: str = "gpt-4o"
    chat_history_limit: int = 10
    personalized_recommendations: bool = False

    # Rewards
    referral_bonus_points: int = 500
    post_points: int = 10
    comment_points: int = 5
    min_completed_modules: int = 3

    host: str = "127.0.0.1"
    port: int = 8000

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def cookie_max_age(self) -> int:
        return self.session_ttl_days * 24 * 60 * 60

    @property
    def allowed_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


def get_settings() -> Settings:
    return Settings()
