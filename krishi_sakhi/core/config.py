from pydantic_settings import BaseSettings, SettingsConfigDict

GEMINI_API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Gemini completion service
    gemini_api_key: str = ""
    gemini_api_url: str = GEMINI_API_URL
    # Ordered fallback list, cheapest/fastest first (comma-separated)
    gemini_models: str = "gemini-1.5-flash-8b,gemini-2.0-flash-lite,gemini-2.0-flash,gemini-2.5-flash"
    request_timeout_seconds: float = 60.0

    # Minimum spacing between accepted advice requests
    min_interval_ms: int = 3000

    @property
    def model_candidates(self) -> list[str]:
        return [m.strip() for m in self.gemini_models.split(",") if m.strip()]

    # App
    app_env: str = "development"
    app_debug: bool = True
    app_host: str = "0.0.0.0"
    app_port: int = 8000

    # CORS
    allowed_origins: str = "*"  # comma-separated, e.g. "https://sakhi.example.com"

    # Logging
    log_level: str = "INFO"
    log_json: bool = False  # set True in production for structured JSON logs

    # Sentry
    sentry_dsn: str = ""  # leave empty to disable


settings = Settings()


def validate_settings_for_production() -> None:
    """Validate critical settings. Called on startup in non-test environments."""
    errors: list[str] = []

    if settings.min_interval_ms < 0:
        errors.append("MIN_INTERVAL_MS must not be negative")

    if not settings.model_candidates:
        errors.append("GEMINI_MODELS must list at least one model identifier")

    if settings.app_env == "production":
        if settings.allowed_origins == "*":
            errors.append("ALLOWED_ORIGINS must not be '*' in production")
        if settings.app_debug:
            errors.append("APP_DEBUG must be false in production")

    if errors:
        raise SystemExit("Configuration errors:\n  - " + "\n  - ".join(errors))
