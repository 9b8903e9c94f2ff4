from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Required for account provisioning and table writes

    # Phone identity
    phone_default_country_code: str = "62"  # substituted for a leading national "0"
    phone_email_prefix: str = "p"
    phone_email_domain: str = "oceanfolx.org"
    phone_min_digits: int = 8
    phone_max_digits: int = 15
    password_min_length: int = 6

    # Lessons
    max_recurring_sessions: int = 366

    # App
    app_name: str = "swim-console-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
