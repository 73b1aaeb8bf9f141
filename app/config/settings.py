from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Required for auth.admin calls (list users, metadata, delete)

    # Role consistency
    designated_admin_email: str = "admin@example.com"
    admin_bootstrap_enabled: bool = True
    admin_bootstrap_delay_seconds: float = 5.0
    admin_bootstrap_url: str = "http://127.0.0.1:8000/api/v1/ensure-admin"
    admin_bootstrap_timeout_seconds: float = 10.0

    # App
    app_name: str = "subcontractor-portal-backend"
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
