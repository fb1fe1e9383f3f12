from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Only needed where RLS must be bypassed

    # Tables
    groups_table: str = "Lista_de_Grupos"
    messages_table: str = "Lista_de_Mensagens"
    profiles_table: str = "profiles"
    gestores_table: str = "Gestores"

    # Groups
    messages_page_size: int = 1000  # Supabase caps a single select at 1000 rows by default
    no_messages_summary: str = "Sem mensagens no grupo"
    default_page_size: int = 10
    max_page_size: int = 100

    # Auth session loading
    auth_max_attempts: int = 3
    auth_timeout_seconds: float = 10.0
    auth_cache_ttl_seconds: int = 60

    # App
    app_name: str = "groups-monitor"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173,http://localhost:8080"
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
