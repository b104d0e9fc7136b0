from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Required for public inserts and webhook writes (bypasses RLS)

    # Stripe
    stripe_secret_key: Optional[str] = None
    stripe_webhook_secret: Optional[str] = None
    stripe_price_id_pro: Optional[str] = None
    stripe_price_id_premium: Optional[str] = None

    # Resend (transactional e-mail)
    resend_api_key: Optional[str] = None
    resend_api_url: str = "https://api.resend.com/emails"
    resend_from_email: str = "InnovaPort <noreply@innovaport.dev>"

    # Scheduled jobs (quote reminders)
    cron_secret: Optional[str] = None

    # App
    app_name: str = "innovaport-api"
    app_url: str = "http://localhost:3000"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"
    contact_rate_limit: str = "5/minute"
    newsletter_rate_limit: str = "3/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    def get_price_id(self, plan: str) -> Optional[str]:
        return {
            "pro": self.stripe_price_id_pro,
            "premium": self.stripe_price_id_premium,
        }.get(plan)

    def get_dashboard_url(self, path: str = "") -> str:
        clean_path = path if path.startswith("/") else f"/{path}"
        return f"{self.app_url.rstrip('/')}/dashboard{clean_path}"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
