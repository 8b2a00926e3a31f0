import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel


load_dotenv()


def _env_bool(name: str, default: str = "true") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    # Supabase
    supabase_url: str | None = os.getenv("SUPABASE_URL")
    supabase_service_role_key: str | None = os.getenv("SUPABASE_SERVICE_ROLE_KEY")

    # Shopify (shared by partner and owner stores)
    shopify_api_version: str = os.getenv("SHOPIFY_API_VERSION", "2025-01")
    shopify_http_timeout: float = float(os.getenv("SHOPIFY_HTTP_TIMEOUT", "30"))

    # Owner store (destination of inventory writes)
    owner_store_domain: Optional[str] = os.getenv("OWNER_STORE_DOMAIN")
    owner_client_id: Optional[str] = os.getenv("OWNER_CLIENT_ID")
    owner_client_secret: Optional[str] = os.getenv("OWNER_CLIENT_SECRET")

    # Resend alert emails
    resend_api_key: str | None = os.getenv("RESEND_API_KEY")
    alert_email_to: str | None = os.getenv("ALERT_EMAIL_TO")
    alert_email_from: str = os.getenv("ALERT_EMAIL_FROM", "Inventory Hub <noreply@resend.dev>")
    app_url: str = os.getenv("APP_URL", "http://localhost:8000")

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")

    # Celery
    celery_broker_url: str = os.getenv("CELERY_BROKER_URL", os.getenv("REDIS_URL", "redis://localhost:6379/0"))
    celery_result_backend: str = os.getenv("CELERY_RESULT_BACKEND", os.getenv("REDIS_URL", "redis://localhost:6379/0"))

    # Cron trigger endpoint
    cron_secret: str | None = os.getenv("CRON_SECRET")

    # Inventory sync scheduling
    inventory_sync_enabled: bool = _env_bool("INVENTORY_SYNC_ENABLED")
    inventory_sync_interval_minutes: int = int(os.getenv("INVENTORY_SYNC_INTERVAL_MINUTES", "60"))
    inventory_sync_lock_ttl: int = int(os.getenv("INVENTORY_SYNC_LOCK_TTL", "1800"))

    @property
    def alert_recipients(self) -> list[str]:
        """Comma-separated ALERT_EMAIL_TO parsed into addresses."""
        if not self.alert_email_to:
            return []
        return [addr.strip() for addr in self.alert_email_to.split(",") if addr.strip()]


settings = Settings()
