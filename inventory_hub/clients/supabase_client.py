import logging

from supabase import create_client, Client

from inventory_hub.core.config import Settings
from inventory_hub.core.exceptions import ConfigurationError

logger = logging.getLogger("supabase_client")


class SupabaseClient:
    """Supabase client wrapper using the official supabase-py SDK."""

    def __init__(self, settings: Settings) -> None:
        self._url = settings.supabase_url
        self._key = settings.supabase_service_role_key
        self._client: Client | None = None

        if not self._url or not self._key:
            raise ConfigurationError(
                "SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set for Supabase access"
            )

    def get_client(self) -> Client:
        """Get or create the Supabase client for this wrapper."""
        if self._client is None:
            self._client = create_client(self._url, self._key)
            logger.info("supabase client initialized url=%s", self._url)
        return self._client

    @property
    def client(self) -> Client:
        """Property accessor for the Supabase client."""
        return self.get_client()
