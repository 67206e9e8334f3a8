"""
Gateway settings for card payments, read from application configuration.
"""

from app.core.config import Settings, settings as default_settings

SANDBOX_API_URL = "https://test-api.acquired.com/v1"
PRODUCTION_API_URL = "https://api.acquired.com/v1"


class CardConfig:
    def __init__(self, settings: Settings | None = None):
        self._settings = settings or default_settings

    def _get(self, key: str) -> str:
        return (getattr(self._settings, key, "") or "").strip()

    def get_api_url(self) -> str:
        return (
            self._get("ACQUIRED_API_URL")
            or (SANDBOX_API_URL if self._settings.is_sandbox else PRODUCTION_API_URL)
        ).rstrip("/")

    def get_app_id(self) -> str:
        return self._get("ACQUIRED_APP_ID")

    def get_app_key(self) -> str:
        return self._get("ACQUIRED_APP_KEY")

    def get_company_id(self) -> str:
        return self._get("ACQUIRED_COMPANY_ID")

    def get_token_cache_ttl(self) -> int:
        return self._settings.ACQUIRED_TOKEN_CACHE_TTL

    def get_capture_action(self) -> bool:
        return bool(self._settings.ACQUIRED_CAPTURE_ACTION)

    def is_tds_active(self) -> bool:
        return bool(self._settings.ACQUIRED_TDS_ACTIVE)

    def get_tds_challenge_preference(self) -> str:
        return self._settings.ACQUIRED_TDS_CHALLENGE_PREFERENCE

    def get_tds_contact_url(self) -> str:
        return self._get("ACQUIRED_TDS_CONTACT_URL")

    def is_create_card_enabled(self) -> bool:
        return bool(self._settings.ACQUIRED_CREATE_CARD_ENABLED)
