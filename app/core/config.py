from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_NAME: str = "Acquired Checkout Bridge"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    SECRET_KEY: str = "change-this-in-production-use-secrets-generate-32"

    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_PASSWORD: str = ""

    # ── Acquired gateway settings ──
    # Environment: "sandbox" or "production"
    ACQUIRED_ENVIRONMENT: str = "sandbox"
    ACQUIRED_API_URL: str = ""
    ACQUIRED_APP_ID: str = ""
    ACQUIRED_APP_KEY: str = ""
    ACQUIRED_COMPANY_ID: str = ""
    ACQUIRED_TOKEN_CACHE_TTL: int = 3000
    # Card payment behaviour
    ACQUIRED_CAPTURE_ACTION: bool = True
    ACQUIRED_CREATE_CARD_ENABLED: bool = False
    # 3-D Secure
    ACQUIRED_TDS_ACTIVE: bool = True
    ACQUIRED_TDS_CHALLENGE_PREFERENCE: str = "no_preference"
    ACQUIRED_TDS_CONTACT_URL: str = ""
    # Order id sequence used for multishipping reservations
    ACQUIRED_ORDER_ID_PREFIX: str = ""
    ACQUIRED_ORDER_ID_PAD: int = 9

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def is_sandbox(self) -> bool:
        return self.ACQUIRED_ENVIRONMENT.lower() == "sandbox"

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        allowed = ["development", "staging", "production"]
        if v.lower() not in allowed:
            raise ValueError(f"ENVIRONMENT must be one of: {allowed}")
        return v.lower()

    @field_validator("ACQUIRED_ENVIRONMENT")
    @classmethod
    def validate_acquired_environment(cls, v: str) -> str:
        allowed = ["sandbox", "production"]
        if v.lower() not in allowed:
            raise ValueError(f"ACQUIRED_ENVIRONMENT must be one of: {allowed}")
        return v.lower()

    @field_validator("ACQUIRED_TDS_CHALLENGE_PREFERENCE")
    @classmethod
    def validate_challenge_preference(cls, v: str) -> str:
        allowed = [
            "challenge_mandated",
            "challenge_preferred",
            "no_challenge_requested",
            "no_preference",
        ]
        if v not in allowed:
            raise ValueError(f"ACQUIRED_TDS_CHALLENGE_PREFERENCE must be one of: {allowed}")
        return v


settings = Settings()
