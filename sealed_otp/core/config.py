"""
Application Configuration
Environment variables and settings
"""

from typing import List, Optional

from pydantic import AliasChoices, Field, validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables"""

    # ==================== APP ====================
    APP_NAME: str = "Sealed Letter OTP"
    APP_VERSION: str = "1.0.0"
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    ALLOWED_ORIGINS: str = "*"
    STATIC_DIR: str = "static"

    # ==================== TELEGRAM ====================
    TELEGRAM_BOT_TOKEN: str = Field(
        default="",
        validation_alias=AliasChoices("TELEGRAM_BOT_TOKEN", "TG_BOT_TOKEN"),
    )
    # Fixed recipient; when empty the chat is looked up via getUpdates
    TELEGRAM_CHAT_ID: str = ""
    TELEGRAM_API_BASE_URL: str = "https://api.telegram.org"
    TELEGRAM_HTTP_TIMEOUT: Optional[float] = None

    # ==================== OTP ====================
    OTP_TTL_MS: int = 300000
    OTP_MAX_ATTEMPTS: int = 5
    OTP_SWEEP_INTERVAL_SECONDS: int = 60

    # ==================== MISC ====================
    TIMEZONE: str = "UTC"
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/sealed_otp.log"

    @validator("TELEGRAM_BOT_TOKEN", "TELEGRAM_CHAT_ID", pre=True)
    def strip_value(cls, v):
        if v is None:
            return ""
        return str(v).strip()

    # ==================== HELPER PROPERTIES ====================
    @property
    def cors_origins(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]

    @property
    def is_token_configured(self) -> bool:
        return len(self.TELEGRAM_BOT_TOKEN) > 0

    @property
    def is_fixed_chat_configured(self) -> bool:
        return bool(self.TELEGRAM_CHAT_ID)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


# Global settings instance
settings = Settings()
