"""
Configuration and constants for the AI Trainer service.
"""
import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # AI Gateway Configuration
    AI_GATEWAY_API_KEY: str = os.getenv("AI_GATEWAY_API_KEY", "")
    AI_GATEWAY_URL: str = os.getenv("AI_GATEWAY_URL", "https://ai.gateway.lovable.dev/v1")
    AI_MODEL: str = os.getenv("AI_MODEL", "google/gemini-3-flash-preview")

    # Request Configuration
    AI_REQUEST_TIMEOUT: float = float(os.getenv("AI_REQUEST_TIMEOUT", 90))
    AI_CONNECT_TIMEOUT: float = float(os.getenv("AI_CONNECT_TIMEOUT", 10))

    # Chat
    CHAT_HISTORY_LIMIT: int = int(os.getenv("CHAT_HISTORY_LIMIT", 10))

    # Server Configuration
    PORT: int = int(os.getenv("PORT", 10000))
    HOST: str = "0.0.0.0"
    RATE_LIMIT: str = os.getenv("RATE_LIMIT", "10/minute")
    CORS_ORIGINS: list[str] = [
        origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
    ]

    @classmethod
    def missing(cls) -> list[str]:
        """Names of required settings that are not set."""
        missing = []

        if not cls.AI_GATEWAY_API_KEY:
            missing.append("AI_GATEWAY_API_KEY")

        return missing

    @classmethod
    def validate(cls) -> None:
        """Validate required configuration on startup."""
        missing = cls.missing()

        if missing:
            raise ValueError(
                f"Missing required environment variables: {', '.join(missing)}. "
                "Requests must supply customApiKey until the .env file is fixed."
            )


settings = Settings()
