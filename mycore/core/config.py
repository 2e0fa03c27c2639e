"""
Application configuration and environment variables
"""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _get_flag(name: str, default: str = "") -> str:
    return os.getenv(name, default).strip().lower()


class Settings:
    """Application settings loaded from environment variables"""

    # Storage
    STORAGE_BACKEND: str = os.getenv("STORAGE_BACKEND", "memory").strip().lower()
    JSON_STORAGE_PATH: str = os.getenv("JSON_STORAGE_PATH", "mycore-data.json")

    # Supabase (storage + auth)
    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
    SUPABASE_KEY: str = os.getenv("SUPABASE_KEY", "")

    # Calendar
    APP_TIMEZONE: str = os.getenv("APP_TIMEZONE", "UTC")

    # Seeding
    SEED_COMPLETION_RATE: float = float(os.getenv("SEED_COMPLETION_RATE", "0.0"))
    SEED_RANDOM_SEED: int = int(os.getenv("SEED_RANDOM_SEED", "0"))

    # Reset policy: "true" / "false" overrides the backend default
    RESET_PURGES_DATA: str = _get_flag("RESET_PURGES_DATA")

    # Reminders
    ENABLE_SCHEDULER: bool = _get_flag("ENABLE_SCHEDULER", "true") in ("1", "true", "yes")
    REMINDER_HOUR: int = int(os.getenv("REMINDER_HOUR", "9"))

    # WhatsApp / Twilio
    TWILIO_ACCOUNT_SID: str = os.getenv("TWILIO_ACCOUNT_SID", "")
    TWILIO_AUTH_TOKEN: str = os.getenv("TWILIO_AUTH_TOKEN", "")
    TWILIO_WHATSAPP_NUMBER: str = os.getenv("TWILIO_WHATSAPP_NUMBER", "")
    NOTIFICATION_RECIPIENT: str = os.getenv("NOTIFICATION_RECIPIENT", "")


# Create a global settings instance
settings = Settings()
