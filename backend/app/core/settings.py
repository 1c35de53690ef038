import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173,http://127.0.0.1:5173"


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    def __init__(self):
        self.app_name = os.getenv("EDUEGY_APP_NAME", "EduEgy backend")
        self.environment = os.getenv("EDUEGY_ENV", "development")
        self.database_url = os.getenv("EDUEGY_DATABASE_URL", "sqlite:///./eduegy.db")
        self.api_host = os.getenv("EDUEGY_API_HOST", "0.0.0.0")
        self.api_port = int(os.getenv("EDUEGY_API_PORT", "3000"))
        self.log_level = os.getenv("EDUEGY_LOG_LEVEL", "INFO").upper()
        self.cors_origins = [
            origin.strip()
            for origin in os.getenv("EDUEGY_CORS_ORIGINS", DEFAULT_CORS_ORIGINS).split(",")
            if origin.strip()
        ]

        # Parent-student linking
        self.linking_code_ttl_hours = int(os.getenv("EDUEGY_LINKING_CODE_TTL_HOURS", "24"))
        self.linking_code_prefix = os.getenv("EDUEGY_LINKING_CODE_PREFIX", "STU-")
        self.linking_code_length = int(os.getenv("EDUEGY_LINKING_CODE_LENGTH", "6"))
        self.code_generation_attempts = int(os.getenv("EDUEGY_CODE_GENERATION_ATTEMPTS", "3"))

        self.seed_default_admin = _env_bool("EDUEGY_SEED_ADMIN", True)
        self.default_admin_email = os.getenv("EDUEGY_ADMIN_EMAIL", "admin@eduegy.com")


_settings_instance = None


def get_settings():
    """Return a singleton Settings instance."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
