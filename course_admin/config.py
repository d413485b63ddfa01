import logging
import os

from dotenv import load_dotenv

# loads .env automatically
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_MONGO_URI = "mongodb://localhost:27017"


def safe_int_env(key, default):
    """Read an integer environment variable, falling back on bad input."""
    try:
        return int(os.getenv(key, default))
    except ValueError:
        return int(default)


class Config:
    """Application settings, read from the environment once per app."""

    def __init__(self, **overrides):
        mongo_uri = os.getenv("MONGO_URI")
        if not mongo_uri:
            logger.warning("⚠️ MONGO_URI not found. Using LOCAL MongoDB...")
            mongo_uri = DEFAULT_MONGO_URI

        self.MONGO_URI = mongo_uri
        self.DB_NAME = os.getenv("DB_NAME", "course_admin")
        self.PORT = safe_int_env("PORT", "5000")
        self.APP_ENV = os.getenv("APP_ENV", "development")
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
        self.CORS_ORIGINS = [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "*").split(",")
            if origin.strip()
        ]
        # None means the real pymongo client
        self.MONGO_CLIENT_CLASS = None

        for key, value in overrides.items():
            setattr(self, key, value)

    @property
    def is_production(self):
        return self.APP_ENV == "production"
