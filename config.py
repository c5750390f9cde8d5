import os
from uuid import UUID

import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./taskmanager.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    ACCESS_TOKEN_MINUTES = int(data.get("ACCESS_TOKEN_MINUTES", 15))
    REFRESH_TOKEN_DAYS = int(data.get("REFRESH_TOKEN_DAYS", 7))
    COOKIE_SECURE = bool(data.get("COOKIE_SECURE", 0))
    COOKIE_SAMESITE = data.get("COOKIE_SAMESITE", "lax")
    PLATFORM_ORGANIZATION_ID = UUID(str(data.get("PLATFORM_ORGANIZATION_ID", "00000000-0000-0000-0000-000000000000")))
    ENABLE_PURGE_SCHEDULER = bool(data.get("ENABLE_PURGE_SCHEDULER", 1))
    PURGE_INTERVAL_MINUTES = int(data.get("PURGE_INTERVAL_MINUTES", 60))
    AUTO_AWAY_MINUTES = int(data.get("AUTO_AWAY_MINUTES", 15))
    RETENTION_DAYS = data.get("RETENTION_DAYS", {})
