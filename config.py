import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    API_PREFIX = data.get("API_PREFIX", "")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    API_RELOAD = bool(data.get("API_RELOAD", False))
    API_WORKERS = data.get("API_WORKERS", 1)
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_SENTRY = data.get("ENABLE_SENTRY", 0)
    DSN_SENTRY = data.get("DSN_SENTRY", "")
    SENTRY_ENVIRONMENT = data.get("SENTRY_ENVIRONMENT", "dev")

    # Authentication is delegated; tokens are issued by the identity provider
    AUTH_DISABLED = bool(data.get("AUTH_DISABLED", False))
    AUTH_TOKENS = data.get("AUTH_TOKENS", [])

    # Invoice storage: "json" (file), "sqlite" (DB_URI) or "memory"
    STORAGE_BACKEND = data.get("STORAGE_BACKEND", "json")
    STORAGE_PATH = data.get("STORAGE_PATH", os.path.join(ROOT_PATH, "data", "storage.json"))
    DB_URI = data.get("DB_URI", "sqlite:///./fluxinvoice.db")

    # Invoice builder defaults
    DEFAULT_CURRENCY = data.get("DEFAULT_CURRENCY", "INR")
