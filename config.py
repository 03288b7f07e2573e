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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./test.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    ENVIRONMENT = data.get("ENVIRONMENT", "dev")
    APP_URL = data.get("APP_URL", "http://localhost:3000")

    # Session
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    SESSION_COOKIE_NAME = data.get("SESSION_COOKIE_NAME", "session")
    SESSION_TTL_HOURS = int(data.get("SESSION_TTL_HOURS", 24 * 7))

    # OAuth providers
    GOOGLE_CLIENT_ID = data.get("GOOGLE_CLIENT_ID", "")
    GOOGLE_CLIENT_SECRET = data.get("GOOGLE_CLIENT_SECRET", "")
    GITHUB_CLIENT_ID = data.get("GITHUB_CLIENT_ID", "")
    GITHUB_CLIENT_SECRET = data.get("GITHUB_CLIENT_SECRET", "")
    ATLASSIAN_CLIENT_ID = data.get("ATLASSIAN_CLIENT_ID", "")
    ATLASSIAN_CLIENT_SECRET = data.get("ATLASSIAN_CLIENT_SECRET", "")
    NOTION_CLIENT_ID = data.get("NOTION_CLIENT_ID", "")
    NOTION_CLIENT_SECRET = data.get("NOTION_CLIENT_SECRET", "")
    INTEGRATION_COOKIE_KEY = data.get("INTEGRATION_COOKIE_KEY", "")
    OAUTH_TIMEOUT_SECONDS = float(data.get("OAUTH_TIMEOUT_SECONDS", 15))

    # Email
    SMTP_HOST = data.get("SMTP_HOST", "")
    SMTP_PORT = int(data.get("SMTP_PORT", 587))
    SMTP_USER = data.get("SMTP_USER", "")
    SMTP_PASSWORD = data.get("SMTP_PASSWORD", "")
    FROM_EMAIL = data.get("FROM_EMAIL", "noreply@localhost")
    EMAIL_STRATEGY = data.get("EMAIL_STRATEGY", "gmail")

    # Onboarding workflow
    COMPLETION_POLICY = data.get("COMPLETION_POLICY", "single_approved_document")
    INVITATION_TTL_DAYS = int(data.get("INVITATION_TTL_DAYS", 7))
    MAX_UPLOAD_BYTES = int(data.get("MAX_UPLOAD_BYTES", 10 * 1024 * 1024))

    @classmethod
    def is_production(cls) -> bool:
        return str(cls.ENVIRONMENT).lower() == "production"
