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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./auth.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))

    # Credential lifecycle
    ACCESS_TOKEN_TTL_HOURS = int(data.get("ACCESS_TOKEN_TTL_HOURS", 24))
    PASSWORD_RESET_TTL_MINUTES = int(data.get("PASSWORD_RESET_TTL_MINUTES", 60))
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))
    # Revoke every previous token on login (one active session per user)
    SINGLE_SESSION_LOGIN = bool(data.get("SINGLE_SESSION_LOGIN", False))

    RATE_LIMIT_ENABLED = bool(data.get("RATE_LIMIT_ENABLED", True))

    # Password reset delivery
    PASSWORD_RESET_URL = data.get(
        "PASSWORD_RESET_URL", "http://localhost:3000/reset-password?token={token}&email={email}"
    )
    SMTP_HOST = data.get("SMTP_HOST", "")
    SMTP_PORT = int(data.get("SMTP_PORT", 587))
    SMTP_USER = data.get("SMTP_USER", "")
    SMTP_PASSWORD = data.get("SMTP_PASSWORD", "")
    SMTP_USE_TLS = bool(data.get("SMTP_USE_TLS", True))
    MAIL_FROM_ADDRESS = data.get("MAIL_FROM_ADDRESS", "no-reply@example.com")
    MAIL_FROM_NAME = data.get("MAIL_FROM_NAME", "Auth Service")
