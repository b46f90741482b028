# storefront/core/config.py
import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    # --- API Info ---
    API_TITLE: str = "ABC Retail Storefront API"
    API_DESCRIPTION: str = "Retail storefront: accounts, catalog, cart, orders, proof-of-payment uploads and an admin back office."
    API_VERSION: str = "1.0.0"

    # --- Server Configuration ---
    PORT: int = int(os.getenv("PORT", "8000"))
    HOST: str = os.getenv("HOST", "0.0.0.0")
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    # --- Database ---
    # Empty path keeps the store in memory for the lifetime of the process
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite://")
    SEED_DATA: bool = _env_bool("SEED_DATA", "1")

    # --- Authentication credential (signed cookie / bearer token) ---
    SECRET_KEY: str = os.getenv("ENCODING_SECRET_KEY") or "dev-secret-change-me-0123456789abcdef"
    ALGORITHM: str = os.getenv("ENCODING_ALGORITHM", "HS256")
    AUTH_COOKIE_NAME: str = os.getenv("AUTH_COOKIE_NAME", "storefront_auth")
    AUTH_COOKIE_HOURS: int = int(os.getenv("AUTH_COOKIE_HOURS", "1"))
    REMEMBER_ME_DAYS: int = int(os.getenv("REMEMBER_ME_DAYS", "30"))

    # --- Server-side session (flash messages) ---
    SESSION_SECRET_KEY: str = os.getenv("SESSION_SECRET_KEY", "fallback-secret-key")
    SESSION_COOKIE_NAME: str = os.getenv("SESSION_COOKIE_NAME", "storefront_session")
    SESSION_IDLE_MINUTES: int = int(os.getenv("SESSION_IDLE_MINUTES", "30"))

    # --- Passwords ---
    BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "12"))
    PASSWORD_MIN_LENGTH: int = int(os.getenv("PASSWORD_MIN_LENGTH", "6"))

    # --- Uploads ---
    MAX_UPLOAD_BYTES: int = int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))
    ALLOWED_UPLOAD_EXTENSIONS: tuple = tuple(
        ext.strip().lower()
        for ext in os.getenv("ALLOWED_UPLOAD_EXTENSIONS", ".pdf,.jpg,.jpeg,.png,.doc,.docx").split(",")
        if ext.strip()
    )

    # --- Dashboards ---
    LOW_STOCK_THRESHOLD: int = int(os.getenv("LOW_STOCK_THRESHOLD", "10"))
    FEATURED_PRODUCT_COUNT: int = int(os.getenv("FEATURED_PRODUCT_COUNT", "6"))
    RECENT_ORDER_COUNT: int = int(os.getenv("RECENT_ORDER_COUNT", "10"))

    # --- Middleware ---
    RATE_LIMIT_ENABLED: bool = _env_bool("RATE_LIMIT_ENABLED", "1")
    CORS_ORIGINS: list = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
        if origin.strip()
    ]

    # --- Logging ---
    LOGGING_CONFIG: str = os.getenv(
        "LOGGING_CONFIG",
        os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))), "logging.conf"),
    )

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


settings = Settings()
