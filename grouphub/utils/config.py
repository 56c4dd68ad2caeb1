import os
from urllib.parse import quote_plus

from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "localhost:5432/grouphub")
DATABASE_USER = os.getenv("DATABASE_USER", "postgres")
DATABASE_PASSWORD = os.getenv("DATABASE_PASSWORD")

_password_encoded = quote_plus(DATABASE_PASSWORD) if DATABASE_PASSWORD else ""
db_connection_string = f'postgresql://{DATABASE_USER}:{_password_encoded}@{DATABASE_URL}'

DB_POOL_MIN_SIZE: int = int(os.getenv("DB_POOL_MIN_SIZE", "2"))
DB_POOL_MAX_SIZE: int = int(os.getenv("DB_POOL_MAX_SIZE", "10"))
RUN_MIGRATIONS: bool = bool(int(os.getenv("RUN_MIGRATIONS", "1")))

# "trusted": identity is asserted by the caller (header, body or query).
# "jwt": identity is the `sub` claim of a verified bearer token.
IDENTITY_MODE: str = os.getenv("IDENTITY_MODE", "trusted").lower()
IDENTITY_HEADER: str = os.getenv("IDENTITY_HEADER", "x-user-id").lower()
JWT_SECRET: str = os.getenv("JWT_SECRET", "")

MESSAGE_LIMIT_DEFAULT: int = int(os.getenv("MESSAGE_LIMIT_DEFAULT", "50"))
MESSAGE_LIMIT_MAX: int = int(os.getenv("MESSAGE_LIMIT_MAX", "100"))
MESSAGE_MAX_LENGTH: int = int(os.getenv("MESSAGE_MAX_LENGTH", "10000"))
REQUIRE_MEMBERSHIP_TO_POST: bool = bool(int(os.getenv("REQUIRE_MEMBERSHIP_TO_POST", "1")))

EXPOSE_ERROR_DETAILS: bool = bool(int(os.getenv("EXPOSE_ERROR_DETAILS", "0")))
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS: list[str] = [
    origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
]

APP_HOST: str = os.getenv("APP_HOST", "0.0.0.0")
APP_PORT: int = int(os.getenv("APP_PORT", "8500"))
