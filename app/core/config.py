import os
import logging
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

# Configuration
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
VERSION = "1.0.0"

SECRET_KEY = os.getenv("JWT_SECRET")
if not SECRET_KEY:
    logger.warning("Using default JWT_SECRET. Set JWT_SECRET in production!")
    SECRET_KEY = "supersecretkey"
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_HOURS = int(os.getenv("ACCESS_TOKEN_EXPIRE_HOURS", "24"))
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "10"))

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./agripredict.db")
SEED_DEFAULT_DATA = os.getenv("SEED_DEFAULT_DATA", "1") == "1"

FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")

# fixed 15 minute window; login gets the tighter budget
RATE_LIMIT_WINDOW_SECONDS = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "900"))
LOGIN_RATE_LIMIT = int(os.getenv("LOGIN_RATE_LIMIT", "5"))
GENERAL_RATE_LIMIT = int(os.getenv("GENERAL_RATE_LIMIT", "100"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def is_development() -> bool:
    return ENVIRONMENT == "development"
