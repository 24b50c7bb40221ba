# server/config.py

import os
import logging
from dotenv import load_dotenv


load_dotenv()


# -------------------------------
# Settings
# -------------------------------

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./data/aqualims.db")

JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "aqualims-dev-secret")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "720"))

# Credential given to seeded and newly created accounts
DEFAULT_PASSWORD = os.getenv("DEFAULT_PASSWORD", "password123")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",")]


def configure_logging():
    logging.basicConfig(
        level=LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    if "JWT_SECRET_KEY" not in os.environ:
        logging.getLogger(__name__).warning(
            "JWT_SECRET_KEY is not set, using the development secret"
        )
