import os
import logging
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load environment variables only for local development
if os.path.exists(".env"):
    load_dotenv()
    logger.info("Loading from .env file (local development)")

# In-memory SQLite unless told otherwise; the collection lives as long as the process
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite://")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

PORT = int(os.getenv("PORT", 8000))
