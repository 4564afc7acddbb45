from dotenv import load_dotenv
from pathlib import Path
import os

ROOT_DIR = Path(__file__).parent
load_dotenv(ROOT_DIR / '.env')

# MongoDB
MONGO_URL = os.environ.get("MONGO_URL", "mongodb://localhost:27017")
DB_NAME = os.environ.get("DB_NAME", "personalizer")
MONGO_SERVER_SELECTION_TIMEOUT_MS = int(os.environ.get("MONGO_SERVER_SELECTION_TIMEOUT_MS", "5000"))

# Shopify webhook secret (empty disables signature verification)
SHOPIFY_WEBHOOK_SECRET = os.environ.get("SHOPIFY_WEBHOOK_SECRET", "")

# Server
ENVIRONMENT = os.environ.get("ENVIRONMENT") or os.environ.get("NODE_ENV") or "development"
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
PORT = int(os.environ.get("PORT", "3000"))
CORS_ORIGINS = [o.strip() for o in os.environ.get("CORS_ORIGINS", "*").split(",") if o.strip()]

ORDER_QUEUE_DEFAULT_LIMIT = int(os.environ.get("ORDER_QUEUE_DEFAULT_LIMIT", "50"))

# A record left in processing longer than this (e.g. the worker died between
# claim and the status write) may be claimed again
CLAIM_LEASE_SECONDS = int(os.environ.get("CLAIM_LEASE_SECONDS", "300"))
