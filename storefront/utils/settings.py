# storefront/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./storefront.db")
CATALOG_SERVICE_URL = os.getenv("CATALOG_SERVICE_URL", "")
CATALOG_TIMEOUT_SECONDS = int(os.getenv("CATALOG_TIMEOUT_SECONDS", 2))
IDENTITY_USER_HEADER = os.getenv("IDENTITY_USER_HEADER", "X-User-Id")
IDENTITY_ROLE_HEADER = os.getenv("IDENTITY_ROLE_HEADER", "X-User-Role")
DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", 10))
MAX_PAGE_SIZE = int(os.getenv("MAX_PAGE_SIZE", 100))
ORDER_STATS_DEFAULT_DAYS = int(os.getenv("ORDER_STATS_DEFAULT_DAYS", 30))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
