# storefront/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./storefront.db")
SQL_ECHO = os.getenv("SQL_ECHO", "0") == "1"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# identity
JWT_SECRET = os.getenv("JWT_SECRET", "change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ADMIN_TOKEN_TTL_SECONDS = int(os.getenv("ADMIN_TOKEN_TTL_SECONDS", 60 * 60))
CUSTOMER_TOKEN_TTL_SECONDS = int(os.getenv("CUSTOMER_TOKEN_TTL_SECONDS", 24 * 60 * 60))
TOKEN_REFRESH_WINDOW_SECONDS = int(os.getenv("TOKEN_REFRESH_WINDOW_SECONDS", 10 * 60))

# object storage for product images
ASSET_BASE_URL = os.getenv("ASSET_BASE_URL", "http://storage:8000")
ASSET_SERVICE_KEY = os.getenv("ASSET_SERVICE_KEY", "")
ASSET_BUCKET = os.getenv("ASSET_BUCKET", "flourish")
ASSET_PREFIX = os.getenv("ASSET_PREFIX", "productImage")
ASSET_TIMEOUT_SECONDS = int(os.getenv("ASSET_TIMEOUT_SECONDS", 10))

# catalog
CATEGORY_DELETE_POLICY = os.getenv("CATEGORY_DELETE_POLICY", "nullify")  # nullify | restrict
PRODUCTS_DEFAULT_LIMIT = int(os.getenv("PRODUCTS_DEFAULT_LIMIT", 9))
PRODUCTS_MAX_LIMIT = int(os.getenv("PRODUCTS_MAX_LIMIT", 100))
