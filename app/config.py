"""
Runtime configuration for the laundry order service
Values come from the environment (a local .env file is loaded in main.py)
"""

import os

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./laundry.db")

SECRET_KEY = os.getenv("SECRET_KEY", "your-secret-key-change-in-production")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))

RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "true").lower() in ("1", "true", "yes")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

ORDER_NUMBER_PREFIX = os.getenv("ORDER_NUMBER_PREFIX", "LDY")
