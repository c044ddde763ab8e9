import os
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./imei_registry.db")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD")
APP_ENV = os.getenv("APP_ENV", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]

SESSION_COOKIE_NAME = "sid"
SESSION_TTL = timedelta(hours=8)
COOKIE_SECURE = APP_ENV == "production"

REPORT_LIST_LIMIT = 500
