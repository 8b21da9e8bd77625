# config.py
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Database configuration
DB_USER = os.getenv("DB_USER", "postgres")
DB_PASSWORD = os.getenv("DB_PASSWORD")
DB_HOST = os.getenv("DB_HOST")
DB_PORT = os.getenv("DB_PORT", "5432")
DB_NAME = os.getenv("DB_NAME", "postgres")

# Build the database URI
if DB_HOST and DB_PASSWORD:
    SQLALCHEMY_DATABASE_URI = f"postgresql+psycopg://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
else:
    # Fallback to DATABASE_URL if provided (for deployment platforms and tests)
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL")
    if not SQLALCHEMY_DATABASE_URI:
        raise ValueError("Database configuration missing! Please set DB_HOST, DB_PASSWORD, etc. in your .env file")

SQLALCHEMY_TRACK_MODIFICATIONS = False

# Application configuration
SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-change-in-production")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
    if origin.strip()
]

# Throttling for the employees route group (Flask-Limiter syntax)
EMPLOYEES_RATE_LIMIT = os.getenv("EMPLOYEES_RATE_LIMIT", "60 per minute")
RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")

# Listing defaults
DEFAULT_PER_PAGE = int(os.getenv("DEFAULT_PER_PAGE", "25"))
