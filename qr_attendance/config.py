import os

from dotenv import load_dotenv

if os.getenv("ENVIRONMENT") == "development":
    load_dotenv()


DB_URL_STRING = os.getenv("DB_URL_STRING", "sqlite:///./attendance.db")

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key-change-me")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "10080"))

QR_EXPIRY_HOURS = int(os.getenv("QR_EXPIRY_HOURS", "3"))
LATE_THRESHOLD_MINUTES = int(os.getenv("LATE_THRESHOLD_MINUTES", "15"))

# Zone in which session dates/times are written and "today" is computed
TIMEZONE = os.getenv("TIMEZONE", "UTC")

FRONTEND_URL = os.getenv("FRONTEND_URL")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
