import os

from config import split_statuses

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

API_CONFIG = {
    "base_url": os.getenv("API_BASE_URL", "http://localhost:5000"),
    "timeout": float(os.getenv("API_TIMEOUT", "15")),
}

ATTENDANCE_CONFIG = {
    "official_start": os.getenv("OFFICIAL_START", "09:00"),
    "grace_minutes": int(os.getenv("LATE_GRACE_MINUTES", "5")),
    "off_statuses": split_statuses(os.getenv("OFF_STATUSES", "absent,leave,official_off")),
}

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DEBUG = False
