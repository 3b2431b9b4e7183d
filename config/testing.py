import os

SECRET_KEY = "test-secret"

API_CONFIG = {
    "base_url": os.getenv("API_BASE_URL", "http://backend.test"),
    "timeout": 5,
}

ATTENDANCE_CONFIG = {
    "official_start": "09:00",
    "grace_minutes": 5,
    "off_statuses": ["absent", "leave", "official_off"],
}

LOG_LEVEL = "WARNING"

DEBUG = False
TESTING = True
