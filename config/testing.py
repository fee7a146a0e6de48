import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_attendance_test"),
}

DEBUG = False
TESTING = True

STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "memory")

AUTO_INIT_DB = False
AUTO_SEED_DB = False

WORK_START_TIME = "09:00"
WORK_END_TIME = "17:00"
LATE_THRESHOLD_MINUTES = 15
APPLY_LATE_RULE = False
HALF_DAY_HOURS = 4.0
APPLY_HALF_DAY_RULE = False

REMOTE_API_URL = "http://testserver/api"
REMOTE_TIMEOUT_SECONDS = 1.0
PENDING_SPOOL_PATH = os.getenv("PENDING_SPOOL_PATH", ".attendance_pending.test.json")
