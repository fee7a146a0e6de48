import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_attendance"),
}

DEBUG = False

STORAGE_BACKEND = "mysql"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

WORK_START_TIME = os.getenv("WORK_START_TIME", "09:00")
WORK_END_TIME = os.getenv("WORK_END_TIME", "17:00")
LATE_THRESHOLD_MINUTES = int(os.getenv("LATE_THRESHOLD_MINUTES", "15"))
APPLY_LATE_RULE = bool(int(os.getenv("APPLY_LATE_RULE", "0")))
HALF_DAY_HOURS = float(os.getenv("HALF_DAY_HOURS", "4"))
APPLY_HALF_DAY_RULE = bool(int(os.getenv("APPLY_HALF_DAY_RULE", "0")))

REMOTE_API_URL = os.getenv("REMOTE_API_URL", "http://localhost:5000/api")
REMOTE_TIMEOUT_SECONDS = float(os.getenv("REMOTE_TIMEOUT_SECONDS", "5"))

# Kiosk events not yet accepted by the API survive restarts here
PENDING_SPOOL_PATH = os.getenv("PENDING_SPOOL_PATH", ".attendance_pending.json")
