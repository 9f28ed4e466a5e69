import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "geo_attendance"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

TIMEZONE = os.getenv("TIMEZONE", "Asia/Tokyo")
STANDARD_WORK_HOURS = os.getenv("STANDARD_WORK_HOURS", "8")
DUPLICATE_PUNCH_WINDOW_MINUTES = int(os.getenv("DUPLICATE_PUNCH_WINDOW_MINUTES", "5"))
LATE_NIGHT_START = os.getenv("LATE_NIGHT_START", "22:00")
LATE_NIGHT_END = os.getenv("LATE_NIGHT_END", "05:00")
