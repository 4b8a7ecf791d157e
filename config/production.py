import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "mysql")
DATA_FILE = os.getenv("DATA_FILE", "data/qr_attendance.json")
STORAGE_KEY = os.getenv("STORAGE_KEY", "qr_attendance_data")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "qr_attendance"),
}

MIRROR_URL = os.getenv("MIRROR_URL", "")
MIRROR_TIMEOUT = float(os.getenv("MIRROR_TIMEOUT", "5"))

SESSION_TTL_SECONDS = int(os.getenv("SESSION_TTL_SECONDS", "300"))
EXPIRY_POLL_SECONDS = float(os.getenv("EXPIRY_POLL_SECONDS", "3"))
TRUST_UNKNOWN_TOKENS = bool(int(os.getenv("TRUST_UNKNOWN_TOKENS", "0")))
LATE_AFTER_MINUTES = int(os.getenv("LATE_AFTER_MINUTES", "0")) or None

AUTO_SEED = bool(int(os.getenv("AUTO_SEED", "0")))
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
