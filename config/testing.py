SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

STORAGE_BACKEND = "memory"
STORAGE_KEY = "qr_attendance_test"

DB_CONFIG = {
    "host": "localhost",
    "port": 3306,
    "user": "root",
    "password": "",
    "database": "qr_attendance_test",
}

MIRROR_URL = ""

SESSION_TTL_SECONDS = 300
EXPIRY_POLL_SECONDS = 0
TRUST_UNKNOWN_TOKENS = False
LATE_AFTER_MINUTES = None

AUTO_SEED = True
AUTO_INIT_DB = False
