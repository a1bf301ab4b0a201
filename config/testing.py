import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "sunday_attendance_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

IMPORT_CHUNK_SIZE = 50
IMPORT_THROTTLE_SECONDS = 0.0

AUTO_INIT_DB = False
