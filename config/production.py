import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "sunday_attendance"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

IMPORT_CHUNK_SIZE = int(os.getenv("IMPORT_CHUNK_SIZE", "50"))
IMPORT_THROTTLE_SECONDS = float(os.getenv("IMPORT_THROTTLE_SECONDS", "0.15"))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
