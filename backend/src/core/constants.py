"""Application constants and configuration values."""

from core.config import FRONTEND_URL, SESSION_EXPIRE_DAYS

# Database field lengths
MAX_STRING_LENGTH = 255

# Database connection settings
DB_POOL_RECYCLE_SECONDS = 300  # 5 minutes

# CORS origins for development and production
_CORS_ORIGINS_RAW = [
    "http://localhost:3000",      # Next.js dev server
    "http://127.0.0.1:3000",
    FRONTEND_URL,
]

# Filter out None values and empty strings to avoid CORS errors
CORS_ORIGINS = list(dict.fromkeys(origin for origin in _CORS_ORIGINS_RAW if origin and origin.strip()))

# Session cookie
SESSION_COOKIE_NAME = "session-token"
SESSION_COOKIE_MAX_AGE_SECONDS = SESSION_EXPIRE_DAYS * 24 * 60 * 60  # 604800 for 7 days

# Passwords
MIN_PASSWORD_LENGTH = 6
BCRYPT_MAX_PASSWORD_BYTES = 72  # bcrypt ignores everything past this

# Roles
ROLE_DOCTOR = "doctor"
ROLE_ASSISTANT = "assistant"
VALID_ROLES = (ROLE_DOCTOR, ROLE_ASSISTANT)

# Appointments
DEFAULT_APPOINTMENT_TIME = "09:00"
APPOINTMENT_STATUS_SCHEDULED = "scheduled"
APPOINTMENT_STATUS_COMPLETED = "completed"
APPOINTMENT_STATUS_CANCELLED = "cancelled"
VALID_APPOINTMENT_STATUSES = (
    APPOINTMENT_STATUS_SCHEDULED,
    APPOINTMENT_STATUS_COMPLETED,
    APPOINTMENT_STATUS_CANCELLED,
)

# Session cleanup scheduler
SESSION_CLEANUP_MAX_INSTANCES = 1  # Prevent overlapping cleanup runs

# Clinic settings live in a single row with this key
SYSTEM_CONFIG_ID = "system"
