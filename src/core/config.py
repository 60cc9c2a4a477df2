import os
from dotenv import load_dotenv

load_dotenv(override=False)

ENVIRONMENT = os.environ.get("ENVIRONMENT", "development").lower()

UPLOAD_DIR = os.environ.get("UPLOAD_DIR", "uploads")
UPLOAD_URL_PREFIX = "/uploads"
MAX_UPLOAD_MB = int(os.environ.get("MAX_UPLOAD_MB", "100"))

# Upload field -> (subdirectory, accepted MIME prefix)
UPLOAD_FIELDS = {
    "thumbnail": ("thumbnails", "image/"),
    "video": ("videos", "video/"),
}

STORE_BACKEND = os.environ.get("STORE_BACKEND", "memory").lower()
BCRYPT_ROUNDS = int(os.environ.get("BCRYPT_ROUNDS", "10"))

SEED_DEMO_USERS = os.environ.get("SEED_DEMO_USERS", "true").lower() == "true"
SEED_ADMIN_EMAIL = os.environ.get("SEED_ADMIN_EMAIL", "admin@youngwealth.com")
SEED_ADMIN_PASSWORD = os.environ.get("SEED_ADMIN_PASSWORD", "admin123")
SEED_USER_PASSWORD = os.environ.get("SEED_USER_PASSWORD", "password123")

CORS_ALLOWED_ORIGINS = [
    origin.strip().rstrip("/")
    for origin in os.environ.get("CORS_ALLOWED_ORIGINS", "*").split(",")
    if origin.strip()
]

COURSE_CATEGORIES = ("school", "college", "employee")
COURSE_LEVELS = ("beginner", "intermediate", "advanced")
USER_ROLES = ("school-student", "college-student", "employee", "admin")
SCHOOL_TYPES = ("government", "private")
