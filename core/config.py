import os

from dotenv import load_dotenv

# .env junto al proyecto o en el directorio actual
load_dotenv()

# ===================== PocketBase =====================
BASE_URL = os.getenv("PB_BASE_URL", "http://127.0.0.1:8090")
IDENTITY = os.getenv("PB_IDENTITY", "")
PASSWORD = os.getenv("PB_PASSWORD", "")
REQUEST_TIMEOUT = float(os.getenv("PB_TIMEOUT", "10"))
PAGE_SIZE = int(os.getenv("PB_PAGE_SIZE", "200"))

# ===================== Export =====================
EXPORT_FORMAT = os.getenv("EXPORT_FORMAT", "text")   # text | xml | json
EXPORT_MODE = os.getenv("EXPORT_MODE", "projects")   # projects | contexts

# ===================== Logging =====================
ENV = os.getenv("ENV", "prod").lower()
LOG_DIR = os.getenv("LOG_DIR", "")
