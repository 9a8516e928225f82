import os
import secrets
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent

# A fresh key per process means a restart logs everybody out.
SECRET_KEY = os.getenv("TWEETER_SECRET_KEY") or secrets.token_hex(32)
DB_PATH = Path(os.getenv("TWEETER_DB_PATH", BASE_DIR / "tweeter.db"))
HOST = os.getenv("TWEETER_HOST", "127.0.0.1")
PORT = int(os.getenv("TWEETER_PORT", "1447"))
ADMIN_PASSWORD = os.getenv("TWEETER_ADMIN_PASSWORD", "pepegaman123")
LOG_LEVEL = os.getenv("TWEETER_LOG_LEVEL", "INFO")

TIME_FORMAT = "%b %-d, %Y %-I:%M:%S"
