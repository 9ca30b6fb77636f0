"""Configuration loaded from environment variables."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env: try package dir then project root
_base = Path(__file__).resolve().parent
for _env_path in (_base / ".env", _base.parent / ".env"):
    if load_dotenv(_env_path):
        break
load_dotenv()  # also allow process env

# API keys – never hardcode
OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
MODEL_NAME: str = os.getenv("MODEL_NAME", "gpt-4o-mini")

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# Cover letter generation (the only I/O boundary)
GENERATION_TIMEOUT_SECONDS: float = float(os.getenv("GENERATION_TIMEOUT_SECONDS", "30"))
GENERATION_MAX_RETRIES: int = int(os.getenv("GENERATION_MAX_RETRIES", "3"))
GENERATION_RETRY_BACKOFF_SECONDS: float = float(os.getenv("GENERATION_RETRY_BACKOFF_SECONDS", "2.0"))
GENERATION_TEMPERATURE: float = float(os.getenv("GENERATION_TEMPERATURE", "0.8"))
GENERATION_MAX_TOKENS: int = int(os.getenv("GENERATION_MAX_TOKENS", "1200"))

# Résumé text shorter than this is reported as insufficient content
MIN_TEXT_LENGTH: int = int(os.getenv("MIN_TEXT_LENGTH", "50"))
MAX_TEXT_CHARS: int = 50000

# Match scoring. Empirical values; tests in matching depend on the defaults.
SKILL_MATCH_THRESHOLD: float = float(os.getenv("SKILL_MATCH_THRESHOLD", "0.70"))
EXPERIENCE_BONUS_PER_YEAR: float = float(os.getenv("EXPERIENCE_BONUS_PER_YEAR", "2"))
EXPERIENCE_BONUS_CAP: float = float(os.getenv("EXPERIENCE_BONUS_CAP", "20"))
TRUTHFULNESS_MARGIN: int = 10

# Record caps per category (earliest entries are kept)
MAX_EXPERIENCE_ENTRIES: int = 5
MAX_EDUCATION_ENTRIES: int = 5
MAX_PROJECT_ENTRIES: int = 8
MAX_CERTIFICATION_ENTRIES: int = 10

# Header / contact scanning windows (line counts)
NAME_SCAN_LINES: int = 10
TITLE_SCAN_LINES: int = 12
LOCATION_SCAN_LINES: int = 15

DEFAULT_PROFESSION: str = "Professional"
DEFAULT_INDUSTRY: str = "General"

# Mime types accepted by the document text extractor
SUPPORTED_MIME_TYPES: dict = {
    "application/pdf": "pdf",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
    "application/msword": "docx",
    "text/plain": "txt",
}
SUPPORTED_EXTENSIONS: dict = {
    ".pdf": "pdf",
    ".docx": "docx",
    ".txt": "txt",
}
