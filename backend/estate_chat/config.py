# backend/estate_chat/config.py
import os

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "0") -> bool:
    return str(os.getenv(name, default)).strip().lower() in ("1", "true", "yes", "y")


# --- Mode ---
MOCK_OPENAI = _env_flag("MOCK_OPENAI")

# --- External model ---
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "").strip()
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-3.5-turbo").strip()

# --- Interpretation defaults ---
DEFAULT_LOCATION = os.getenv("DEFAULT_LOCATION", "gurugram").strip().lower()
DEFAULT_MAX_PRICE = int(os.getenv("DEFAULT_MAX_PRICE", "5000000"))  # 50 lakh
if DEFAULT_MAX_PRICE < 0:
    raise ValueError(f"DEFAULT_MAX_PRICE must be non-negative, got {DEFAULT_MAX_PRICE}")

# --- Plumbing ---
CHAT_LOG_PATH = os.getenv("CHAT_LOG_PATH", "logs.jsonl")
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
PORT = int(os.getenv("PORT", "5000"))
