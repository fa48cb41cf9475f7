import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except Exception:
        return default


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except Exception:
        return default


class Config:
    # Security
    SECRET_KEY = os.getenv("SECRET_KEY")
    if not SECRET_KEY:
        raise ValueError("No SECRET_KEY set. Please set SECRET_KEY in .env file for JWT security.")

    # Persistence
    MONGO_URI = os.getenv("MONGO_URI")
    STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "json").strip().lower()
    STORAGE_FILE = os.getenv("STORAGE_FILE", "data/offline_store.json")
    STORAGE_COLLECTION = os.getenv("STORAGE_COLLECTION", "OfflineStore")

    # Connectivity
    # Empty probe URL: connectivity is driven only by client-reported events.
    CONNECTIVITY_PROBE_URL = os.getenv("CONNECTIVITY_PROBE_URL", "").strip()
    CONNECTIVITY_PROBE_TIMEOUT = _env_float("CONNECTIVITY_PROBE_TIMEOUT", 3.0)

    # Offline cache
    CACHE_EXPIRY_HOURS = max(1, _env_int("CACHE_EXPIRY_HOURS", 24))

    # Heuristics
    SENTIMENT_WEIGHT = _env_float("SENTIMENT_WEIGHT", 0.2)
    TAMPER_STRICT = _env_bool("TAMPER_STRICT", False)

    # Query log
    QUERY_LOG_LIMIT = max(1, _env_int("QUERY_LOG_LIMIT", 500))

    # Gamification
    POINTS_PER_MESSAGE = max(0, _env_int("POINTS_PER_MESSAGE", 5))
    POINTS_PER_LEVEL = max(1, _env_int("POINTS_PER_LEVEL", 1000))

    # Constants & Keywords
    POSITIVE_WORDS = [
        "good", "great", "excellent", "awesome", "amazing", "love", "happy",
        "thanks", "thank", "helpful", "nice", "perfect", "wonderful",
    ]

    NEGATIVE_WORDS = [
        "bad", "terrible", "awful", "horrible", "hate", "dislike", "wrong",
        "error", "problem", "issue", "broken", "not working", "disappointed",
        "late", "missed", "fail", "poor", "slow", "annoying", "frustrating",
    ]

    SUSPICIOUS_MENU_TERMS = ["poison", "toxic", "dangerous", "harmful"]
