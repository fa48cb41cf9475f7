"""
Logging - application logger and PII masking for audit lines

User text (chat queries, audit details) passes through `anonymize_text`
before it is logged or kept in the query log.
"""
import logging
import re
from typing import List, Pattern, Tuple

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger("Campus_Assistant")

# Applied in order; earlier replacements are not re-matched by later patterns
PATTERNS: List[Tuple[str, Pattern, str]] = [
    ("BEARER", re.compile(r'\bBearer\s+[A-Za-z0-9_\-]+\.[A-Za-z0-9_\-]+\.[A-Za-z0-9_\-]+'), 'Bearer [TOKEN]'),
    ("EMAIL", re.compile(r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b'), '[EMAIL]'),
    ("PHONE", re.compile(r'(?<![\d.:])\b\d{3}[-.\s]\d{3}[-.\s]?\d{4}\b'), '[PHONE]'),
    # Digits right after '.' or ':' belong to times and decimals, not IDs
    ("STUDENT_NUMBER", re.compile(r'(?<![\d.:])\b\d{5,10}\b'), '[STUDENT_ID]'),
]


def anonymize_text(text) -> str:
    """Mask tokens, emails, phone numbers and student ids."""
    if text is None:
        return ""
    if not isinstance(text, str):
        text = str(text)
    for _name, pattern, replacement in PATTERNS:
        text = pattern.sub(replacement, text)
    return text


def log_audit(action: str, user: str, details: str = ""):
    logger.info(f"AUDIT | Action: {action} | User: {anonymize_text(user)} | Details: {anonymize_text(details)}")


def get_logger():
    return logger
