"""
Tamper Engine - structural sanity checks on cached campus data

Checks per data type:
- schedule / bus : "H:MM" times must have hour <= 23 and minute <= 59, for
                   every day list (today, tomorrow, classes)
- cafeteria      : items of every meal list under every day must not contain
                   blacklisted words
- event          : "M/D" dates must have month <= 12 and day <= 31
- faq            : a list of entries with non-empty question and answer text

Fields that do not match the expected pattern are treated as benign, and
unknown data types are not checked at all (fail-open). `inspect` reports
that gap explicitly through `checked=False`; strict mode turns it into a
tamper flag.

Integrity hashes are HMAC-SHA256 over canonical JSON, keyed by SECRET_KEY.
The hash sits next to the payload in the same cache record, so only a key
holder can produce a matching hash for an edited payload.
"""
import hashlib
import hmac
import json
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from campus_assistant.config import Config

_TIME_RE = re.compile(r"(\d+):(\d+)")
_DATE_RE = re.compile(r"(\d+)/(\d+)")

# Lists holding timed entries, per data type
SCHEDULE_LIST_KEYS = ("today", "tomorrow", "classes")
BUS_LIST_KEYS = ("nextBuses",)
EVENT_LIST_KEYS = ("upcoming",)

# Cafeteria keys that hold opening hours rather than a day menu
MENU_INFO_KEYS = ("hours",)

SUPPORTED_TYPES = ("schedule", "bus", "cafeteria", "event", "faq")


@dataclass(frozen=True)
class TamperReport:
    tampered: bool
    checked: bool
    reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"tampered": self.tampered, "checked": self.checked, "reason": self.reason}


# =============================================================================
# FIELD CHECKS
# =============================================================================

def _entries(payload: Any, keys: Iterable[str]) -> List[Any]:
    if not isinstance(payload, dict):
        return []
    entries: List[Any] = []
    for key in keys:
        value = payload.get(key)
        if isinstance(value, list):
            entries.extend(value)
    return entries


def _invalid_time(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    match = _TIME_RE.search(value)
    if not match:
        return False
    hours, minutes = int(match.group(1)), int(match.group(2))
    return hours > 23 or minutes > 59


def _invalid_date(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    match = _DATE_RE.search(value)
    if not match:
        return False
    month, day = int(match.group(1)), int(match.group(2))
    return month > 12 or day > 31


def _check_times(payload: Any, keys: Iterable[str]) -> Optional[str]:
    for entry in _entries(payload, keys):
        if isinstance(entry, dict) and _invalid_time(entry.get("time")):
            return f"invalid time '{entry.get('time')}'"
    return None


def _menu_items(payload: Any) -> List[str]:
    if not isinstance(payload, dict):
        return []
    items: List[str] = []
    for day, meals in payload.items():
        if day in MENU_INFO_KEYS or not isinstance(meals, dict):
            continue
        for dishes in meals.values():
            if isinstance(dishes, str):
                dishes = [dishes]
            if isinstance(dishes, list):
                items.extend(d for d in dishes if isinstance(d, str))
    return items


def _check_menu(payload: Any, blacklist: Iterable[str]) -> Optional[str]:
    terms = [t.lower() for t in blacklist]
    for item in _menu_items(payload):
        lowered = item.lower()
        if any(term in lowered for term in terms):
            return f"suspicious menu item '{item}'"
    return None


def _check_dates(payload: Any) -> Optional[str]:
    for entry in _entries(payload, EVENT_LIST_KEYS):
        if isinstance(entry, dict) and _invalid_date(entry.get("date")):
            return f"invalid date '{entry.get('date')}'"
    return None


def _check_faq(payload: Any) -> Optional[str]:
    if not isinstance(payload, list):
        return "faq payload is not a list"
    for entry in payload:
        if not isinstance(entry, dict):
            return "malformed faq entry"
        question, answer = entry.get("question"), entry.get("answer")
        if not (isinstance(question, str) and question.strip() and isinstance(answer, str) and answer.strip()):
            return f"malformed faq entry '{question}'"
    return None


# =============================================================================
# DETECTOR
# =============================================================================

class TamperDetector:
    def __init__(self, blacklist: Optional[Iterable[str]] = None, strict: bool = False):
        self.blacklist = list(blacklist if blacklist is not None else Config.SUSPICIOUS_MENU_TERMS)
        self.strict = strict

    def inspect(self, data_type: str, payload: Any) -> TamperReport:
        kind = str(data_type or "").strip().lower()
        if kind not in SUPPORTED_TYPES:
            reason = f"unchecked data type '{kind}'"
            return TamperReport(tampered=self.strict, checked=False, reason=reason)

        if kind == "schedule":
            reason = _check_times(payload, SCHEDULE_LIST_KEYS)
        elif kind == "bus":
            reason = _check_times(payload, BUS_LIST_KEYS)
        elif kind == "cafeteria":
            reason = _check_menu(payload, self.blacklist)
        elif kind == "event":
            reason = _check_dates(payload)
        else:
            reason = _check_faq(payload)
        return TamperReport(tampered=reason is not None, checked=True, reason=reason)

    def is_tampered(self, data_type: str, payload: Any) -> bool:
        return self.inspect(data_type, payload).tampered


tamper_detector = TamperDetector(strict=Config.TAMPER_STRICT)


def is_tampered(data_type: str, payload: Any) -> bool:
    return tamper_detector.is_tampered(data_type, payload)


# =============================================================================
# INTEGRITY HASHING
# =============================================================================

def compute_hash(payload: Any, key: Optional[str] = None) -> str:
    canonical = json.dumps(payload, sort_keys=True, ensure_ascii=False, separators=(",", ":"))
    secret = (key if key is not None else Config.SECRET_KEY).encode("utf-8")
    return hmac.new(secret, canonical.encode("utf-8"), hashlib.sha256).hexdigest()


def verify(payload: Any, expected_hash: str, key: Optional[str] = None) -> bool:
    if not expected_hash:
        return False
    return hmac.compare_digest(compute_hash(payload, key), expected_hash)
