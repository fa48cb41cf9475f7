"""
Intent Engine - keyword intent extraction for the campus chat

Small-talk patterns are anchored regexes checked first; topic intents are
substring rules checked in order, falling back to "general".
"""
import re
from typing import Dict, List, Optional

SMALL_TALK_PATTERNS = {
    "greeting": re.compile(r"^(hi|hello|hey|greetings|good\s(morning|afternoon|evening)|howdy)\b", re.I),
    "thanks": re.compile(r"^(thanks|thank\syou|thx|appreciate\sit|cheers)\b", re.I),
    "goodbye": re.compile(r"^(bye|goodbye|see\syou|farewell|take\scare|cya)\b", re.I),
}

# Order matters: first rule with a matching keyword wins
TOPIC_RULES = [
    ("schedule", ("schedule", "class")),
    ("bus", ("bus", "shuttle")),
    ("cafeteria", ("cafeteria", "food", "menu")),
    ("event", ("event", "happening")),
    ("location", ("where", "location", "find")),
]

TIME_PATTERNS = [
    ("today", re.compile(r"\b(today|now|current)\b")),
    ("tomorrow", re.compile(r"\b(tomorrow|next day)\b")),
    ("week", re.compile(r"\bweek\b")),
    ("month", re.compile(r"\bmonth\b")),
]

DEFAULT_SUGGESTIONS = [
    "What's my class schedule?",
    "When is the next bus?",
    "What's on the cafeteria menu today?",
    "Any events happening today?",
    "Where is the library?",
]

FOLLOW_UPS: Dict[str, List[str]] = {
    "schedule": ["Show tomorrow's schedule", "When is my next class?", "Show all classes"],
    "bus": ["Show full bus schedule", "Bus to downtown", "Bus to campus"],
    "cafeteria": ["Show tomorrow's menu", "What's for lunch?", "Show dinner options"],
    "event": ["Show all events", "Upcoming workshops", "Event registration"],
    "location": ["Show campus map", "Directions to library", "Find building"],
}


def extract_intent(text: str) -> str:
    lowered = (text or "").lower().strip()
    if not lowered:
        return "general"
    for intent, pattern in SMALL_TALK_PATTERNS.items():
        if pattern.search(lowered):
            return intent
    for intent, keywords in TOPIC_RULES:
        if any(keyword in lowered for keyword in keywords):
            return intent
    return "general"


def extract_time_reference(text: str) -> Optional[str]:
    lowered = (text or "").lower()
    for label, pattern in TIME_PATTERNS:
        if pattern.search(lowered):
            return label
    return None


def follow_up_suggestions(intent: str) -> List[str]:
    return list(FOLLOW_UPS.get(intent, ["Show schedule", "Bus timings", "Cafeteria menu", "Campus events", "Find location"]))
