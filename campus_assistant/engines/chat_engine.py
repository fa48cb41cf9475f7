"""
Chat Engine - campus assistant message pipeline

1. Classify the user's message (sentiment) and detect intent
2. Answer from the offline cache, refusing to present data that fails the
   tamper check
3. Award message points and log the query with its sentiment score
"""
import random
import time
from typing import Any, Dict, List, Optional, Tuple

from campus_assistant.core.query_log import QueryLogStore
from campus_assistant.core.storage import KeyValueStore
from campus_assistant.engines.gamification_engine import POINTS_PER_LEVEL, GamificationTracker
from campus_assistant.engines.intent_engine import extract_intent, extract_time_reference, follow_up_suggestions
from campus_assistant.engines.language_engine import detect_language, normalize_language, translate
from campus_assistant.engines.offline_cache_engine import OfflineCacheManager
from campus_assistant.engines.sentiment_engine import SentimentClassifier, sentiment_classifier
from campus_assistant.schemas import Message
from campus_assistant.utils.logging_utils import get_logger, log_audit

logger = get_logger()

GREETING_RESPONSES = [
    "Hello! How can I help you today?",
    "Hi there! What can I do for you?",
    "Hello! I'm your campus assistant. What would you like to know?",
]

THANK_YOU_RESPONSES = [
    "You're welcome! Is there anything else I can help you with?",
    "Happy to help! Let me know if you need anything else.",
    "Glad I could help! What else would you like to know?",
]

GOODBYE_RESPONSES = [
    "Goodbye! Have a great day!",
    "See you later! Take care!",
    "Bye! Come back if you need anything else!",
]

OFFLINE_NOTICE = translate("offline", "en")

TAMPER_WARNING = (
    "The cached {category} data failed an integrity check, so I can't show it right now. "
    "Please try again after the next sync."
)

LOCATION_RESPONSE = (
    "I can help you find locations on campus. Would you like to see the campus map "
    "or get directions to a specific place?"
)

FALLBACK_RESPONSE = (
    "I'm not sure I understand. Could you please rephrase your question or try asking about:\n"
    "- Class schedules\n"
    "- Bus routes\n"
    "- Cafeteria menu\n"
    "- Campus events\n"
    "- Location directions"
)

INTENT_CATEGORY = {
    "schedule": "schedule",
    "bus": "bus",
    "cafeteria": "cafeteria",
    "event": "event",
    "general": "faq",
}


# =============================================================================
# FORMATTERS
# =============================================================================

def format_schedule(payload: Dict[str, Any], time_ref: Optional[str], language: str = "en") -> str:
    day = "tomorrow" if time_ref == "tomorrow" else "today"
    classes = payload.get(day)
    if classes is None and day == "today":
        classes = payload.get("classes")
    classes = [c for c in (classes or []) if isinstance(c, dict)]
    if not classes:
        return "No classes scheduled for this time period."
    lines = "\n".join(f"- {c.get('time', '?')}: {c.get('name', '?')} ({c.get('location', '?')})" for c in classes)
    header = translate("schedule", language, day=translate(day, language))
    return f"{header}:\n\n{lines}"


def format_bus(payload: Dict[str, Any], language: str = "en") -> str:
    buses = [b for b in (payload.get("nextBuses") or []) if isinstance(b, dict)][:5]
    if not buses:
        routes = payload.get("routes") or []
        if not routes:
            return "I couldn't find any bus schedules for the requested time."
        lines = "\n".join(f"- {r.get('name', '?')}: {r.get('description', '')}" for r in routes if isinstance(r, dict))
        return f"I couldn't find any upcoming buses. Here are the main routes:\n\n{lines}"
    lines = "\n".join(f"- {b.get('time', '?')}: {b.get('route', '?')} to {b.get('destination', '?')}" for b in buses)
    return f"{translate('bus', language)}:\n\n{lines}"


def format_menu(payload: Dict[str, Any], time_ref: Optional[str], language: str = "en") -> str:
    day = "tomorrow" if time_ref == "tomorrow" else "today"
    menu = payload.get(day)
    if not isinstance(menu, dict) or not menu:
        return "Menu information is not available for the requested time."
    meals = []
    for meal, items in menu.items():
        shown = ", ".join(str(i) for i in items) if isinstance(items, list) else str(items)
        meals.append(f"{meal}: {shown}")
    return f"{translate('menu_' + day, language)}:\n\n" + "\n\n".join(meals)


def format_events(payload: Dict[str, Any], language: str = "en") -> str:
    events = [e for e in (payload.get("upcoming") or []) if isinstance(e, dict)]
    if not events:
        return "No upcoming events found for the requested time."
    blocks = [
        f"- {e.get('name', '?')} ({e.get('date', '?')} at {e.get('time', '?')})\n  Location: {e.get('location', '?')}"
        for e in events
    ]
    return f"{translate('events', language)}:\n\n" + "\n\n".join(blocks)


def match_faq(payload: Any, text: str) -> Optional[str]:
    lowered = (text or "").lower()
    for faq in payload or []:
        if not isinstance(faq, dict):
            continue
        question = str(faq.get("question") or "").lower().rstrip("?").strip()
        if question and question in lowered:
            return str(faq.get("answer") or "")
    return None


# =============================================================================
# ENGINE
# =============================================================================

class ChatEngine:
    def __init__(
        self,
        cache: OfflineCacheManager,
        store: KeyValueStore,
        query_log: QueryLogStore,
        classifier: Optional[SentimentClassifier] = None,
        points_per_message: int = 5,
        points_per_level: int = POINTS_PER_LEVEL,
    ):
        self.cache = cache
        self.store = store
        self.query_log = query_log
        self.classifier = classifier or sentiment_classifier
        self.points_per_message = points_per_message
        self.points_per_level = points_per_level

    def tracker_for(self, user_key: str) -> GamificationTracker:
        return GamificationTracker(self.store, user_key=user_key, points_per_level=self.points_per_level)

    async def _answer(self, intent: str, text: str, time_ref: Optional[str], language: str = "en") -> Tuple[str, bool]:
        if intent == "greeting":
            return random.choice(GREETING_RESPONSES), False
        if intent == "thanks":
            return random.choice(THANK_YOU_RESPONSES), False
        if intent == "goodbye":
            return random.choice(GOODBYE_RESPONSES), False
        if intent == "location":
            return LOCATION_RESPONSE, False

        category = INTENT_CATEGORY.get(intent, "faq")
        entry = await self.cache.get_cached(category)
        if entry is None:
            if category == "faq":
                return FALLBACK_RESPONSE, False
            if not self.cache.is_online:
                return "I'm having trouble accessing that data while offline. Please try again when you're back online.", False
            return f"I don't have any {category} information yet. Please try again after the next sync.", False

        if entry.tampered:
            log_audit("tamper_detected", "system", f"category={category}")
            return TAMPER_WARNING.format(category=category), True

        payload = entry.payload
        if category == "schedule":
            return format_schedule(payload, time_ref, language), False
        if category == "bus":
            return format_bus(payload, language), False
        if category == "cafeteria":
            return format_menu(payload, time_ref, language), False
        if category == "event":
            return format_events(payload, language), False
        return match_faq(payload, text) or FALLBACK_RESPONSE, False

    async def handle_message(self, text: str, user_key: str = "guest", language: Optional[str] = None) -> Dict[str, Any]:
        if not text or not text.strip():
            raise ValueError("message must not be empty")
        language = normalize_language(language) or detect_language(text)

        started = time.perf_counter()
        user_message = Message(text=text, is_user=True, sentiment=self.classifier.classify(text))

        intent = extract_intent(text)
        time_ref = extract_time_reference(text)
        reply_text, tampered = await self._answer(intent, text, time_ref, language)
        if not self.cache.is_online:
            reply_text = f"{translate('offline', language)}\n\n{reply_text}"

        reply = Message(
            text=reply_text,
            is_user=False,
            sentiment=self.classifier.classify(reply_text),
            is_tampered=tampered,
        )

        progress = await self.tracker_for(user_key).award(self.points_per_message)

        elapsed_ms = (time.perf_counter() - started) * 1000
        self.query_log.add(text, self.classifier.score(text), elapsed_ms)

        suggestions: List[str] = follow_up_suggestions(intent)
        return {
            "user_message": user_message.model_dump(mode="json", by_alias=True),
            "reply": reply.model_dump(mode="json", by_alias=True),
            "intent": intent,
            "language": language,
            "suggestions": suggestions,
            "gamification": progress.to_dict(),
            "connectivity": self.cache.status().to_dict(),
        }
