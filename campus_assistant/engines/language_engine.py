"""
Language Engine - reply language for the campus chat
Supported: English (en), Sinhala (si), Tamil (ta)

The client may pick a language explicitly; otherwise it is detected from the
script of the message text.
"""
from typing import Dict, Optional

SUPPORTED_LANGUAGES = ("en", "si", "ta")
DEFAULT_LANGUAGE = "en"

# Unicode blocks
SINHALA_RANGE = (0x0D80, 0x0DFF)
TAMIL_RANGE = (0x0B80, 0x0BFF)

PHRASES: Dict[str, Dict[str, str]] = {
    'welcome': {
        'en': "Hello! I'm your campus assistant. How can I help you today?",
        'si': "ආයුබෝවන්! මම ඔබේ පරිසර සහායකයායි. මට ඔබට කෙසේ උදව් කළ හැකිද?",
        'ta': "வணக்கம்! நான் உங்கள் வளாக உதவியாளர். இன்று உங்களுக்கு எப்படி உதவ முடியும்?",
    },
    'offline': {
        'en': "You're currently offline. I'll use cached data, but some features may be limited.",
        'si': "ඔබ දැනට අන්තර්ජාලයට සම්බන්ධ නැත. මම කෑෂ් කළ දත්ත භාවිතා කරන්නම්, නමුත් සමහර විශේෂාංග සීමිත විය හැකිය.",
        'ta': "நீங்கள் தற்போது ஆஃப்லைனில் உள்ளீர்கள். நான் கேஷ் செய்யப்பட்ட தரவைப் பயன்படுத்த முயற்சிப்பேன், ஆனால் சில அம்சங்கள் கட்டுப்படுத்தப்படலாம்.",
    },
    'error': {
        'en': "Sorry, I encountered an error. Please try again.",
        'si': "සමාවෙන්න, මට දෝෂයක් ඇති විය. කරුණාකර නැවත උත්සාහ කරන්න.",
        'ta': "மன்னிக்கவும், நான் ஒரு பிழையை சந்தித்தேன். தயவுசெய்து மீண்டும் முயற்சிக்கவும்.",
    },
    'schedule': {
        'en': "Here's your class schedule for {day}",
        'si': "මෙන්න ඔබේ පන්ති කාලසටහන ({day})",
        'ta': "இதோ உங்கள் வகுப்பு அட்டவணை ({day})",
    },
    'bus': {
        'en': "Here are the next buses",
        'si': "මෙන්න ඉදිරි බස් කාලසටහන්",
        'ta': "இதோ வரவிருக்கும் பேருந்து அட்டவணைகள்",
    },
    'menu_today': {
        'en': "Today's cafeteria menu",
        'si': "අද ආහාරශාලා මෙනුව",
        'ta': "இன்றைய உணவக மெனு",
    },
    'menu_tomorrow': {
        'en': "Tomorrow's cafeteria menu",
        'si': "හෙට ආහාරශාලා මෙනුව",
        'ta': "நாளைய உணவக மெனு",
    },
    'events': {
        'en': "Upcoming events",
        'si': "ඉදිරි සිදුවීම්",
        'ta': "வரவிருக்கும் நிகழ்வுகள்",
    },
    'today': {'en': "today", 'si': "අද", 'ta': "இன்று"},
    'tomorrow': {'en': "tomorrow", 'si': "හෙට", 'ta': "நாளை"},
}


def normalize_language(language: Optional[str]) -> Optional[str]:
    """Lower-cased supported code, or None when missing or unsupported."""
    code = str(language or "").strip().lower()[:2]
    return code if code in SUPPORTED_LANGUAGES else None


def detect_language(text: str) -> str:
    """Pick the language whose script dominates the text (English by default)."""
    sinhala = tamil = latin = 0
    for char in text or "":
        code = ord(char)
        if SINHALA_RANGE[0] <= code <= SINHALA_RANGE[1]:
            sinhala += 1
        elif TAMIL_RANGE[0] <= code <= TAMIL_RANGE[1]:
            tamil += 1
        elif char.isalpha() and code < 128:
            latin += 1

    if sinhala > tamil and sinhala > latin * 0.3:
        return 'si'
    if tamil > sinhala and tamil > latin * 0.3:
        return 'ta'
    return DEFAULT_LANGUAGE


def translate(key: str, language: Optional[str] = DEFAULT_LANGUAGE, **kwargs) -> str:
    """Phrase for `key` in `language`, falling back to English, then to the key itself."""
    phrases = PHRASES.get(key)
    if not phrases:
        return key
    text = phrases.get(normalize_language(language) or DEFAULT_LANGUAGE) or phrases[DEFAULT_LANGUAGE]
    return text.format(**kwargs) if kwargs else text
